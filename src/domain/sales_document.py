"""Sales Document Domain Entity

Narrow projection of the sales subsystem's documents (invoices, quotations,
orders, ...). The balance engine only reads invoices, and only when a
customer has no ledger entries yet.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, Numeric, String
from src.domain.base import BaseModel, generate_uuid, utc_now


class DocumentType(str, Enum):
    """Sales document types"""
    INVOICE = "invoice"
    QUOTATION = "quotation"
    SALES_ORDER = "sales_order"
    DELIVERY_CHALLAN = "delivery_challan"
    CREDIT_NOTE = "credit_note"


class DocumentStatus(str, Enum):
    """Sales document status types"""
    DRAFT = "draft"
    ISSUED = "issued"
    CANCELLED = "cancelled"
    VOID = "void"


class PaymentStatus(str, Enum):
    """Payment progress of an invoice"""
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


# Documents in these states never contribute to a customer's balance
NON_POSTING_STATUSES = (
    DocumentStatus.DRAFT,
    DocumentStatus.CANCELLED,
    DocumentStatus.VOID,
)


class SalesDocument(BaseModel, table=True):
    """
    Sales Document - Invoice and related sales paperwork

    Domain Rules:
    - balance_amount, when present, is the authoritative outstanding amount
    - Otherwise outstanding = total_amount - paid_amount
    - Missing numeric values count as zero (legacy rows may be partial)
    - Draft, cancelled and void documents do not affect balances
    """

    __tablename__ = "sales_documents"
    __table_args__ = (
        Index('ix_sales_documents_customer', 'company_id', 'customer_id', 'document_type'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique document identifier (UUID)"
    )

    company_id: str = Field(
        description="Company (tenant) scope"
    )

    customer_id: str = Field(
        index=True,
        description="Customer the document was issued to"
    )

    document_type: DocumentType = Field(
        description="Document type (invoice, quotation, sales_order, ...)"
    )

    document_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Document number (e.g., INV-2024-0001)"
    )

    document_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Document date"
    )

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Payment due date"
    )

    status: DocumentStatus = Field(
        default=DocumentStatus.ISSUED,
        description="Document status (draft, issued, cancelled, void)"
    )

    payment_status: PaymentStatus = Field(
        default=PaymentStatus.UNPAID,
        description="Payment status (unpaid, partial, paid)"
    )

    total_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Grand total including tax"
    )

    paid_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Amount received against the document"
    )

    balance_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(18, 2), nullable=True),
        description="Outstanding amount (authoritative when not null)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Document creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last update timestamp"
    )

    @property
    def outstanding_amount(self) -> Decimal:
        if self.balance_amount is not None:
            return Decimal(self.balance_amount)
        return Decimal(self.total_amount or 0) - Decimal(self.paid_amount or 0)

    @property
    def settled_amount(self) -> Decimal:
        """Portion of the total no longer owed (payments, adjustments)"""
        return Decimal(self.total_amount or 0) - self.outstanding_amount

    @property
    def counts_toward_balance(self) -> bool:
        return (
            self.document_type == DocumentType.INVOICE
            and self.status not in NON_POSTING_STATUSES
        )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "9a1b2c3d-4e5f-6789-abcd-ef0123456789",
                "company_id": "company_abc123",
                "customer_id": "5b0d3a52-9f0e-4d55-9a55-0d5c1f4c2f11",
                "document_type": "invoice",
                "document_number": "INV-2024-0001",
                "document_date": "2024-01-15",
                "due_date": "2024-02-14",
                "status": "issued",
                "payment_status": "partial",
                "total_amount": "1000.00",
                "paid_amount": "400.00",
                "balance_amount": None,
                "created_at": "2024-01-15T09:30:00Z",
                "updated_at": "2024-01-20T14:00:00Z"
            }
        }
