"""Customer Ledger Entry Domain Entity

Append-only log of balance-affecting events for a customer. Each entry
carries the running balance after the event.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, Numeric, String
from src.domain.base import BaseModel, generate_uuid, utc_now


class LedgerEntryType(str, Enum):
    """Kinds of events posted to the customer ledger"""
    OPENING_BALANCE = "opening_balance"
    INVOICE = "invoice"
    PAYMENT = "payment"
    ADVANCE_PAYMENT = "advance_payment"
    PAYMENT_ALLOCATION = "payment_allocation"
    CREDIT_NOTE = "credit_note"
    SALES_RETURN = "sales_return"
    ADJUSTMENT = "adjustment"


SALES_ENTRY_TYPES = (LedgerEntryType.INVOICE, LedgerEntryType.OPENING_BALANCE)

PAYMENT_ENTRY_TYPES = (
    LedgerEntryType.PAYMENT,
    LedgerEntryType.ADVANCE_PAYMENT,
    LedgerEntryType.PAYMENT_ALLOCATION,
)


class CustomerLedgerEntry(BaseModel, table=True):
    """
    Customer Ledger Entry - Immutable record of a balance change

    Domain Rules:
    - Entries are never updated; corrections are compensating entries
    - Ordered by (entry_date, created_at) ascending:
      balance[i] = balance[i-1] + debit_amount[i] - credit_amount[i]
    - The balance before the first entry is the customer's signed opening
      balance, unless the first entry is itself an opening_balance entry
    - Written by the sales/payment subsystems, read-only for the balance engine
    """

    __tablename__ = "customer_ledger_entries"
    __table_args__ = (
        CheckConstraint('debit_amount >= 0', name='debit_amount_non_negative'),
        CheckConstraint('credit_amount >= 0', name='credit_amount_non_negative'),
        Index(
            'ix_customer_ledger_entries_latest',
            'company_id', 'customer_id', 'entry_date', 'created_at',
        ),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique entry identifier (UUID)"
    )

    customer_id: str = Field(
        index=True,
        description="Customer the entry belongs to"
    )

    company_id: str = Field(
        description="Company (tenant) scope"
    )

    entry_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Accounting date of the event"
    )

    entry_type: LedgerEntryType = Field(
        description="Type of event (invoice, payment, credit_note, ...)"
    )

    reference_type: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Type of source document (e.g., 'invoice', 'payment')"
    )

    reference_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="ID of the source document"
    )

    reference_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Human-readable source document number"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Free-text narration"
    )

    debit_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Amount increasing what the customer owes"
    )

    credit_amount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Amount decreasing what the customer owes"
    )

    balance: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Signed running balance after this entry"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Insertion timestamp (tiebreaker for same-date entries)"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "0f4c8f1e-2b9d-4a3e-8d7a-6c1b2e3f4a5b",
                "customer_id": "5b0d3a52-9f0e-4d55-9a55-0d5c1f4c2f11",
                "company_id": "company_abc123",
                "entry_date": "2024-02-01",
                "entry_type": "payment",
                "reference_type": "payment",
                "reference_id": "pay_001",
                "reference_number": "PAY-0001",
                "description": "Payment received - PAY-0001",
                "debit_amount": "0.00",
                "credit_amount": "400.00",
                "balance": "800.00",
                "created_at": "2024-02-01T10:00:00Z"
            }
        }
