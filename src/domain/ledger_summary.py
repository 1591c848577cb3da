"""Ledger Summary Value Objects

Derived, never persisted. A LedgerSummary records the resolved balance of
one customer together with the path that produced it.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, computed_field
from src.domain.base import utc_now


class LedgerResolution(BaseModel):
    """Balance taken from the latest ledger entry's running balance"""

    path: Literal["ledger"] = "ledger"
    entry_id: str
    entry_date: date
    balance: Decimal


class InvoiceResolution(BaseModel):
    """Balance aggregated from outstanding invoices (no ledger entries yet)"""

    path: Literal["invoices"] = "invoices"
    invoice_total: Decimal


class OpeningBalanceResolution(BaseModel):
    """Historical balance dated before the customer's first ledger entry"""

    path: Literal["opening_balance"] = "opening_balance"


BalanceResolution = Annotated[
    Union[LedgerResolution, InvoiceResolution, OpeningBalanceResolution],
    Field(discriminator="path"),
]


def compute_available_credit(credit_limit: Decimal, current_balance: Decimal) -> Optional[Decimal]:
    """
    Remaining credit headroom

    Returns None when credit_limit is 0 (unlimited). Never negative.
    """
    if credit_limit <= 0:
        return None
    return max(Decimal("0"), credit_limit - abs(current_balance))


class LedgerSummary(BaseModel):
    """
    Resolved balance of a customer

    current_balance is signed: positive means the customer owes the business.
    available_credit is None when the customer has unlimited credit.
    """

    customer_id: str = Field(..., description="Customer identifier")
    company_id: str = Field(..., description="Company (tenant) identifier")
    opening_balance: Decimal = Field(..., description="Signed opening balance")
    current_balance: Decimal = Field(..., description="Signed current balance")
    credit_limit: Decimal = Field(..., description="Credit limit (0 = unlimited)")
    available_credit: Optional[Decimal] = Field(
        default=None,
        description="Remaining headroom (None = unlimited)"
    )
    source: BalanceResolution = Field(..., description="How the balance was resolved")
    as_of: Optional[date] = Field(
        default=None,
        description="Point-in-time date for historical queries (None = current)"
    )
    resolved_at: datetime = Field(
        default_factory=utc_now,
        description="When the balance was computed"
    )

    @computed_field
    @property
    def unlimited_credit(self) -> bool:
        return self.credit_limit <= 0

    @classmethod
    def build(
        cls,
        customer_id: str,
        company_id: str,
        opening_balance: Decimal,
        current_balance: Decimal,
        credit_limit: Decimal,
        source: Union[LedgerResolution, InvoiceResolution, OpeningBalanceResolution],
        as_of: Optional[date] = None,
    ) -> "LedgerSummary":
        return cls(
            customer_id=customer_id,
            company_id=company_id,
            opening_balance=opening_balance,
            current_balance=current_balance,
            credit_limit=credit_limit,
            available_credit=compute_available_credit(credit_limit, current_balance),
            source=source,
            as_of=as_of,
        )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "customer_id": "5b0d3a52-9f0e-4d55-9a55-0d5c1f4c2f11",
                "company_id": "company_abc123",
                "opening_balance": "200.00",
                "current_balance": "800.00",
                "credit_limit": "1000.00",
                "available_credit": "200.00",
                "source": {"path": "invoices", "invoice_total": "600.00"},
                "as_of": None,
                "resolved_at": "2024-03-01T10:00:00Z"
            }
        }
