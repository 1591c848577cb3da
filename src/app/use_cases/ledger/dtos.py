"""Data Transfer Objects for Ledger Use Cases

Pydantic models for query inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from libs.result import Result, Return
from src.domain.credit import CreditStatus
from src.domain.ledger_entry import LedgerEntryType
from src.domain.ledger_summary import LedgerSummary
from .errors import invalid_filter


class LedgerFilters(BaseModel):
    """
    Query filters for balance and statement lookups

    A filter with any date bound is a historical (point-in-time) query
    and is never served from or written to the balance cache.
    """

    date_from: Optional[date] = Field(
        default=None,
        description="Inclusive lower bound for statement rows"
    )

    date_to: Optional[date] = Field(
        default=None,
        description="Inclusive upper bound; the balance is resolved as of this date"
    )

    transaction_type: Optional[LedgerEntryType] = Field(
        default=None,
        description="Restrict statement rows to one entry type (rows only, not totals)"
    )

    @property
    def is_empty(self) -> bool:
        return self.date_from is None and self.date_to is None

    def range_error(self) -> Optional[str]:
        if self.date_from and self.date_to and self.date_from > self.date_to:
            return f"date_from ({self.date_from}) is after date_to ({self.date_to})"
        return None


def _parse_date(name: str, value: Optional[str]) -> Optional[date]:
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{name} must be an ISO date (YYYY-MM-DD), got {value!r}") from None


def parse_filters(
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    transaction_type: Optional[str] = None,
) -> Result[LedgerFilters]:
    """
    Build LedgerFilters from raw query-string values

    Returns:
        Result[LedgerFilters]: INVALID_FILTER on malformed dates, an unknown
        transaction type, or an inverted range
    """
    try:
        filters = LedgerFilters(
            date_from=_parse_date("date_from", date_from),
            date_to=_parse_date("date_to", date_to),
        )
    except ValueError as e:
        return Return.err(invalid_filter(str(e)))

    if transaction_type:
        try:
            filters.transaction_type = LedgerEntryType(transaction_type)
        except ValueError:
            return Return.err(invalid_filter(f"Unknown transaction_type {transaction_type!r}"))

    error = filters.range_error()
    if error:
        return Return.err(invalid_filter(error))
    return Return.ok(filters)


class CreditInfoDTO(BaseModel):
    """
    Response DTO for credit info

    Returned by GetCreditInfo use case.
    """

    customer_id: str = Field(..., description="Customer identifier")
    company_id: str = Field(..., description="Company identifier")
    credit_limit: Decimal = Field(..., description="Credit limit (0 = unlimited)")
    outstanding_balance: Decimal = Field(..., description="Signed current balance")
    available_credit: Optional[Decimal] = Field(
        default=None,
        description="Remaining headroom (None = unlimited)"
    )
    credit_status: CreditStatus = Field(..., description="unlimited | available | limited | exceeded")
    can_create_invoice: bool = Field(..., description="False only when the limit is exceeded")
    utilization_percent: Optional[Decimal] = Field(
        default=None,
        description="Exposure as a percentage of the limit (None = unlimited)"
    )
    warning: bool = Field(..., description="True when status is limited or exceeded")
    balance_source: str = Field(..., description="ledger | invoices | opening_balance")

    class Config:
        json_schema_extra = {
            "example": {
                "customer_id": "5b0d3a52-9f0e-4d55-9a55-0d5c1f4c2f11",
                "company_id": "company_abc123",
                "credit_limit": "1000.00",
                "outstanding_balance": "850.00",
                "available_credit": "150.00",
                "credit_status": "limited",
                "can_create_invoice": True,
                "utilization_percent": "85.00",
                "warning": True,
                "balance_source": "ledger"
            }
        }


class LedgerTransactionDTO(BaseModel):
    """Single row of a customer ledger statement"""

    id: str = Field(..., description="Ledger entry or document identifier")
    entry_date: date = Field(..., description="Entry or document date")
    type: str = Field(..., description="Entry type (invoice, payment, ...)")
    document_number: Optional[str] = Field(default=None, description="Source document number")
    description: Optional[str] = Field(default=None, description="Narration")
    debit: Decimal = Field(..., description="Amount added to what the customer owes")
    credit: Decimal = Field(..., description="Amount deducted from what the customer owes")
    balance: Decimal = Field(..., description="Running balance after this row")
    reference_type: Optional[str] = Field(default=None, description="Source document type")
    reference_id: Optional[str] = Field(default=None, description="Source document id")


class CustomerLedgerDTO(BaseModel):
    """
    Response DTO for a customer ledger statement

    Returned by GetCustomerLedger use case. Transactions are newest first.
    """

    customer_id: str = Field(..., description="Customer identifier")
    company_id: str = Field(..., description="Company identifier")
    transactions: List[LedgerTransactionDTO] = Field(..., description="Statement rows, newest first")
    total_sales: Decimal = Field(..., description="Invoice and opening-balance debits in the window")
    total_payments: Decimal = Field(..., description="Payment credits in the window")
    summary: LedgerSummary = Field(..., description="Resolved balance for the same window")


class EntryDiscrepancyDTO(BaseModel):
    """Ledger entry whose stored running balance breaks the chain"""

    entry_id: str = Field(..., description="Ledger entry identifier")
    entry_date: date = Field(..., description="Entry date")
    recorded_balance: Decimal = Field(..., description="Balance stored on the entry")
    expected_balance: Decimal = Field(..., description="Previous balance + debit - credit")
    difference: Decimal = Field(..., description="recorded - expected")


class LedgerVerificationDTO(BaseModel):
    """
    Response DTO for ledger verification

    Returned by VerifyCustomerLedger use case.
    """

    customer_id: str = Field(..., description="Customer identifier")
    company_id: str = Field(..., description="Company identifier")
    entries_checked: int = Field(..., description="Number of entries walked")
    discrepancies_found: int = Field(..., description="Number of broken links")
    discrepancies: List[EntryDiscrepancyDTO] = Field(..., description="Broken links, oldest first")
    is_consistent: bool = Field(..., description="True when no discrepancy was found")
    verified_at: datetime = Field(..., description="Verification timestamp")
    execution_time_ms: int = Field(..., description="Verification duration")
