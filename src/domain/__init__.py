from .base import BaseModel, generate_uuid, utc_now
from .customer import Customer, CustomerStatus, BalanceType
from .ledger_entry import CustomerLedgerEntry, LedgerEntryType
from .sales_document import SalesDocument, DocumentType, DocumentStatus, PaymentStatus
from .ledger_summary import (
    LedgerSummary,
    LedgerResolution,
    InvoiceResolution,
    OpeningBalanceResolution,
    compute_available_credit,
)
from .credit import CreditStatus, classify_credit

__all__ = [
    "BaseModel",
    "generate_uuid",
    "utc_now",
    "Customer",
    "CustomerStatus",
    "BalanceType",
    "CustomerLedgerEntry",
    "LedgerEntryType",
    "SalesDocument",
    "DocumentType",
    "DocumentStatus",
    "PaymentStatus",
    "LedgerSummary",
    "LedgerResolution",
    "InvoiceResolution",
    "OpeningBalanceResolution",
    "compute_available_credit",
    "CreditStatus",
    "classify_credit",
]
