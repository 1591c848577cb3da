from .errors import StoreUnavailableError
from .customer_repository import CustomerRepository
from .ledger_entry_repository import LedgerEntryRepository
from .sales_document_repository import SalesDocumentRepository

__all__ = [
    "StoreUnavailableError",
    "CustomerRepository",
    "LedgerEntryRepository",
    "SalesDocumentRepository",
]
