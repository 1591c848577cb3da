from .customer_repository import SqlAlchemyCustomerRepository
from .ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from .sales_document_repository import SqlAlchemySalesDocumentRepository

__all__ = [
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyLedgerEntryRepository",
    "SqlAlchemySalesDocumentRepository",
]
