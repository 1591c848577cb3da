"""Customer ledger and balance use cases"""
from .aggregate_invoices import InvoiceAggregator
from .resolve_balance import ResolveBalance
from .get_credit_info import GetCreditInfo
from .get_customer_ledger import GetCustomerLedger
from .verify_ledger import VerifyCustomerLedger
from .invalidate_balance import InvalidateBalance, InvalidateAllBalances
from .dtos import (
    LedgerFilters,
    parse_filters,
    CreditInfoDTO,
    LedgerTransactionDTO,
    CustomerLedgerDTO,
    EntryDiscrepancyDTO,
    LedgerVerificationDTO,
)

__all__ = [
    "InvoiceAggregator",
    "ResolveBalance",
    "GetCreditInfo",
    "GetCustomerLedger",
    "VerifyCustomerLedger",
    "InvalidateBalance",
    "InvalidateAllBalances",
    "LedgerFilters",
    "parse_filters",
    "CreditInfoDTO",
    "LedgerTransactionDTO",
    "CustomerLedgerDTO",
    "EntryDiscrepancyDTO",
    "LedgerVerificationDTO",
]
