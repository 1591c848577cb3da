"""Get Customer Ledger Use Case

Builds a customer statement: transaction rows plus totals, alongside the
resolved balance for the same window.
"""

import asyncio
import logging
from decimal import Decimal
from typing import List, Optional
from libs.result import Result, Return
from src.app.repositories.errors import StoreUnavailableError
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.domain.ledger_entry import (
    CustomerLedgerEntry,
    LedgerEntryType,
    PAYMENT_ENTRY_TYPES,
    SALES_ENTRY_TYPES,
)
from src.domain.ledger_summary import LedgerSummary
from src.domain.sales_document import SalesDocument
from .dtos import CustomerLedgerDTO, LedgerFilters, LedgerTransactionDTO
from .errors import store_unavailable
from .resolve_balance import ResolveBalance, DEFAULT_QUERY_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class GetCustomerLedger:
    """
    Use Case: Customer ledger statement

    Business Rules:
    1. The statement follows the same path the balance was resolved on
    2. Ledger path: stored entries in the date window
    3. Invoice path: one debit row per invoice and one credit row for the
       settled part of it, running balance seeded from the opening balance
    4. transaction_type narrows the rows, never the totals
    5. Rows are returned newest first
    """

    def __init__(
        self,
        resolve_balance: ResolveBalance,
        ledger_repo: LedgerEntryRepository,
        document_repo: SalesDocumentRepository,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT_SECONDS,
    ):
        self.resolve_balance = resolve_balance
        self.ledger_repo = ledger_repo
        self.document_repo = document_repo
        self.query_timeout = query_timeout

    async def execute(
        self,
        customer_id: str,
        company_id: str,
        filters: Optional[LedgerFilters] = None,
    ) -> Result[CustomerLedgerDTO]:
        """
        Execute statement lookup

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            filters: Optional date window and transaction type

        Returns:
            Result[CustomerLedgerDTO]: Statement or the resolver's error
        """
        filters = filters or LedgerFilters()

        result = await self.resolve_balance.execute(customer_id, company_id, filters)
        if result.is_err():
            return result
        summary = result.value

        try:
            if summary.source.path == "invoices":
                rows = await self._invoice_rows(summary, filters)
            else:
                entries = await asyncio.wait_for(
                    self.ledger_repo.list_entries(
                        customer_id, company_id,
                        date_from=filters.date_from, date_to=filters.date_to,
                    ),
                    timeout=self.query_timeout,
                )
                rows = [self._entry_row(entry) for entry in entries]
        except asyncio.TimeoutError:
            return Return.err(
                store_unavailable("statement listing", f"timed out after {self.query_timeout}s")
            )
        except StoreUnavailableError as e:
            return Return.err(store_unavailable("statement listing", str(e)))

        total_sales = sum(
            (row.debit for row in rows if row.type in _values(SALES_ENTRY_TYPES)),
            Decimal("0"),
        )
        total_payments = sum(
            (row.credit for row in rows if row.type in _values(PAYMENT_ENTRY_TYPES)),
            Decimal("0"),
        )

        if filters.transaction_type is not None:
            rows = [row for row in rows if row.type == filters.transaction_type.value]

        return Return.ok(
            CustomerLedgerDTO(
                customer_id=customer_id,
                company_id=company_id,
                transactions=list(reversed(rows)),
                total_sales=total_sales,
                total_payments=total_payments,
                summary=summary,
            )
        )

    async def _invoice_rows(
        self, summary: LedgerSummary, filters: LedgerFilters
    ) -> List[LedgerTransactionDTO]:
        # Running balances need every invoice up to date_to; date_from only
        # trims what is shown
        documents = await asyncio.wait_for(
            self.document_repo.list_invoices(
                summary.customer_id, summary.company_id, date_to=filters.date_to
            ),
            timeout=self.query_timeout,
        )

        running = summary.opening_balance
        rows: List[LedgerTransactionDTO] = []
        for document in documents:
            if not document.counts_toward_balance:
                continue
            total = Decimal(document.total_amount or 0)
            running += total
            rows.append(self._document_row(document, LedgerEntryType.INVOICE, total, Decimal("0"), running))

            settled = document.settled_amount
            if settled != 0:
                running -= settled
                rows.append(self._document_row(document, LedgerEntryType.PAYMENT, Decimal("0"), settled, running))

        if filters.date_from is not None:
            rows = [row for row in rows if row.entry_date >= filters.date_from]
        return rows

    @staticmethod
    def _document_row(
        document: SalesDocument,
        entry_type: LedgerEntryType,
        debit: Decimal,
        credit: Decimal,
        balance: Decimal,
    ) -> LedgerTransactionDTO:
        return LedgerTransactionDTO(
            id=document.id,
            entry_date=document.document_date,
            type=entry_type.value,
            document_number=document.document_number,
            description="Sales Invoice" if entry_type == LedgerEntryType.INVOICE else "Payment received",
            debit=debit,
            credit=credit,
            balance=balance,
            reference_type="sales_document",
            reference_id=document.id,
        )

    @staticmethod
    def _entry_row(entry: CustomerLedgerEntry) -> LedgerTransactionDTO:
        entry_type = LedgerEntryType(entry.entry_type).value
        return LedgerTransactionDTO(
            id=entry.id,
            entry_date=entry.entry_date,
            type=entry_type,
            document_number=entry.reference_number,
            description=entry.description or f"{entry_type} entry",
            debit=Decimal(entry.debit_amount or 0),
            credit=Decimal(entry.credit_amount or 0),
            balance=Decimal(entry.balance),
            reference_type=entry.reference_type,
            reference_id=entry.reference_id,
        )


def _values(entry_types) -> tuple:
    return tuple(entry_type.value for entry_type in entry_types)
