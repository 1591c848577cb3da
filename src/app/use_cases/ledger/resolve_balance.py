"""Resolve Balance Use Case

Single entry point for "what does this customer currently owe us".
"""

import asyncio
import logging
import time
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.errors import StoreUnavailableError
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.app.services.balance_cache import BalanceCache
from src.domain.ledger_summary import (
    LedgerSummary,
    LedgerResolution,
    InvoiceResolution,
    OpeningBalanceResolution,
)
from .aggregate_invoices import InvoiceAggregator
from .dtos import LedgerFilters
from .errors import AGGREGATION_TIMEOUT, customer_not_found, invalid_filter, store_unavailable

logger = logging.getLogger(__name__)

DEFAULT_QUERY_TIMEOUT_SECONDS = 10.0


class ResolveBalance:
    """
    Use Case: Resolve a customer's balance into a LedgerSummary

    Business Rules:
    1. Filters are validated before any I/O
    2. Only active customers of the given company resolve
    3. Current-balance queries are served from the cache when fresh;
       a cache that does not answer within query_timeout is a miss
    4. Once a customer has ledger entries, the latest entry's running
       balance is authoritative; invoices are never mixed in
    5. Customers without ledger entries resolve to
       signed opening balance + outstanding invoices
    6. Store errors and timeouts are returned as errors, never as 0

    Flow:
    1. Validate filters
    2. Load customer, compute signed opening balance
    3. Cache lookup (current-balance queries only)
    4. Latest ledger entry, else invoice aggregation
    5. Build summary with available credit
    6. Cache store (current-balance queries only)
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        ledger_repo: LedgerEntryRepository,
        document_repo: SalesDocumentRepository,
        cache: BalanceCache,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT_SECONDS,
    ):
        """
        Initialize ResolveBalance use case

        Args:
            customer_repo: Reader for customer master data
            ledger_repo: Reader for the customer ledger log
            document_repo: Reader for invoices (fallback path)
            cache: Balance cache shared across requests
            query_timeout: Upper bound in seconds for each store call
        """
        self.customer_repo = customer_repo
        self.ledger_repo = ledger_repo
        self.aggregator = InvoiceAggregator(document_repo)
        self.cache = cache
        self.query_timeout = query_timeout

    async def _bounded(self, awaitable):
        return await asyncio.wait_for(awaitable, timeout=self.query_timeout)

    async def execute(
        self,
        customer_id: str,
        company_id: str,
        filters: Optional[LedgerFilters] = None,
    ) -> Result[LedgerSummary]:
        """
        Execute balance resolution

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            filters: Optional date window; any date bound makes this a
                historical query that bypasses the cache

        Returns:
            Result[LedgerSummary]: Success with summary or error

        Errors:
            INVALID_FILTER: date_from is after date_to
            CUSTOMER_NOT_FOUND: No active customer in this company
            STORE_UNAVAILABLE: Customer or ledger store failed or timed out
            AGGREGATION_TIMEOUT: Invoice aggregation timed out
        """
        started = time.perf_counter()
        filters = filters or LedgerFilters()
        log_fields = {"customer_id": customer_id, "company_id": company_id}

        # Step 1: Reject malformed ranges before touching any store
        range_error = filters.range_error()
        if range_error:
            return Return.err(invalid_filter(range_error))

        # Step 2: Load customer
        try:
            customer = await self._bounded(
                self.customer_repo.get_active(customer_id, company_id)
            )
        except (StoreUnavailableError, asyncio.TimeoutError) as e:
            return Return.err(self._unavailable("customer lookup", e, log_fields))

        if not customer:
            return Return.err(customer_not_found(customer_id, company_id))

        signed_opening = customer.signed_opening_balance
        use_cache = filters.is_empty

        # Step 3: Cache lookup (current-balance queries only)
        if use_cache:
            cached = await self._cache_get(customer_id, company_id, log_fields)
            if cached is not None:
                logger.debug(
                    "Balance cache hit",
                    extra={**log_fields, "cache": "hit", "path_taken": cached.source.path},
                )
                return Return.ok(cached)

        # Step 4: Ledger fast path, else invoice fallback
        as_of = filters.date_to
        outcome = await self._resolve(customer_id, company_id, signed_opening, as_of, log_fields)
        if isinstance(outcome, Error):
            return Return.err(outcome)
        current_balance, source = outcome

        # Step 5: Build summary
        summary = LedgerSummary.build(
            customer_id=customer_id,
            company_id=company_id,
            opening_balance=signed_opening,
            current_balance=current_balance,
            credit_limit=customer.credit_limit,
            source=source,
            as_of=as_of,
        )

        # Step 6: Cache store (current-balance queries only)
        if use_cache:
            await self._cache_put(customer_id, company_id, summary, log_fields)

        logger.info(
            "Balance resolved",
            extra={
                **log_fields,
                "cache": "miss" if use_cache else "bypass",
                "path_taken": source.path,
                "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return Return.ok(summary)

    async def _resolve(self, customer_id, company_id, signed_opening, as_of, log_fields):
        """Return (current_balance, resolution) or an Error"""
        try:
            latest = await self._bounded(
                self.ledger_repo.get_latest(customer_id, company_id, as_of=as_of)
            )
            if latest is not None:
                return latest.balance, LedgerResolution(
                    entry_id=latest.id,
                    entry_date=latest.entry_date,
                    balance=latest.balance,
                )

            # A historical date before the first entry: the ledger exists, so
            # the balance is the opening balance, not an invoice aggregate
            if as_of is not None and await self._bounded(
                self.ledger_repo.has_entries(customer_id, company_id)
            ):
                return signed_opening, OpeningBalanceResolution()
        except (StoreUnavailableError, asyncio.TimeoutError) as e:
            return self._unavailable("ledger lookup", e, log_fields)

        logger.info("No ledger entries, aggregating invoices", extra=log_fields)
        try:
            invoice_total = await self._bounded(
                self.aggregator.outstanding(customer_id, company_id, as_of=as_of)
            )
        except asyncio.TimeoutError:
            logger.warning("Invoice aggregation timed out", extra=log_fields)
            return Error(
                code=AGGREGATION_TIMEOUT,
                message="Invoice aggregation timed out",
                reason=f"timeout={self.query_timeout}s",
            )
        except StoreUnavailableError as e:
            return self._unavailable("invoice aggregation", e, log_fields)

        return signed_opening + invoice_total, InvoiceResolution(invoice_total=invoice_total)

    async def _cache_get(self, customer_id, company_id, log_fields) -> Optional[LedgerSummary]:
        # A slow cache is a miss, never a failed resolution
        try:
            return await self._bounded(self.cache.get(customer_id, company_id))
        except asyncio.TimeoutError:
            logger.warning("Balance cache read timed out, treating as miss", extra=log_fields)
            return None

    async def _cache_put(self, customer_id, company_id, summary, log_fields) -> None:
        try:
            await self._bounded(self.cache.put(customer_id, company_id, summary))
        except asyncio.TimeoutError:
            logger.warning("Balance cache write timed out", extra=log_fields)

    def _unavailable(self, operation: str, exc: Exception, log_fields: dict) -> Error:
        if isinstance(exc, asyncio.TimeoutError):
            reason = f"timed out after {self.query_timeout}s"
        else:
            reason = str(exc)
        logger.warning(f"{operation} failed: {reason}", extra=log_fields)
        return store_unavailable(operation, reason)
