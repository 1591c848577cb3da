"""VerifyCustomerLedger Use Case

Walks a customer's ledger entries and checks the running-balance chain.
"""

import asyncio
import logging
import time
from decimal import Decimal
from libs.result import Result, Return
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.errors import StoreUnavailableError
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.domain.base import utc_now
from src.domain.ledger_entry import LedgerEntryType
from .dtos import EntryDiscrepancyDTO, LedgerVerificationDTO
from .errors import customer_not_found, store_unavailable
from .resolve_balance import DEFAULT_QUERY_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class VerifyCustomerLedger:
    """
    Use Case: Verify a customer's running balances

    Business Rules:
    1. Entries are walked in (entry_date, created_at) order
    2. The balance before the first entry is the signed opening balance,
       or zero when the first entry is itself an opening_balance entry
    3. Each entry must satisfy balance = previous + debit - credit, where
       previous is the stored balance of the entry before it
    4. Read-only: nothing is corrected
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        ledger_repo: LedgerEntryRepository,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT_SECONDS,
    ):
        self.customer_repo = customer_repo
        self.ledger_repo = ledger_repo
        self.query_timeout = query_timeout

    async def execute(self, customer_id: str, company_id: str) -> Result[LedgerVerificationDTO]:
        """
        Execute ledger verification

        Returns:
            Result[LedgerVerificationDTO]: Verification result with any discrepancies
        """
        start_time = time.time()
        log_fields = {"customer_id": customer_id, "company_id": company_id}

        try:
            customer = await asyncio.wait_for(
                self.customer_repo.get_active(customer_id, company_id),
                timeout=self.query_timeout,
            )
            if not customer:
                return Return.err(customer_not_found(customer_id, company_id))

            entries = await asyncio.wait_for(
                self.ledger_repo.list_entries(customer_id, company_id),
                timeout=self.query_timeout,
            )
        except asyncio.TimeoutError:
            return Return.err(
                store_unavailable("ledger verification", f"timed out after {self.query_timeout}s")
            )
        except StoreUnavailableError as e:
            return Return.err(store_unavailable("ledger verification", str(e)))

        previous = customer.signed_opening_balance
        if entries and entries[0].entry_type == LedgerEntryType.OPENING_BALANCE:
            previous = Decimal("0")

        discrepancies: list[EntryDiscrepancyDTO] = []
        for entry in entries:
            expected = previous + Decimal(entry.debit_amount or 0) - Decimal(entry.credit_amount or 0)
            recorded = Decimal(entry.balance)
            if recorded != expected:
                discrepancies.append(
                    EntryDiscrepancyDTO(
                        entry_id=entry.id,
                        entry_date=entry.entry_date,
                        recorded_balance=recorded,
                        expected_balance=expected,
                        difference=recorded - expected,
                    )
                )
                logger.warning(
                    f"Running balance mismatch on entry {entry.id}: "
                    f"recorded={recorded}, expected={expected}",
                    extra=log_fields,
                )
            previous = recorded

        execution_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Verified {len(entries)} ledger entries, "
            f"{len(discrepancies)} discrepancies in {execution_time_ms}ms",
            extra=log_fields,
        )

        return Return.ok(
            LedgerVerificationDTO(
                customer_id=customer_id,
                company_id=company_id,
                entries_checked=len(entries),
                discrepancies_found=len(discrepancies),
                discrepancies=discrepancies,
                is_consistent=not discrepancies,
                verified_at=utc_now(),
                execution_time_ms=execution_time_ms,
            )
        )
