"""Invoice Aggregator

Fallback balance path: sums outstanding invoice amounts for customers that
have no ledger entries yet.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from src.app.repositories.sales_document_repository import SalesDocumentRepository

logger = logging.getLogger(__name__)


class InvoiceAggregator:
    """
    Computes a customer's outstanding invoice total

    Business Rules:
    1. Only invoice documents count
    2. Draft, cancelled and void invoices are skipped even if the reader
       returned them
    3. Per invoice: balance_amount if present, else total_amount - paid_amount
    4. Missing numbers count as zero
    5. Opening balance is NOT included (the resolver adds it)

    This is an O(n) scan and is only meant for the fallback path.
    """

    def __init__(self, document_repo: SalesDocumentRepository):
        self.document_repo = document_repo

    async def outstanding(
        self,
        customer_id: str,
        company_id: str,
        as_of: Optional[date] = None,
    ) -> Decimal:
        """
        Sum outstanding amounts over a customer's invoices

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            as_of: If set, only invoices dated on or before this date count

        Returns:
            Signed total owed on invoices

        Raises:
            StoreUnavailableError: If invoices cannot be read
        """
        documents = await self.document_repo.list_invoices(
            customer_id, company_id, date_to=as_of
        )

        total = Decimal("0")
        counted = 0
        for document in documents:
            if not document.counts_toward_balance:
                continue
            total += document.outstanding_amount
            counted += 1

        logger.debug(
            f"Aggregated {counted} of {len(documents)} invoices: {total}",
            extra={"customer_id": customer_id, "company_id": company_id},
        )
        return total
