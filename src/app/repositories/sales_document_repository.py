"""Sales Document Repository Interface

Read access to invoices for the fallback balance path.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from src.domain.sales_document import SalesDocument


class SalesDocumentRepository(ABC):
    """
    Repository interface for SalesDocument reads

    Provides the invoice projection used when a customer has no ledger
    entries yet.
    """

    @abstractmethod
    async def list_invoices(
        self,
        customer_id: str,
        company_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[SalesDocument]:
        """
        List a customer's posted invoices, oldest first

        Only documents of type invoice are returned; draft, cancelled and
        void documents are excluded.

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            date_from: Optional inclusive lower bound on document_date
            date_to: Optional inclusive upper bound on document_date

        Returns:
            List of invoices ordered by document_date, created_at

        Raises:
            StoreUnavailableError: If the backing store cannot be queried
        """
        pass
