"""SQLAlchemy Sales Document Repository Implementation

Invoice projection for the fallback balance path.
"""

from datetime import date
from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from src.app.repositories.errors import StoreUnavailableError
from src.app.repositories.sales_document_repository import SalesDocumentRepository
from src.domain.sales_document import SalesDocument, DocumentType, NON_POSTING_STATUSES


class SqlAlchemySalesDocumentRepository(SalesDocumentRepository):
    """
    SQLAlchemy implementation of SalesDocumentRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_invoices(
        self,
        customer_id: str,
        company_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[SalesDocument]:
        """
        List posted invoices for a customer

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            date_from: Optional inclusive lower bound on document_date
            date_to: Optional inclusive upper bound on document_date

        Returns:
            Invoices ordered by document_date, created_at
        """
        statement = (
            select(SalesDocument)
            .where(SalesDocument.customer_id == customer_id)
            .where(SalesDocument.company_id == company_id)
            .where(SalesDocument.document_type == DocumentType.INVOICE)
            .where(SalesDocument.status.not_in(NON_POSTING_STATUSES))
        )

        if date_from is not None:
            statement = statement.where(SalesDocument.document_date >= date_from)
        if date_to is not None:
            statement = statement.where(SalesDocument.document_date <= date_to)

        statement = statement.order_by(
            SalesDocument.document_date.asc(),
            SalesDocument.created_at.asc(),
        )

        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("invoice listing", str(e)) from e
        return list(result.scalars().all())
