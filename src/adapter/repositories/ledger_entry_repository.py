"""SQLAlchemy implementation of LedgerEntryRepository

Read-only access to customer_ledger_entries. Database errors are surfaced
as StoreUnavailableError so callers can tell them apart from "no entries".
"""

from datetime import date
from typing import List, Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from src.app.repositories.errors import StoreUnavailableError
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.domain.ledger_entry import CustomerLedgerEntry


class SqlAlchemyLedgerEntryRepository(LedgerEntryRepository):
    """
    SQLAlchemy implementation of LedgerEntryRepository

    Features:
    - Latest-entry lookup ordered by (entry_date, created_at) desc
    - Point-in-time lookup via as_of
    - Tenant scoping on every query
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _scoped(self, customer_id: str, company_id: str):
        return (
            select(CustomerLedgerEntry)
            .where(CustomerLedgerEntry.customer_id == customer_id)
            .where(CustomerLedgerEntry.company_id == company_id)
        )

    async def get_latest(
        self,
        customer_id: str,
        company_id: str,
        as_of: Optional[date] = None,
    ) -> Optional[CustomerLedgerEntry]:
        """
        Retrieve the most recent ledger entry

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            as_of: If set, ignore entries dated after this date

        Returns:
            Latest entry, or None if the customer has none
        """
        stmt = self._scoped(customer_id, company_id)

        if as_of is not None:
            stmt = stmt.where(CustomerLedgerEntry.entry_date <= as_of)

        stmt = stmt.order_by(
            CustomerLedgerEntry.entry_date.desc(),
            CustomerLedgerEntry.created_at.desc(),
        ).limit(1)

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("latest ledger entry lookup", str(e)) from e
        return result.scalars().first()

    async def has_entries(self, customer_id: str, company_id: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(CustomerLedgerEntry)
            .where(CustomerLedgerEntry.customer_id == customer_id)
            .where(CustomerLedgerEntry.company_id == company_id)
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("ledger entry count", str(e)) from e
        return result.scalar_one() > 0

    async def list_entries(
        self,
        customer_id: str,
        company_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[CustomerLedgerEntry]:
        """
        List ledger entries oldest first

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            date_from: Optional inclusive lower bound
            date_to: Optional inclusive upper bound

        Returns:
            Entries ordered by (entry_date, created_at) ascending
        """
        stmt = self._scoped(customer_id, company_id)

        if date_from is not None:
            stmt = stmt.where(CustomerLedgerEntry.entry_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(CustomerLedgerEntry.entry_date <= date_to)

        stmt = stmt.order_by(
            CustomerLedgerEntry.entry_date.asc(),
            CustomerLedgerEntry.created_at.asc(),
        )

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("ledger entry listing", str(e)) from e
        return list(result.scalars().all())
