"""Ledger Entry Repository Interface

Read access to the customer ledger log (the fast balance path).
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from src.domain.ledger_entry import CustomerLedgerEntry


class LedgerEntryRepository(ABC):
    """
    Repository interface for CustomerLedgerEntry reads

    Entries are written by the sales/payment subsystems; this engine only
    reads them. Every method raises StoreUnavailableError when the store
    cannot be queried, and reports absence as None / empty.
    """

    @abstractmethod
    async def get_latest(
        self,
        customer_id: str,
        company_id: str,
        as_of: Optional[date] = None,
    ) -> Optional[CustomerLedgerEntry]:
        """
        Retrieve the most recent entry, ordered by entry_date desc, created_at desc

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            as_of: If set, only entries dated on or before this date qualify

        Returns:
            Latest CustomerLedgerEntry, or None if there is none
        """
        pass

    @abstractmethod
    async def has_entries(self, customer_id: str, company_id: str) -> bool:
        """
        Check whether the customer has any ledger entry at all

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier

        Returns:
            True if at least one entry exists
        """
        pass

    @abstractmethod
    async def list_entries(
        self,
        customer_id: str,
        company_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[CustomerLedgerEntry]:
        """
        List entries in chronological order (entry_date, created_at ascending)

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier
            date_from: Optional inclusive lower bound on entry_date
            date_to: Optional inclusive upper bound on entry_date

        Returns:
            List of entries, oldest first
        """
        pass
