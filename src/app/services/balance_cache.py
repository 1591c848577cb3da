"""Balance Cache Interface

Short-lived memoization of resolved customer balances, keyed by
(customer_id, company_id).
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.ledger_summary import LedgerSummary

DEFAULT_BALANCE_CACHE_TTL_SECONDS = 300


class CacheUnavailableError(Exception):
    """Raised when a cache backend cannot complete an invalidation"""

    pass


class BalanceCache(ABC):
    """
    Cache of current (non-historical) LedgerSummary values

    Rules:
    - get() misses when the key is absent or older than the TTL
    - put() overwrites unconditionally (last write wins)
    - invalidate() must be called by every mutation path before the next
      read can be trusted
    - Only current-balance queries are cached; date-filtered queries never
      touch the cache
    """

    @abstractmethod
    async def get(self, customer_id: str, company_id: str) -> Optional[LedgerSummary]:
        """
        Look up a cached summary

        Returns:
            LedgerSummary if present and fresh, None otherwise
        """
        pass

    @abstractmethod
    async def put(self, customer_id: str, company_id: str, summary: LedgerSummary) -> None:
        """Store a summary, replacing any existing one"""
        pass

    @abstractmethod
    async def invalidate(self, customer_id: str, company_id: str) -> None:
        """
        Drop the cached summary for one customer

        Raises:
            CacheUnavailableError: If the backend could not drop the key
        """
        pass

    @abstractmethod
    async def invalidate_all(self) -> None:
        """Drop every cached summary"""
        pass

    async def close(self) -> None:
        """Release backend connections (no-op for process-local caches)"""
        pass
