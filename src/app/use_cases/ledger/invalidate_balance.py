"""Balance invalidation use cases

Called by every mutation path (invoice create/update/delete, payment
recorded, opening balance edited) after the mutation commits.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.balance_cache import BalanceCache, CacheUnavailableError
from .errors import CACHE_UNAVAILABLE

logger = logging.getLogger(__name__)


class InvalidateBalance:
    """Drop one customer's cached balance"""

    def __init__(self, cache: BalanceCache):
        self.cache = cache

    async def execute(self, customer_id: str, company_id: str) -> Result[None]:
        try:
            await self.cache.invalidate(customer_id, company_id)
        except CacheUnavailableError as e:
            return Return.err(
                Error(
                    code=CACHE_UNAVAILABLE,
                    message="Failed to invalidate cached balance",
                    reason=str(e),
                )
            )

        logger.info(
            "Balance cache invalidated",
            extra={"customer_id": customer_id, "company_id": company_id},
        )
        return Return.ok(None)


class InvalidateAllBalances:
    """Administrative flush of every cached balance"""

    def __init__(self, cache: BalanceCache):
        self.cache = cache

    async def execute(self) -> Result[None]:
        try:
            await self.cache.invalidate_all()
        except CacheUnavailableError as e:
            return Return.err(
                Error(
                    code=CACHE_UNAVAILABLE,
                    message="Failed to flush balance cache",
                    reason=str(e),
                )
            )

        logger.warning("Balance cache flushed")
        return Return.ok(None)
