"""Balance Cache Implementations

- InMemoryBalanceCache: per-process TTL map (default)
- RedisBalanceCache: shared cache for multi-instance deployments
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple
from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError
from src.app.services.balance_cache import (
    BalanceCache,
    CacheUnavailableError,
    DEFAULT_BALANCE_CACHE_TTL_SECONDS,
)
from src.domain.ledger_summary import LedgerSummary

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]

DEFAULT_SOCKET_TIMEOUT_SECONDS = 2.0


class InMemoryBalanceCache(BalanceCache):
    """
    Process-local TTL cache

    Reads take no lock; put/invalidate serialize on a mutex. Expired
    entries are dropped on read, and swept from the whole map on put so
    keys that are never read again do not accumulate.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_BALANCE_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache

        Args:
            ttl_seconds: Entry lifetime in seconds
            clock: Monotonic time source (injectable for tests)
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[CacheKey, Tuple[LedgerSummary, float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, customer_id: str, company_id: str) -> Optional[LedgerSummary]:
        key = (customer_id, company_id)
        entry = self._entries.get(key)
        if entry is None:
            return None

        summary, cached_at = entry
        if self._clock() - cached_at >= self.ttl_seconds:
            with self._lock:
                # Only drop the entry we looked at, not a fresher concurrent put
                if self._entries.get(key) is entry:
                    del self._entries[key]
            return None
        return summary

    async def put(self, customer_id: str, company_id: str, summary: LedgerSummary) -> None:
        now = self._clock()
        with self._lock:
            self._sweep(now)
            self._entries[(customer_id, company_id)] = (summary, now)

    def _sweep(self, now: float) -> None:
        # Caller holds the lock
        expired = [
            key for key, (_, cached_at) in self._entries.items()
            if now - cached_at >= self.ttl_seconds
        ]
        for key in expired:
            del self._entries[key]

    async def invalidate(self, customer_id: str, company_id: str) -> None:
        with self._lock:
            self._entries.pop((customer_id, company_id), None)

    async def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()


class RedisBalanceCache(BalanceCache):
    """
    Redis-backed cache shared across service instances

    Summaries are stored as JSON with a Redis-side expiry (SET ... EX), so
    freshness is enforced by the server. Read and write failures degrade
    to a cache miss; invalidation failures are raised because a missed
    invalidation leaves a stale balance visible.
    """

    KEY_PREFIX = "ledger:balance:"

    def __init__(
        self,
        client: Redis,
        ttl_seconds: int = DEFAULT_BALANCE_CACHE_TTL_SECONDS,
        key_prefix: str = KEY_PREFIX,
    ):
        self.client = client
        self.ttl_seconds = int(ttl_seconds)
        self.key_prefix = key_prefix

    @classmethod
    def from_url(
        cls,
        url: str,
        ttl_seconds: int = DEFAULT_BALANCE_CACHE_TTL_SECONDS,
        socket_timeout: Optional[float] = DEFAULT_SOCKET_TIMEOUT_SECONDS,
    ) -> "RedisBalanceCache":
        """
        Build a cache from a redis:// URL

        Args:
            url: Redis connection URL
            ttl_seconds: Entry lifetime in seconds
            socket_timeout: Bound in seconds on connecting and on each command
        """
        client = Redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client, ttl_seconds=ttl_seconds)

    def _key(self, customer_id: str, company_id: str) -> str:
        return f"{self.key_prefix}{company_id}:{customer_id}"

    async def get(self, customer_id: str, company_id: str) -> Optional[LedgerSummary]:
        try:
            raw = await self.client.get(self._key(customer_id, company_id))
        except RedisError as e:
            logger.warning(
                f"Balance cache read failed, treating as miss: {e}",
                extra={"customer_id": customer_id, "company_id": company_id},
            )
            return None

        if raw is None:
            return None

        try:
            return LedgerSummary.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Dropping unreadable cached balance: {e.error_count()} validation errors",
                extra={"customer_id": customer_id, "company_id": company_id},
            )
            await self._discard(customer_id, company_id)
            return None

    async def _discard(self, customer_id: str, company_id: str) -> None:
        try:
            await self.client.delete(self._key(customer_id, company_id))
        except RedisError as e:
            logger.warning(
                f"Failed to drop unreadable cached balance: {e}",
                extra={"customer_id": customer_id, "company_id": company_id},
            )

    async def put(self, customer_id: str, company_id: str, summary: LedgerSummary) -> None:
        try:
            await self.client.set(
                self._key(customer_id, company_id),
                summary.model_dump_json(),
                ex=self.ttl_seconds,
            )
        except RedisError as e:
            logger.warning(
                f"Balance cache write failed: {e}",
                extra={"customer_id": customer_id, "company_id": company_id},
            )

    async def invalidate(self, customer_id: str, company_id: str) -> None:
        try:
            await self.client.delete(self._key(customer_id, company_id))
        except RedisError as e:
            logger.error(
                f"Balance cache invalidation failed: {e}",
                extra={"customer_id": customer_id, "company_id": company_id},
            )
            raise CacheUnavailableError(str(e)) from e

    async def invalidate_all(self) -> None:
        try:
            keys = [key async for key in self.client.scan_iter(match=f"{self.key_prefix}*")]
            if keys:
                await self.client.delete(*keys)
        except RedisError as e:
            logger.error(f"Balance cache flush failed: {e}")
            raise CacheUnavailableError(str(e)) from e
        logger.info(f"Balance cache flushed ({len(keys)} keys)")

    async def close(self) -> None:
        await self.client.aclose()
