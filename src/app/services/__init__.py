from .balance_cache import BalanceCache, CacheUnavailableError, DEFAULT_BALANCE_CACHE_TTL_SECONDS

__all__ = [
    "BalanceCache",
    "CacheUnavailableError",
    "DEFAULT_BALANCE_CACHE_TTL_SECONDS",
]
