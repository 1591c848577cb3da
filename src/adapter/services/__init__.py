from .balance_cache import InMemoryBalanceCache, RedisBalanceCache

__all__ = [
    "InMemoryBalanceCache",
    "RedisBalanceCache",
]
