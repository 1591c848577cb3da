from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.balance_cache import InMemoryBalanceCache, RedisBalanceCache
from src.app.services.balance_cache import BalanceCache

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

_balance_cache: Optional[BalanceCache] = None


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def build_balance_cache(config=ApplicationConfig) -> BalanceCache:
    """Create the cache backend named by config.CACHE_BACKEND"""
    ttl = config.BALANCE_CACHE_TTL_SECONDS
    if config.CACHE_BACKEND == "redis":
        return RedisBalanceCache.from_url(
            config.REDIS_URL,
            ttl_seconds=ttl,
            socket_timeout=config.REDIS_SOCKET_TIMEOUT_SECONDS,
        )
    if config.CACHE_BACKEND == "memory":
        return InMemoryBalanceCache(ttl_seconds=ttl)
    raise ValueError(f"Unknown CACHE_BACKEND {config.CACHE_BACKEND!r}")


def get_balance_cache() -> BalanceCache:
    """Process-wide balance cache shared by all requests"""
    global _balance_cache
    if _balance_cache is None:
        _balance_cache = build_balance_cache()
    return _balance_cache


async def close_balance_cache() -> None:
    """Close the shared cache backend, if one was created"""
    global _balance_cache
    if _balance_cache is not None:
        await _balance_cache.close()
        _balance_cache = None
