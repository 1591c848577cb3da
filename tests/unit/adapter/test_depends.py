"""Unit tests for cache backend selection"""

import pytest
from unittest.mock import AsyncMock

import src.depends
from src.adapter.services.balance_cache import InMemoryBalanceCache, RedisBalanceCache
from src.depends import build_balance_cache, close_balance_cache, get_balance_cache


def _config(backend, ttl=120):
    class Config:
        CACHE_BACKEND = backend
        BALANCE_CACHE_TTL_SECONDS = ttl
        REDIS_URL = "redis://localhost:6379/0"
        REDIS_SOCKET_TIMEOUT_SECONDS = 0.5

    return Config


class TestBuildBalanceCache:
    def test_memory_backend(self):
        cache = build_balance_cache(_config("memory"))

        assert isinstance(cache, InMemoryBalanceCache)
        assert cache.ttl_seconds == 120

    def test_redis_backend(self):
        cache = build_balance_cache(_config("redis", ttl=60))

        assert isinstance(cache, RedisBalanceCache)
        assert cache.ttl_seconds == 60

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_balance_cache(_config("memcached"))

    def test_redis_backend_socket_timeout(self):
        cache = build_balance_cache(_config("redis"))

        pool_kwargs = cache.client.connection_pool.connection_kwargs
        assert pool_kwargs["socket_timeout"] == 0.5
        assert pool_kwargs["socket_connect_timeout"] == 0.5


@pytest.mark.asyncio
class TestCloseBalanceCache:
    """Shared cache is released on application shutdown"""

    async def test_closes_and_resets_singleton(self, monkeypatch):
        # Arrange
        cache = AsyncMock()
        monkeypatch.setattr(src.depends, "_balance_cache", cache)

        # Act
        await close_balance_cache()

        # Assert
        cache.close.assert_awaited_once()
        assert src.depends._balance_cache is None

    async def test_noop_when_never_created(self, monkeypatch):
        monkeypatch.setattr(src.depends, "_balance_cache", None)

        await close_balance_cache()

        assert src.depends._balance_cache is None

    async def test_app_shutdown_closes_cache(self, monkeypatch):
        """
        Given: The app created the shared cache
        When: The application lifespan ends
        Then: The cache is closed
        """
        from config import ApplicationConfig
        from src.api.app import create_app

        cache = AsyncMock()
        monkeypatch.setattr(src.depends, "_balance_cache", cache)
        app = create_app(ApplicationConfig)

        async with app.router.lifespan_context(app):
            assert get_balance_cache() is cache

        cache.close.assert_awaited_once()
        assert src.depends._balance_cache is None
