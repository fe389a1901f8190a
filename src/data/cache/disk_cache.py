"""SQLite-based disk cache with TTL support for raw provider responses."""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import diskcache

from config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DiskCache:
    """
    SQLite-based disk cache with TTL support.

    Uses diskcache for persistent caching with automatic expiration. Values
    are pickled by diskcache, so parsed dataclasses round-trip unchanged.
    Every failure is logged and treated as a miss.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        namespace: str = "raw",
    ):
        self.settings = settings or get_settings()
        self.namespace = namespace
        self._cache: Optional[diskcache.Cache] = None

    def _get_cache(self) -> diskcache.Cache:
        """Get or create the cache instance."""
        if self._cache is None:
            cache_dir = self.settings.ensure_cache_dir() / self.namespace
            cache_dir.mkdir(parents=True, exist_ok=True)
            self._cache = diskcache.Cache(str(cache_dir))
        return self._cache

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        """
        Get a value from the cache.

        Args:
            key: Cache key
            default: Default value if not found or expired

        Returns:
            Cached value or default
        """
        try:
            return self._get_cache().get(key, default=default)
        except Exception as e:
            logger.warning(f"Cache get error for key {key}: {e}")
            return default

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set a value in the cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds (None = settings.cache_ttl_seconds)

        Returns:
            True if successful
        """
        if ttl is None:
            ttl = self.settings.cache_ttl_seconds

        try:
            self._get_cache().set(key, value, expire=ttl)
            return True
        except Exception as e:
            logger.warning(f"Cache set error for key {key}: {e}")
            return False

    def clear(self) -> int:
        """
        Clear all values from the cache.

        Returns:
            Number of items cleared
        """
        try:
            cache = self._get_cache()
            count = len(cache)
            cache.clear()
            return count
        except Exception as e:
            logger.warning(f"Cache clear error: {e}")
            return 0

    async def get_or_set_async(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        ttl: Optional[int] = None,
        force_refresh: bool = False,
    ) -> T:
        """
        Get a value from cache, or await ``factory`` and cache its result.

        Exceptions raised by ``factory`` propagate and nothing is cached.

        Args:
            key: Cache key
            factory: Coroutine function producing the value
            ttl: Time-to-live in seconds
            force_refresh: Skip the lookup and always call ``factory``

        Returns:
            Cached or freshly fetched value
        """
        if not force_refresh:
            value = self.get(key)
            if value is not None:
                logger.debug(f"Disk cache hit for {key}")
                return value

        value = await factory()
        self.set(key, value, ttl)
        return value

    def close(self):
        """Close the cache connection."""
        if self._cache:
            self._cache.close()
            self._cache = None


class CacheKeys:
    """Standard cache key patterns."""

    @staticmethod
    def tracked_pools(chain: str) -> str:
        return f"pools:tracked:{chain.lower()}"

    @staticmethod
    def pool_history(pool_id: str) -> str:
        return f"pool_history:{pool_id}"

    @staticmethod
    def observations(series_id: str, start_date: str, end_date: str) -> str:
        return f"observations:{series_id}:{start_date}:{end_date}"
