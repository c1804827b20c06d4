"""Read-through caching for query handlers and prefix invalidation for writes.

Keys are namespaced by the entity they describe so a write can drop every
dependent entry with a single prefix removal::

    product:GetAllProducts:category_id=None:page=1:page_size=10
    dashboard:GetDashboard
"""

import structlog
from pydantic import TypeAdapter

from stockroom.cache.backends import MemoryCache, RedisCache
from stockroom.config import get_settings
from stockroom.shared.exceptions import OperationCancelled

logger = structlog.get_logger(__name__)

PRODUCT_PREFIX = "product:"
CATEGORY_PREFIX = "category:"
DASHBOARD_PREFIX = "dashboard:"

# Product DTOs embed the category name, so category writes reach product entries too.
PRODUCT_WRITE_PREFIXES = (PRODUCT_PREFIX, DASHBOARD_PREFIX)
CATEGORY_WRITE_PREFIXES = (CATEGORY_PREFIX, PRODUCT_PREFIX, DASHBOARD_PREFIX)


def cache_key(prefix, query):
    """Build a deterministic key from the query's type and field values."""
    fields = query.model_dump()
    parts = [f"{name}={fields[name]}" for name in sorted(fields)]
    return ":".join([f"{prefix}{type(query).__name__}", *parts])


class QueryCache:
    def __init__(self, backend, default_ttl):
        self.backend = backend
        self.default_ttl = default_ttl

    def get_or_load(self, key, result_type, loader, ttl=None):
        """Return the cached result for ``key``, or run ``loader`` and cache its result.

        Cache failures never fail the read; the loader's result is returned
        uncached instead.
        """
        adapter = TypeAdapter(result_type)

        try:
            cached = self.backend.get(key)
        except OperationCancelled:
            raise
        except Exception:
            logger.warning("Cache read failed; loading from storage", key=key, exc_info=True)
            cached = None

        if cached is not None:
            logger.debug("Cache hit", key=key)
            return adapter.validate_python(cached)

        logger.debug("Cache miss", key=key)
        result = loader()

        try:
            self.backend.set(key, adapter.dump_python(result, mode="json"), ttl or self.default_ttl)
        except OperationCancelled:
            raise
        except Exception:
            logger.warning("Cache write failed", key=key, exc_info=True)
        return result

    def invalidate(self, *prefixes):
        """Drop every entry under ``prefixes``; failures are logged and swallowed."""
        for prefix in prefixes:
            remove_by_prefix = getattr(self.backend, "remove_by_prefix", None)
            if remove_by_prefix is None:
                logger.warning("Cache backend cannot remove by prefix", prefix=prefix)
                continue

            try:
                removed = remove_by_prefix(prefix)
            except Exception:
                logger.warning("Cache invalidation failed", prefix=prefix, exc_info=True)
                continue
            logger.debug("Cache invalidated", prefix=prefix, removed=removed)


def build_backend(settings=None):
    settings = settings or get_settings()
    if settings.cache_backend == "redis":
        return RedisCache.from_url(settings.redis_url)
    return MemoryCache()


_query_cache = None


def get_query_cache():
    global _query_cache
    if _query_cache is None:
        settings = get_settings()
        _query_cache = QueryCache(build_backend(settings), settings.cache_ttl_seconds)
    return _query_cache


def configure_query_cache(backend, default_ttl=None):
    """Swap the process-wide cache, e.g. for tests or at application startup."""
    global _query_cache
    _query_cache = QueryCache(backend, default_ttl or get_settings().cache_ttl_seconds)
    return _query_cache
