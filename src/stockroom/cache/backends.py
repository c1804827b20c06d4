"""Cache backends: a per-process store and a Redis-backed one."""

import json
import time
from typing import Any, Protocol

import structlog
from redis import Redis
from redis.exceptions import RedisError, ResponseError

from stockroom.shared.context import checkpoint

logger = structlog.get_logger(__name__)


class CacheBackend(Protocol):
    """String-keyed store with per-entry TTL and prefix removal."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl: int) -> None: ...

    def remove(self, key: str) -> None: ...

    def remove_by_prefix(self, prefix: str) -> int: ...


class MemoryCache:
    """In-process cache with TTL support.

    Expired entries are dropped lazily on read and during prefix removal.
    """

    def __init__(self, clock=time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        checkpoint()
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any, ttl: int) -> None:
        checkpoint()
        self._entries[key] = (value, self._clock() + ttl)

    def remove(self, key: str) -> None:
        self._entries.pop(key, None)

    def remove_by_prefix(self, prefix: str) -> int:
        matching = [key for key in list(self._entries) if key.startswith(prefix)]
        for key in matching:
            self._entries.pop(key, None)
        return len(matching)

    def __len__(self) -> int:
        return len(self._entries)


class RedisCache:
    """Cache stored in Redis; values are serialized as JSON.

    Prefix removal walks the keyspace with ``SCAN``. Deployments that forbid
    ``SCAN`` (managed Redis with restricted commands) get a logged no-op
    instead of a failure.
    """

    def __init__(self, client: Redis, namespace: str = "stockroom:") -> None:
        self._client = client
        self._namespace = namespace

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "RedisCache":
        return cls(Redis.from_url(url, decode_responses=True, socket_connect_timeout=5), **kwargs)

    def get(self, key: str) -> Any | None:
        checkpoint()
        raw = self._client.get(self._namespace + key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any, ttl: int) -> None:
        checkpoint()
        self._client.set(self._namespace + key, json.dumps(value), ex=ttl)

    def remove(self, key: str) -> None:
        self._client.delete(self._namespace + key)

    def remove_by_prefix(self, prefix: str) -> int:
        pattern = f"{self._namespace}{prefix}*"
        try:
            keys = list(self._client.scan_iter(match=pattern, count=500))
        except ResponseError:
            logger.warning("Cache backend does not support key scanning; skipping prefix removal", prefix=prefix)
            return 0

        if keys:
            self._client.delete(*keys)
        return len(keys)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except RedisError:
            return False
