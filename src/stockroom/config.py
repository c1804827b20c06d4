"""Application settings for the stockroom service.

Domain infrastructure (database, event store) is configured through
``domain.toml`` next to :mod:`stockroom.domain`. Everything Protean does not
manage is read here from ``STOCKROOM_``-prefixed environment variables.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_CACHE_TTL_SECONDS = 300


class Settings(BaseSettings):
    """Frozen settings object, built once per process by :func:`get_settings`.

    Attributes:
        cache_backend: ``"memory"`` for a per-process cache, ``"redis"`` for a
            shared one.
        redis_url: Connection URL used when ``cache_backend`` is ``"redis"``.
        cache_ttl_seconds: Default lifetime of cached query results.
        log_dir: Directory for rotating log files, or None to log to stdout only.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STOCKROOM_",
    }

    cache_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL_SECONDS, gt=0)
    log_dir: Path | None = Path("logs")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
