"""Flash store backends.

Both stores use flat dotted keys. Removing a key also removes its dotted
children, so removing the namespace clears every option staged under it.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any

from redis import Redis

if TYPE_CHECKING:
    from sweet_alert.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
DEFAULT_KEY_PREFIX = "flash"


def _is_same_or_child(candidate: str, key: str) -> bool:
    return candidate == key or candidate.startswith(f"{key}.")


def _escape_glob(value: str) -> str:
    """Escape Redis MATCH metacharacters so ``value`` matches literally."""
    return re.sub(r"([*?\[\]\\])", r"\\\1", value)


class InMemoryFlashStore:
    """Dictionary-backed flash store.

    Suitable for tests and single-process applications. Values are kept as
    given, without serialization.
    """

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def remove(self, key: str) -> None:
        """Remove ``key`` and its dotted children, if staged."""
        for staged in [k for k in self._data if _is_same_or_child(k, key)]:
            del self._data[staged]

    def flash(self, key: str, value: Any) -> None:
        """Stage a value for one subsequent read."""
        self._data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Peek at a staged value without consuming it."""
        return self._data.get(key, default)

    def pull(self, key: str, default: Any = None) -> Any:
        """Read a staged value once, removing it."""
        return self._data.pop(key, default)

    def keys(self) -> list[str]:
        """Return the staged keys in staging order."""
        return list(self._data)

    def clear(self) -> None:
        """Drop every staged value."""
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class RedisFlashStore:
    """Redis-backed flash store scoped to one session.

    Values are JSON-encoded and expire after ``ttl_seconds`` if never read.
    Reads through ``pull`` use GETDEL so a value is returned at most once.

    Example:
        ```python
        redis = Redis.from_url("redis://localhost:6379")
        store = RedisFlashStore(redis, session_id=request.session_id)
        AlertConfigBuilder(store).success("Saved").finalize()

        # next request
        alert = FlashPublisher(store).pull()
        ```
    """

    def __init__(
        self,
        redis: Redis,
        session_id: str,
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        """Initialize the store.

        Args:
            redis: Redis client (sync).
            session_id: Identity isolating this caller's flashed values.
            ttl_seconds: Expiry for values that are never read.
            key_prefix: Prefix for the Redis keys.
        """
        self._redis = redis
        self._session_id = session_id
        self._ttl_seconds = ttl_seconds
        self._key_prefix = key_prefix

    @classmethod
    def from_settings(
        cls,
        session_id: str,
        settings: Settings | None = None,
    ) -> RedisFlashStore:
        """Create a store using the configured Redis URL and TTL."""
        if settings is None:
            from sweet_alert.config import get_settings

            settings = get_settings()

        redis = Redis.from_url(settings.redis.url)
        return cls(redis, session_id, ttl_seconds=settings.redis.flash_ttl_seconds)

    @property
    def session_id(self) -> str:
        """Return the session identity."""
        return self._session_id

    def _redis_key(self, key: str) -> str:
        return f"{self._key_prefix}:{self._session_id}:{key}"

    def remove(self, key: str) -> None:
        """Delete ``key`` and its dotted children, if staged."""
        redis_key = self._redis_key(key)
        children = list(self._redis.scan_iter(match=f"{_escape_glob(redis_key)}.*"))
        removed = self._redis.delete(redis_key, *children)
        logger.debug(f"Removed {removed} flashed key(s) for {redis_key}")

    def flash(self, key: str, value: Any) -> None:
        """Stage a JSON-encoded value with expiry."""
        self._redis.set(self._redis_key(key), json.dumps(value), ex=self._ttl_seconds)

    def get(self, key: str, default: Any = None) -> Any:
        """Peek at a staged value without consuming it."""
        data = self._redis.get(self._redis_key(key))
        if data is None:
            return default
        return json.loads(data)

    def pull(self, key: str, default: Any = None) -> Any:
        """Read a staged value once, removing it atomically."""
        data = self._redis.getdel(self._redis_key(key))
        if data is None:
            return default
        return json.loads(data)
