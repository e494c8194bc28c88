"""Flash publisher for alert configurations.

This module writes an alert configuration to a one-shot flash store under
a flat namespace, so that the next request can read it exactly once.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


DEFAULT_NAMESPACE = "sweet_alert"
COMBINED_KEY = "alert"


class PublishError(TypeError):
    """Raised when an alert configuration cannot be serialized."""


@runtime_checkable
class FlashStore(Protocol):
    """Protocol for one-shot flash storage backends."""

    def remove(self, key: str) -> None:
        """Remove a staged value. Must be a no-op if absent."""
        ...

    def flash(self, key: str, value: Any) -> None:
        """Stage a value for exactly one subsequent read."""
        ...


class FlashPublisher:
    """Stages alert configurations in a flash store.

    Every top-level configuration entry is flashed under
    ``<namespace>.<key>``, plus the whole configuration as JSON under
    ``<namespace>.alert``.

    Example:
        ```python
        publisher = FlashPublisher(InMemoryFlashStore())
        publisher.publish({"text": "Saved", "icon": "success"})
        ```
    """

    def __init__(self, store: FlashStore, namespace: str = DEFAULT_NAMESPACE) -> None:
        """Initialize the publisher.

        Args:
            store: Flash store to write to.
            namespace: Prefix for every staged key.
        """
        self._store = store
        self._namespace = namespace

    @property
    def store(self) -> FlashStore:
        """Return the underlying flash store."""
        return self._store

    @property
    def namespace(self) -> str:
        """Return the key namespace."""
        return self._namespace

    def key(self, name: str) -> str:
        """Return the namespaced key for a configuration entry."""
        return f"{self._namespace}.{name}"

    def publish(self, config: dict[str, Any]) -> None:
        """Replace whatever is staged under the namespace with ``config``.

        Args:
            config: Alert configuration to stage.

        Raises:
            PublishError: If the configuration is not JSON-serializable.
                Nothing is written to the store in that case.
        """
        try:
            combined = json.dumps(config)
        except (TypeError, ValueError) as e:
            logger.warning(f"Cannot serialize alert configuration: {e}")
            raise PublishError(f"Alert configuration is not JSON-serializable: {e}") from e

        self._store.remove(self._namespace)

        for name, value in config.items():
            self._store.flash(self.key(name), value)

        self._store.flash(self.key(COMBINED_KEY), combined)

        logger.debug(f"Published {len(config)} alert option(s) under '{self._namespace}'")

    def pull(self) -> dict[str, Any] | None:
        """Read the combined configuration once.

        The per-option keys staged next to it are removed as well, so the
        alert is gone for every later read. Requires a store exposing
        ``pull(key)``.

        Returns:
            The decoded configuration, or None if nothing is staged.
        """
        raw = self._store.pull(self.key(COMBINED_KEY))  # type: ignore[attr-defined]
        self._store.remove(self._namespace)
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()
        config: dict[str, Any] = json.loads(raw)
        return config
