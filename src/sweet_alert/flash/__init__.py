"""Flash layer - one-shot staging of alert configurations."""

from sweet_alert.flash.publisher import (
    COMBINED_KEY,
    DEFAULT_NAMESPACE,
    FlashPublisher,
    FlashStore,
    PublishError,
)
from sweet_alert.flash.stores import InMemoryFlashStore, RedisFlashStore

__all__ = [
    "COMBINED_KEY",
    "DEFAULT_NAMESPACE",
    "FlashPublisher",
    "FlashStore",
    "InMemoryFlashStore",
    "PublishError",
    "RedisFlashStore",
]
