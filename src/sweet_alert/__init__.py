"""Sweet Alert Flash - flashed modal alert configurations."""

from sweet_alert.flash import (
    FlashPublisher,
    FlashStore,
    InMemoryFlashStore,
    PublishError,
    RedisFlashStore,
)
from sweet_alert.models import DEFAULT_BUTTON_CONFIG, ButtonConfig, Icon, merge_button_config
from sweet_alert.notifier import AlertConfigBuilder

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BUTTON_CONFIG",
    "AlertConfigBuilder",
    "ButtonConfig",
    "FlashPublisher",
    "FlashStore",
    "Icon",
    "InMemoryFlashStore",
    "PublishError",
    "RedisFlashStore",
    "__version__",
    "merge_button_config",
]
