"""Fluent builder for flashed alert dialogs.

This module provides the builder used by request handlers to describe the
alert shown on the next page render.

Usage:
    ```python
    with AlertConfigBuilder(store) as alert:
        alert.error("Could not save your changes", "Oops")
        alert.confirm_button("Retry").cancel_button()
    ```
"""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any

from sweet_alert.flash.publisher import FlashPublisher, FlashStore, PublishError
from sweet_alert.models import Icon, merge_button_config

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class AlertConfigBuilder:
    """Builds the configuration of a single alert and flashes it.

    Display calls (``message`` and the severity helpers) publish
    immediately. Later mutations are only staged once ``finalize()`` is
    called or the ``with`` block exits, which also publishes.

    Invariants kept by the builder:
        - Adding a button removes ``timer`` and sets
          ``closeOnClickOutside`` to False.
        - ``text`` and ``content`` are never both present.

    ``set_config`` can break these; that is the caller's responsibility.
    """

    def __init__(
        self,
        store: FlashStore,
        *,
        autoclose: int | None = _UNSET,
        namespace: str = _UNSET,
    ) -> None:
        """Initialize the builder with default options.

        Args:
            store: Flash store receiving the configuration.
            autoclose: Default timer in milliseconds, None for no timer.
                Falls back to the configured default when omitted.
            namespace: Prefix for staged keys. Falls back to the
                configured namespace when omitted.
        """
        if autoclose is _UNSET or namespace is _UNSET:
            from sweet_alert.config import get_settings

            defaults = get_settings().sweet_alert
            if autoclose is _UNSET:
                autoclose = defaults.autoclose
            if namespace is _UNSET:
                namespace = defaults.namespace

        self._publisher = FlashPublisher(store, namespace)
        self._config: dict[str, Any] = {}
        self.set_config(
            {
                "timer": autoclose,
                "text": "",
                "buttons": {
                    "cancel": False,
                    "confirm": False,
                },
            }
        )

    @property
    def publisher(self) -> FlashPublisher:
        """Return the publisher used to flash this alert."""
        return self._publisher

    def message(
        self,
        text: str = "",
        title: str | None = None,
        icon: Icon | str | None = None,
    ) -> AlertConfigBuilder:
        """Display an alert with a text and optional title and icon.

        A new message is plain text: HTML content from an earlier
        ``html()`` call is dropped until ``html()`` is called again.

        Args:
            text: Message body.
            title: Title, left unchanged when None.
            icon: Severity icon, left unchanged when None.
        """
        self._config.pop("content", None)
        self._config["text"] = text

        if title is not None:
            self._config["title"] = title

        if icon is not None:
            self._config["icon"] = Icon(icon).value

        self.publish()
        return self

    def basic(self, text: str, title: str) -> AlertConfigBuilder:
        """Display an untyped alert."""
        return self.message(text, title)

    def info(self, text: str, title: str = "") -> AlertConfigBuilder:
        """Display an info alert."""
        return self.message(text, title, Icon.INFO)

    def success(self, text: str, title: str = "") -> AlertConfigBuilder:
        """Display a success alert."""
        return self.message(text, title, Icon.SUCCESS)

    def error(self, text: str, title: str = "") -> AlertConfigBuilder:
        """Display an error alert."""
        return self.message(text, title, Icon.ERROR)

    def warning(self, text: str, title: str = "") -> AlertConfigBuilder:
        """Display a warning alert."""
        return self.message(text, title, Icon.WARNING)

    def autoclose(self, milliseconds: int | None = None) -> AlertConfigBuilder:
        """Set the auto-close timer. Calling without a value changes nothing."""
        if milliseconds is not None:
            self._config["timer"] = milliseconds
        return self

    def confirm_button(
        self,
        button_text: str = "OK",
        overrides: dict[str, Any] | None = None,
    ) -> AlertConfigBuilder:
        """Add a confirmation button."""
        return self.add_button("confirm", button_text, overrides)

    def cancel_button(
        self,
        button_text: str = "Cancel",
        overrides: dict[str, Any] | None = None,
    ) -> AlertConfigBuilder:
        """Add a cancel button."""
        return self.add_button("cancel", button_text, overrides)

    def add_button(
        self,
        key: str,
        button_text: str,
        overrides: dict[str, Any] | None = None,
    ) -> AlertConfigBuilder:
        """Add or replace a button.

        The entry is rebuilt from the defaults on every call, so a previous
        override for the same key is discarded.

        Args:
            key: Button identifier, e.g. "confirm", "cancel" or a custom one.
            button_text: Button label.
            overrides: Widget options taking precedence over the defaults.
        """
        buttons = self._config.get("buttons")
        if not isinstance(buttons, dict):
            buttons = {}
            self._config["buttons"] = buttons

        buttons[key] = merge_button_config(button_text, overrides)

        self.close_on_click_outside(False)
        self._remove_timer()
        return self

    def close_on_click_outside(self, value: bool = True) -> AlertConfigBuilder:
        """Toggle closing the alert when clicking outside of it."""
        self._config["closeOnClickOutside"] = value
        return self

    def persistent(self, button_text: str = "OK") -> AlertConfigBuilder:
        """Make the alert dismissable only through a confirmation button."""
        self.add_button("confirm", button_text)
        self.close_on_click_outside(False)
        self._remove_timer()
        return self

    def html(self) -> AlertConfigBuilder:
        """Render the message text as HTML content.

        Does nothing once the text has already been moved.
        """
        if "text" in self._config:
            self._config["content"] = self._config.pop("text")
        return self

    def _remove_timer(self) -> None:
        self._config.pop("timer", None)

    def set_config(self, config: dict[str, Any] | None = None) -> AlertConfigBuilder:
        """Merge raw widget options into the configuration."""
        self._config.update(config or {})
        return self

    def get_config(self, key: str | None = None) -> Any:
        """Return the whole configuration, or a single option.

        Args:
            key: Option name. Unknown names return None.
        """
        if key is None:
            return self._config
        return self._config.get(key)

    def get_json_config(self) -> str:
        """Return the configuration serialized as JSON.

        Raises:
            TypeError: If an option value is not JSON-serializable.
        """
        return json.dumps(self._config)

    def publish(self) -> AlertConfigBuilder:
        """Flash the current configuration, replacing any earlier publish."""
        self._publisher.publish(self._config)
        return self

    def finalize(self) -> AlertConfigBuilder:
        """Flash the final state of the alert.

        Call once the handler is done with the builder. Safe to call more
        than once.
        """
        logger.debug(f"Finalizing alert under '{self._publisher.namespace}'")
        return self.publish()

    def __enter__(self) -> AlertConfigBuilder:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_val is None:
            self.finalize()
            return

        # The body's exception wins over a failed publish.
        try:
            self.finalize()
        except PublishError:
            logger.exception("Could not publish alert while handling an earlier error")
