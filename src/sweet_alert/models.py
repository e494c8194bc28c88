"""Data models for alert configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class Icon(str, Enum):
    """Severity icon controlling the dialog's visual treatment."""

    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
    INFO = "info"


@dataclass(frozen=True)
class ButtonConfig:
    """Shape of a single dialog button as understood by the client widget.

    Attribute names follow the widget's camelCase option names so that
    ``to_dict()`` can be serialized as-is.

    Attributes:
        text: Button label.
        visible: Whether the button is rendered.
        value: Value surfaced to the page when the button is clicked.
        className: Extra CSS class for the button.
        closeModal: Whether clicking the button closes the dialog.
    """

    text: str = ""
    visible: bool = False
    value: Any = None
    className: str = ""
    closeModal: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for the alert configuration."""
        return asdict(self)


DEFAULT_BUTTON_CONFIG: dict[str, Any] = ButtonConfig().to_dict()


def merge_button_config(
    button_text: str,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a button entry from the defaults, the label and caller overrides.

    Later layers win: defaults, then ``{"text": button_text, "visible": True}``,
    then ``overrides``. Unknown override keys are passed through.

    Args:
        button_text: Button label.
        overrides: Optional widget options for this button.

    Returns:
        A new dictionary describing the button.
    """
    return {
        **DEFAULT_BUTTON_CONFIG,
        "text": button_text,
        "visible": True,
        **(overrides or {}),
    }
