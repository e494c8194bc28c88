"""CLI entry point for Sweet Alert Flash.

Builds an alert from command line options and prints what would be
flashed for the next request.

Usage:
    python -m sweet_alert [options]
"""

from __future__ import annotations

import argparse
import json
import logging
import logging.config
import sys
from typing import NoReturn

from pydantic import ValidationError

from sweet_alert import __version__
from sweet_alert.config import Settings, clear_settings_cache, get_settings
from sweet_alert.flash import InMemoryFlashStore
from sweet_alert.models import Icon
from sweet_alert.notifier import AlertConfigBuilder

APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="sweet-alert",
        description="Preview the flashed configuration of a modal alert.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m sweet_alert --text "Saved" --icon success
  python -m sweet_alert --text "Delete?" --icon warning --confirm Yes --cancel No
  python -m sweet_alert --text "<b>Done</b>" --html --persistent OK --keys
  python -m sweet_alert --config-check
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    parser.add_argument(
        "--config-check",
        action="store_true",
        help="Validate configuration, print the effective settings and exit",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )

    parser.add_argument("--text", default="", help="Message body")
    parser.add_argument("--title", default=None, help="Alert title")
    parser.add_argument(
        "--icon",
        choices=[icon.value for icon in Icon],
        default=None,
        help="Severity icon",
    )
    parser.add_argument(
        "--autoclose",
        type=int,
        default=None,
        metavar="MS",
        help="Auto-close timer in milliseconds",
    )
    parser.add_argument("--confirm", default=None, metavar="TEXT", help="Add a confirm button")
    parser.add_argument("--cancel", default=None, metavar="TEXT", help="Add a cancel button")
    parser.add_argument(
        "--persistent",
        default=None,
        metavar="TEXT",
        help="Require dismissal through a confirm button",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Render the text as HTML content",
    )
    parser.add_argument(
        "--namespace",
        default=None,
        help="Override the flash key namespace (default: from settings)",
    )
    parser.add_argument(
        "--keys",
        action="store_true",
        help="Print every staged key instead of the combined JSON",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            "redis": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def run_config_check(settings: Settings) -> int:
    """Print the effective settings with secrets redacted.

    Args:
        settings: Validated settings.

    Returns:
        Exit code (0 for success).
    """
    print("Configuration is valid!")
    print()
    for name, value in settings.redacted_summary().items():
        print(f"  {name}: {value}")
    return EXIT_SUCCESS


def build_alert(
    args: argparse.Namespace,
    settings: Settings,
    store: InMemoryFlashStore,
) -> AlertConfigBuilder:
    """Build and finalize an alert from parsed arguments.

    Args:
        args: Parsed command line arguments.
        settings: Application settings.
        store: Store receiving the flashed keys.

    Returns:
        The finalized builder.
    """
    namespace = args.namespace or settings.sweet_alert.namespace

    with AlertConfigBuilder(
        store,
        autoclose=settings.sweet_alert.autoclose,
        namespace=namespace,
    ) as alert:
        alert.message(args.text, args.title, args.icon)
        alert.autoclose(args.autoclose)
        if args.confirm is not None:
            alert.confirm_button(args.confirm)
        if args.cancel is not None:
            alert.cancel_button(args.cancel)
        if args.persistent is not None:
            alert.persistent(args.persistent)
        if args.html:
            alert.html()

    return alert


def render_output(alert: AlertConfigBuilder, store: InMemoryFlashStore, *, keys: bool) -> str:
    """Render what was flashed, either per key or as the combined JSON."""
    if not keys:
        return json.dumps(alert.get_config(), indent=2)

    lines = []
    for key in store.keys():
        value = store.get(key)
        rendered = value if isinstance(value, str) else json.dumps(value)
        lines.append(f"{key} = {rendered}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    log_level = args.log_level or settings.log_level
    configure_logging(log_level)
    logger = logging.getLogger(__name__)

    if args.config_check:
        sys.exit(run_config_check(settings))

    store = InMemoryFlashStore()
    alert = build_alert(args, settings, store)
    logger.info(f"Staged {len(store)} key(s) under '{alert.publisher.namespace}'")

    print(render_output(alert, store, keys=args.keys))
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
