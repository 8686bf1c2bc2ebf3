"""
Structured logging for tezforge.

All loggers live under the ``tezforge`` namespace. The library installs a
NullHandler only; applications opt in to output with ``configure_logging``.

Example:
    >>> from tezforge.utils.logging import configure_logging, get_logger
    >>> configure_logging("DEBUG")
    >>> _logger = get_logger(__name__)
    >>> _logger.info("Injected", extra={"operation_group_id": "oo5X..."})
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

ROOT_LOGGER_NAME = "tezforge"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Payloads logged at debug level are cut to this many characters
MAX_LOGGED_PAYLOAD = 2000

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the tezforge namespace.

    Args:
        name: Module name (usually ``__name__``). Names outside the
            namespace are nested under it.

    Returns:
        Configured ``logging.Logger``
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Attach a handler to the tezforge root logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Log level name or number
        fmt: Format string for the handler
        handler: Custom handler (defaults to a StreamHandler)

    Returns:
        The tezforge root logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        if getattr(existing, "_tezforge_managed", False):
            root.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    handler._tezforge_managed = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    return root


def set_level(level: Union[int, str]) -> None:
    """Set the level of the tezforge root logger."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def enable_debug() -> None:
    """Shortcut for ``set_level(logging.DEBUG)``."""
    set_level(logging.DEBUG)


def disable_logging() -> None:
    """Silence every tezforge logger. ``configure_logging`` turns output back on."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.CRITICAL + 1)


def truncate_for_logging(value: Any, limit: int = MAX_LOGGED_PAYLOAD) -> str:
    """
    Render a payload for a log line, cut to ``limit`` characters.

    Args:
        value: Any value; non-strings are rendered with ``repr``
        limit: Maximum length of the returned string

    Returns:
        String safe to put in a log record
    """
    text = value if isinstance(value, str) else repr(value)
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text) - limit} more chars)"
