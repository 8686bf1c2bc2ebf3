"""
tezforge utilities.

This module provides logging and encoding helpers for the package.
"""

from tezforge.utils.encoding import (
    PREFIXES,
    b58decode_with_hint,
    b58encode_with_hint,
)
from tezforge.utils.logging import (
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
    truncate_for_logging,
)

__all__ = [
    # Encoding
    "PREFIXES",
    "b58encode_with_hint",
    "b58decode_with_hint",
    # Structured logging
    "get_logger",
    "configure_logging",
    "set_level",
    "disable_logging",
    "enable_debug",
    "truncate_for_logging",
]
