"""
Contract code and parameter normalization.

Contract code, storage and invocation parameters are embedded in operations
as Micheline (the JSON tree form). Callers may instead supply Michelson, the
human-readable form, which is passed through a MichelsonTranslator first.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable

from tezforge.errors import ParameterParseError, ValidationError
from tezforge.utils.logging import get_logger, truncate_for_logging

_logger = get_logger(__name__)


class TezosParameterFormat(str, Enum):
    MICHELSON = "michelson"
    MICHELINE = "micheline"


@runtime_checkable
class MichelsonTranslator(Protocol):
    """Converts Michelson source text to Micheline JSON text."""

    def translate_michelson_to_micheline(self, source: str) -> str:
        ...


def to_micheline(
    source: str,
    source_format: TezosParameterFormat,
    what: str,
    translator: Optional[MichelsonTranslator] = None,
) -> Any:
    """
    Normalize code, storage or parameters to a Micheline value.

    Args:
        source: Michelson or Micheline text
        source_format: Format of ``source``
        what: Name used in logs and errors ("code", "storage", "parameters")
        translator: Required when ``source_format`` is MICHELSON

    Returns:
        Decoded Micheline (dict or list)

    Raises:
        ValidationError: If Michelson is given without a translator
        ParameterParseError: If the (translated) text is not valid JSON
    """
    if source_format == TezosParameterFormat.MICHELSON:
        if translator is None:
            raise ValidationError(
                f"A Michelson translator is required to convert {what}",
                field=what,
            )
        text = translator.translate_michelson_to_micheline(source)
        _logger.debug(
            f"{what} translation",
            extra={"michelson": truncate_for_logging(source), "micheline": truncate_for_logging(text)},
        )
    else:
        text = source

    try:
        return json.loads(text)
    except ValueError:
        raise ParameterParseError(what, source=source) from None
