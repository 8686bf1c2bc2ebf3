"""
tezforge exceptions.

All exceptions inherit from TezForgeError and carry a machine-readable code,
the submission stage they were raised in, and a details dictionary.
"""

from tezforge.errors.base import TezForgeError
from tezforge.errors.pipeline import (
    AppliedResultError,
    ChainQueryError,
    CodecError,
    ForgeValidationError,
    NodeRequestError,
    ParameterParseError,
    ResponseParseError,
    SigningError,
    ValidationError,
)

__all__ = [
    "TezForgeError",
    "ValidationError",
    "ChainQueryError",
    "NodeRequestError",
    "CodecError",
    "ForgeValidationError",
    "ResponseParseError",
    "ParameterParseError",
    "AppliedResultError",
    "SigningError",
]
