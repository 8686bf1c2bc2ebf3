"""
Base58check encoding with Tezos type prefixes.

Keys, signatures, hashes and addresses are exchanged as base58check strings
whose first decoded bytes identify the type ("edsk", "edsig", "tz1", ...).
"""

from __future__ import annotations

from typing import Dict, Tuple

import base58

from tezforge.errors import ValidationError

# hint -> (prefix bytes, payload length)
PREFIXES: Dict[str, Tuple[bytes, int]] = {
    "tz1": (bytes([6, 161, 159]), 20),
    "tz2": (bytes([6, 161, 161]), 20),
    "tz3": (bytes([6, 161, 164]), 20),
    "KT1": (bytes([2, 90, 121]), 20),
    "B": (bytes([1, 52]), 32),
    "edpk": (bytes([13, 15, 37, 217]), 32),
    "edsk": (bytes([43, 246, 78, 7]), 64),
    "edsig": (bytes([9, 245, 205, 134, 18]), 64),
}

# Unencrypted 32 byte Ed25519 seed, also rendered as "edsk..."
SEED_PREFIX = bytes([13, 15, 58, 7])
SEED_LENGTH = 32


def b58encode_with_hint(payload: bytes, hint: str) -> str:
    """
    Encode raw bytes as a prefixed base58check string.

    Args:
        payload: Raw key, signature or hash bytes
        hint: Type prefix name (e.g. "edsig")

    Returns:
        Base58check string

    Raises:
        ValidationError: If the hint is unknown or the length is wrong
    """
    prefix, length = _lookup(hint)
    if len(payload) != length:
        raise ValidationError(
            f"{hint} payload must be {length} bytes, got {len(payload)}",
            field=hint,
        )
    return base58.b58encode_check(prefix + payload).decode("ascii")


def b58decode_with_hint(value: str, hint: str) -> bytes:
    """
    Decode a prefixed base58check string to its payload bytes.

    "edsk" accepts both the 64 byte secret key and the 32 byte seed form.

    Args:
        value: Base58check string
        hint: Expected type prefix name

    Returns:
        Payload bytes without the prefix

    Raises:
        ValidationError: If the checksum, prefix or length is wrong
    """
    prefix, length = _lookup(hint)
    try:
        raw = base58.b58decode_check(value)
    except ValueError as e:
        raise ValidationError(f"Invalid base58check value for {hint}: {e}", field=hint) from None

    if hint == "edsk" and raw.startswith(SEED_PREFIX) and len(raw) == len(SEED_PREFIX) + SEED_LENGTH:
        return raw[len(SEED_PREFIX):]

    if not raw.startswith(prefix) or len(raw) != len(prefix) + length:
        raise ValidationError(f"Value is not a valid {hint}", field=hint)
    return raw[len(prefix):]


def _lookup(hint: str) -> Tuple[bytes, int]:
    try:
        return PREFIXES[hint]
    except KeyError:
        raise ValidationError(f"Unknown base58 prefix hint: {hint}", field="hint") from None
