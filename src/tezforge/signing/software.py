"""
Software signing with an in-memory Ed25519 key.

The signed message is the 32 byte blake2b digest of the watermarked bytes,
not the bytes themselves.
"""

from __future__ import annotations

import hashlib

from nacl.exceptions import CryptoError
from nacl.signing import SigningKey

from tezforge.constants import SIGNING_DIGEST_SIZE
from tezforge.errors import SigningError, ValidationError
from tezforge.utils.encoding import b58decode_with_hint

ED25519_SEED_LENGTH = 32


def simple_hash(payload: bytes, size: int = SIGNING_DIGEST_SIZE) -> bytes:
    """blake2b digest of ``payload`` with the given output size."""
    return hashlib.blake2b(payload, digest_size=size).digest()


class SoftwareSigner:
    """
    Signer for software and fundraiser key stores.

    Example:
        >>> signer = SoftwareSigner("edsk...")
        >>> signature = await signer.sign(watermarked_bytes)
    """

    def __init__(self, private_key: str) -> None:
        # Sanitize key errors to prevent key leakage in stack traces
        try:
            secret = b58decode_with_hint(private_key, "edsk")
            self._signing_key = SigningKey(secret[:ED25519_SEED_LENGTH])
        except (ValidationError, CryptoError, TypeError, ValueError):
            raise ValidationError(
                "Invalid private key format (key not shown for security)",
                field="private_key",
            ) from None

    @property
    def public_key(self) -> bytes:
        """Raw 32 byte Ed25519 public key."""
        return bytes(self._signing_key.verify_key)

    async def sign(self, watermarked: bytes, derivation_path: str = "") -> bytes:
        """
        Sign the digest of ``watermarked``. ``derivation_path`` is ignored.

        Raises:
            SigningError: If the signature primitive fails
        """
        digest = simple_hash(watermarked)
        try:
            return self._signing_key.sign(digest).signature
        except CryptoError as e:
            raise SigningError(f"Software signing failed: {e}", store_type="software") from e
