"""
Operation group signing.

The forged bytes are prefixed with the operation watermark, signed by a
Signer, and the raw signature appended to the (unwatermarked) forged bytes
to form the injectable payload.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from tezforge.constants import OPERATION_GROUP_WATERMARK
from tezforge.errors import SigningError, ValidationError
from tezforge.signing.hardware import HardwareDevice, HardwareSigner
from tezforge.signing.software import SoftwareSigner
from tezforge.types import KeyStore, SignedOperationGroup, StoreType
from tezforge.utils.encoding import b58encode_with_hint

ED25519_SIGNATURE_LENGTH = 64
WATERMARK_BYTES = bytes.fromhex(OPERATION_GROUP_WATERMARK)


@runtime_checkable
class Signer(Protocol):
    """Signs watermarked operation bytes and returns the raw signature."""

    async def sign(self, watermarked: bytes, derivation_path: str = "") -> bytes:
        ...


def watermark(forged_hex: str) -> bytes:
    """
    Prefix forged bytes with the operation group watermark.

    Raises:
        ValidationError: If ``forged_hex`` is not valid hex
    """
    try:
        return WATERMARK_BYTES + bytes.fromhex(forged_hex)
    except ValueError:
        raise ValidationError("Forged operation is not valid hex", field="forged") from None


async def sign_operation_group(
    forged_hex: str,
    signer: Signer,
    derivation_path: str = "",
) -> SignedOperationGroup:
    """
    Sign a forged operation group.

    Args:
        forged_hex: Forged group as hex, without watermark
        signer: Software or hardware signer for the source account
        derivation_path: BIP44 path for hardware signers, empty otherwise

    Returns:
        SignedOperationGroup with ``bytes = forged ++ signature``

    Raises:
        ValidationError: If ``forged_hex`` is not valid hex
        SigningError: If the backend fails or returns a malformed signature
    """
    watermarked = watermark(forged_hex)
    signature = await signer.sign(watermarked, derivation_path)

    if len(signature) != ED25519_SIGNATURE_LENGTH:
        raise SigningError(
            f"Signer returned {len(signature)} bytes, expected {ED25519_SIGNATURE_LENGTH}",
        )

    return SignedOperationGroup(
        bytes=watermarked[len(WATERMARK_BYTES):] + signature,
        signature=b58encode_with_hint(signature, "edsig"),
    )


def signer_for_key_store(
    key_store: KeyStore,
    device: Optional[HardwareDevice] = None,
) -> Signer:
    """
    Pick the signer matching where the key store's secret lives.

    Args:
        key_store: Keys of the source account
        device: HardwareDevice, required for hardware key stores

    Raises:
        ValidationError: If a hardware key store comes without a device
    """
    if key_store.store_type == StoreType.HARDWARE:
        if device is None:
            raise ValidationError(
                "A hardware device is required for hardware key stores",
                field="hardware_device",
            )
        return HardwareSigner(device)
    return SoftwareSigner(key_store.private_key)
