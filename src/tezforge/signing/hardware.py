"""
Hardware wallet signing.

The device transport is supplied by the caller. The device receives the
watermarked bytes and hashes them itself.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tezforge.errors import SigningError
from tezforge.utils.logging import get_logger

_logger = get_logger(__name__)


@runtime_checkable
class HardwareDevice(Protocol):
    """Transport to a hardware wallet able to sign Tezos operations."""

    async def sign_operation(self, derivation_path: str, watermarked_hex: str) -> bytes:
        ...


class HardwareSigner:
    """Signer for hardware key stores."""

    def __init__(self, device: HardwareDevice) -> None:
        self._device = device

    async def sign(self, watermarked: bytes, derivation_path: str = "") -> bytes:
        """
        Ask the device to sign.

        Raises:
            SigningError: If the device fails or the user rejects the operation.
                Never retried: the user would be prompted again.
        """
        _logger.debug("Requesting hardware signature", extra={"derivation_path": derivation_path})
        try:
            signature = await self._device.sign_operation(derivation_path, watermarked.hex())
        except SigningError:
            raise
        except Exception as e:
            raise SigningError(
                f"Hardware signing failed: {e}",
                store_type="hardware",
                details={"derivation_path": derivation_path},
            ) from e
        return bytes(signature)
