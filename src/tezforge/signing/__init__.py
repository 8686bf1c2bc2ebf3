"""
Signing: watermarking, signer selection and the software / hardware backends.
"""

from tezforge.signing.base import (
    WATERMARK_BYTES,
    Signer,
    sign_operation_group,
    signer_for_key_store,
    watermark,
)
from tezforge.signing.hardware import HardwareDevice, HardwareSigner
from tezforge.signing.software import SoftwareSigner, simple_hash

__all__ = [
    "Signer",
    "SoftwareSigner",
    "HardwareSigner",
    "HardwareDevice",
    "WATERMARK_BYTES",
    "watermark",
    "simple_hash",
    "sign_operation_group",
    "signer_for_key_store",
]
