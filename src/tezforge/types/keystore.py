"""Key material for one account, as supplied by the caller per call."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["StoreType", "KeyStore"]


class StoreType(str, Enum):
    SOFTWARE = "software"
    FUNDRAISER = "fundraiser"
    HARDWARE = "hardware"


class KeyStore(BaseModel):
    """
    Key pair with its public key hash.

    ``private_key`` is the "edsk" base58check string for software and
    fundraiser keys and is left empty for hardware keys, whose secret never
    leaves the device.

    Attributes:
        public_key: "edpk" encoded public key
        private_key: "edsk" encoded secret key or seed
        public_key_hash: "tz1" address of the account
        store_type: Where the secret key lives
        seed: Optional seed kept by the caller, never used for signing
    """

    model_config = ConfigDict(frozen=True)

    public_key: str
    private_key: str = Field(default="", repr=False)
    public_key_hash: str
    store_type: StoreType = StoreType.SOFTWARE
    seed: Optional[str] = Field(default=None, repr=False)
