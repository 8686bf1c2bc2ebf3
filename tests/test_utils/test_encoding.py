"""Tests for prefixed base58check encoding."""

import base58
import pytest

from tezforge.errors import ValidationError
from tezforge.utils.encoding import (
    SEED_PREFIX,
    b58decode_with_hint,
    b58encode_with_hint,
)

from tests.conftest import TEST_EDPK, TEST_PUBLIC_KEY_BYTES, TEST_SEED


class TestPrefixes:
    @pytest.mark.parametrize(
        "hint, length",
        [("tz1", 20), ("KT1", 20), ("edpk", 32), ("edsig", 64), ("B", 32)],
    )
    def test_encoded_values_start_with_hint(self, hint: str, length: int) -> None:
        assert b58encode_with_hint(b"\x01" * length, hint).startswith(hint)

    def test_address_round_trip(self) -> None:
        address = b58encode_with_hint(bytes(range(20)), "tz1")
        assert b58decode_with_hint(address, "tz1") == bytes(range(20))

    def test_public_key(self) -> None:
        assert b58decode_with_hint(TEST_EDPK, "edpk") == TEST_PUBLIC_KEY_BYTES


class TestSecretKeyForms:
    def test_seed_form(self) -> None:
        value = base58.b58encode_check(SEED_PREFIX + TEST_SEED).decode()

        assert value.startswith("edsk")
        assert b58decode_with_hint(value, "edsk") == TEST_SEED

    def test_secret_key_form(self) -> None:
        secret = TEST_SEED + TEST_PUBLIC_KEY_BYTES
        value = b58encode_with_hint(secret, "edsk")

        assert len(value) == 98
        assert b58decode_with_hint(value, "edsk") == secret


class TestErrors:
    def test_wrong_length(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            b58encode_with_hint(b"\x00" * 10, "edsig")
        assert exc_info.value.field == "edsig"

    def test_unknown_hint(self) -> None:
        with pytest.raises(ValidationError):
            b58encode_with_hint(b"\x00" * 20, "tz9")

    def test_bad_checksum(self) -> None:
        address = b58encode_with_hint(bytes(range(20)), "tz1")
        corrupted = address[:-1] + ("a" if address[-1] != "a" else "b")
        with pytest.raises(ValidationError):
            b58decode_with_hint(corrupted, "tz1")

    def test_wrong_prefix(self) -> None:
        with pytest.raises(ValidationError):
            b58decode_with_hint(b58encode_with_hint(bytes(20), "tz1"), "edpk")
