"""Tests for LocalForger."""

import pytest

from tezforge.errors import CodecError
from tezforge.forging import Forger, LocalForger
from tezforge.operations import build_delegation, build_reveal, build_transaction

from tests.conftest import BAKER, BRANCH, DESTINATION, SOURCE, TEST_EDPK, FakeCodec


def _group():
    return [
        build_reveal(SOURCE, TEST_EDPK, 6, fee=0),
        build_transaction(SOURCE, DESTINATION, 10_000_000, 100_000, 7),
        build_delegation(SOURCE, BAKER, 8),
    ]


class TestLocalForger:
    @pytest.mark.asyncio
    async def test_forge_is_branch_then_operations_in_order(self, codec: FakeCodec) -> None:
        operations = _group()
        forged = await LocalForger(codec).forge(BRANCH, operations)

        expected = codec.encode_branch(BRANCH) + "".join(
            FakeCodec().encode_operation(op.to_rpc()) for op in operations
        )
        assert forged == expected
        assert [op["kind"] for op in codec.encoded_operations] == [
            "reveal",
            "transaction",
            "delegation",
        ]

    @pytest.mark.asyncio
    async def test_forge_is_deterministic(self, codec: FakeCodec) -> None:
        forger = LocalForger(codec)
        first = await forger.forge(BRANCH, _group())
        second = await forger.forge(BRANCH, _group())
        assert first == second

    def test_forge_sync_matches_async(self, codec: FakeCodec) -> None:
        forged = LocalForger(codec).forge_sync(BRANCH, _group())
        decoded = codec.parse_operation_group(forged)
        assert [op["counter"] for op in decoded] == ["6", "7", "8"]

    @pytest.mark.asyncio
    async def test_codec_rejection_becomes_codec_error(self, codec: FakeCodec) -> None:
        operations = [build_transaction(SOURCE, "invalid", 1, 1, 1)]

        with pytest.raises(CodecError) as exc_info:
            await LocalForger(codec).forge(BRANCH, operations)

        assert exc_info.value.kind == "transaction"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_satisfies_forger_protocol(self, codec: FakeCodec) -> None:
        assert isinstance(LocalForger(codec), Forger)
