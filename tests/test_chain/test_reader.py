"""Tests for TezosNodeReader."""

from unittest.mock import AsyncMock

import pytest

from tezforge.chain.reader import ChainReader, TezosNodeReader
from tezforge.chain.rpc import NodeRpcClient
from tezforge.config import NodeConfig
from tezforge.errors import ChainQueryError
from tezforge.types import BlockHead

from tests.conftest import BRANCH, PROTOCOL, SOURCE, FakeChainReader


@pytest.fixture
def rpc(node_config: NodeConfig) -> NodeRpcClient:
    return NodeRpcClient(node_config)


class TestBlockHead:
    @pytest.mark.asyncio
    async def test_block_head_keeps_extra_fields(self, rpc: NodeRpcClient) -> None:
        rpc.get_json = AsyncMock(
            return_value={"hash": BRANCH, "protocol": PROTOCOL, "header": {"level": 100}}
        )
        head = await TezosNodeReader(rpc).get_block_head()

        assert isinstance(head, BlockHead)
        assert head.hash == BRANCH
        assert head.protocol == PROTOCOL
        rpc.get_json.assert_awaited_once_with("chains/main/blocks/head")

    @pytest.mark.asyncio
    async def test_block_head_missing_hash(self, rpc: NodeRpcClient) -> None:
        rpc.get_json = AsyncMock(return_value={"protocol": PROTOCOL})
        with pytest.raises(ChainQueryError):
            await TezosNodeReader(rpc).get_block_head()


class TestCounter:
    @pytest.mark.asyncio
    async def test_counter_parsed_from_string(self, rpc: NodeRpcClient) -> None:
        rpc.get_json = AsyncMock(return_value="5")
        counter = await TezosNodeReader(rpc).get_counter_for_account(SOURCE)

        assert counter == 5
        rpc.get_json.assert_awaited_once_with(
            f"chains/main/blocks/head/context/contracts/{SOURCE}/counter"
        )

    @pytest.mark.asyncio
    async def test_counter_not_integer(self, rpc: NodeRpcClient) -> None:
        rpc.get_json = AsyncMock(return_value={"unexpected": True})
        with pytest.raises(ChainQueryError):
            await TezosNodeReader(rpc).get_counter_for_account(SOURCE)

    @pytest.mark.asyncio
    async def test_counter_errors_propagate_unchanged(self, rpc: NodeRpcClient) -> None:
        error = ChainQueryError("Query failed: HTTP 503", status=503)
        rpc.get_json = AsyncMock(side_effect=error)
        with pytest.raises(ChainQueryError) as exc_info:
            await TezosNodeReader(rpc).get_counter_for_account(SOURCE)
        assert exc_info.value is error


class TestManagerKey:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, expected",
        [
            ("edpkuBknW28nW72KG6RoHtYW7p12T6GKc7nAbwYX5m8Wd9sDVC9yav", True),
            (None, False),
            ({"manager": SOURCE, "key": "edpkuBknW28nW72KG6RoHtYW7p12T6GKc7nAbwYX5m8Wd9sDVC9yav"}, True),
            ({"manager": SOURCE}, False),
        ],
    )
    async def test_revealed_status(self, rpc: NodeRpcClient, body, expected) -> None:
        rpc.get_json = AsyncMock(return_value=body)
        assert await TezosNodeReader(rpc).is_manager_key_revealed_for_account(SOURCE) is expected


def test_fake_reader_satisfies_protocol() -> None:
    assert isinstance(FakeChainReader(), ChainReader)
