"""
Read-only chain accessor.

The pipeline only needs three facts from the chain: the current head, an
account's counter and whether its manager key is revealed. ChainReader is
the interface; TezosNodeReader answers it from a node RPC.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from tezforge.chain.rpc import NodeRpcClient
from tezforge.constants import BLOCK_HEAD_PATH, COUNTER_PATH, MANAGER_KEY_PATH
from tezforge.errors import ChainQueryError
from tezforge.types import BlockHead


@runtime_checkable
class ChainReader(Protocol):
    """Chain state queries consumed by the submission pipeline."""

    async def get_block_head(self) -> BlockHead:
        ...

    async def get_counter_for_account(self, address: str) -> int:
        ...

    async def is_manager_key_revealed_for_account(self, address: str) -> bool:
        ...


class TezosNodeReader:
    """
    ChainReader backed by a node RPC.

    Example:
        ```python
        reader = TezosNodeReader(NodeRpcClient(config))
        counter = await reader.get_counter_for_account("tz1...")
        ```
    """

    def __init__(self, rpc: NodeRpcClient) -> None:
        self._rpc = rpc

    async def get_block_head(self) -> BlockHead:
        path = BLOCK_HEAD_PATH.format(chain=self._rpc.chain)
        data = await self._rpc.get_json(path)
        if not isinstance(data, dict) or "hash" not in data or "protocol" not in data:
            raise ChainQueryError("Block head response lacks hash or protocol", path=path)
        return BlockHead(**data)

    async def get_counter_for_account(self, address: str) -> int:
        """
        Current on-chain counter of an account.

        The node returns the counter as a quoted decimal string.

        Raises:
            ChainQueryError: If the query fails or the body is not an integer
        """
        path = COUNTER_PATH.format(chain=self._rpc.chain, address=address)
        data = await self._rpc.get_json(path)
        try:
            return int(data)
        except (TypeError, ValueError):
            raise ChainQueryError(
                f"Counter for {address} is not an integer: {data!r}",
                path=path,
            ) from None

    async def is_manager_key_revealed_for_account(self, address: str) -> bool:
        """
        Whether the account's public key has been published on chain.

        Handles both response shapes: a bare key string (or null), and the
        older ``{"manager": ..., "key": ...}`` object.
        """
        path = MANAGER_KEY_PATH.format(chain=self._rpc.chain, address=address)
        data = await self._rpc.get_json(path)
        return _is_revealed(data)


def _is_revealed(data: Any) -> bool:
    if isinstance(data, str):
        return bool(data)
    if isinstance(data, dict):
        return bool(data.get("key"))
    return False
