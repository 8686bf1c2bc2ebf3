"""
Reveal bundling.

An account that has never published its public key must do so before any
other manager operation is accepted. The reveal has to be the first
operation of the group and takes a counter slot, so everything after it is
renumbered.
"""

from __future__ import annotations

from typing import List, Sequence

from tezforge.chain.reader import ChainReader
from tezforge.constants import (
    BUNDLED_REVEAL_FEE,
    BUNDLED_REVEAL_GAS_LIMIT,
    BUNDLED_REVEAL_STORAGE_LIMIT,
)
from tezforge.operations.builder import build_reveal
from tezforge.types import KeyStore, StackableOperation
from tezforge.utils.logging import get_logger

_logger = get_logger(__name__)


def bundle_reveal(
    key_store: KeyStore,
    account: str,
    account_operation_index: int,
    operations: Sequence[StackableOperation],
) -> List[StackableOperation]:
    """
    Prepend a reveal to ``operations`` and renumber them.

    The reveal takes ``account_operation_index + 1``; operation ``i`` takes
    ``account_operation_index + 2 + i``. Input operations are not modified.

    Args:
        key_store: Keys of the account being revealed
        account: Account address
        account_operation_index: Current on-chain counter of the account
        operations: Operations to follow the reveal, in order

    Returns:
        ``[reveal, *renumbered operations]``
    """
    reveal = build_reveal(
        account,
        key_store.public_key,
        account_operation_index + 1,
        fee=BUNDLED_REVEAL_FEE,
        gas_limit=BUNDLED_REVEAL_GAS_LIMIT,
        storage_limit=BUNDLED_REVEAL_STORAGE_LIMIT,
    )
    renumbered = [
        operation.with_counter(account_operation_index + 2 + index)
        for index, operation in enumerate(operations)
    ]
    return [reveal, *renumbered]


async def append_reveal_operation(
    reader: ChainReader,
    key_store: KeyStore,
    account: str,
    account_operation_index: int,
    operations: Sequence[StackableOperation],
) -> List[StackableOperation]:
    """
    Prepend a reveal only if the account's manager key is not yet on chain.

    Args:
        reader: Chain accessor used for the revealed check
        key_store: Keys of the account
        account: Account address
        account_operation_index: Current on-chain counter of the account
        operations: Delegations, transactions or originations to send

    Returns:
        The operations unchanged, or a reveal followed by them renumbered

    Raises:
        ChainQueryError: If the manager key query fails
    """
    if await reader.is_manager_key_revealed_for_account(account):
        return list(operations)

    _logger.debug(
        "Manager key not revealed, bundling reveal",
        extra={"account": account, "counter": account_operation_index + 1},
    )
    return bundle_reveal(key_store, account, account_operation_index, operations)
