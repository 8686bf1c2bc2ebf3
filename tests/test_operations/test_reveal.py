"""
Tests for reveal bundling and counter lookup.

Tests cover:
- Counter renumbering behind a bundled reveal
- Bundled reveal fee and limits
- Revealed accounts pass through unchanged
- next_counter reads the chain on every call
"""

import pytest

from tezforge.constants import BUNDLED_REVEAL_GAS_LIMIT
from tezforge.errors import ChainQueryError
from tezforge.operations import (
    append_reveal_operation,
    build_delegation,
    build_transaction,
    bundle_reveal,
    next_counter,
)
from tezforge.types import KeyStore, Reveal

from tests.conftest import BAKER, DESTINATION, SOURCE, TEST_EDPK, FakeChainReader


def _transactions(count: int):
    return [
        build_transaction(SOURCE, DESTINATION, 1000 * (i + 1), 1500, 0)
        for i in range(count)
    ]


class TestBundleReveal:
    """Tests for the pure bundling step."""

    def test_reveal_comes_first_with_next_counter(self, key_store: KeyStore) -> None:
        bundled = bundle_reveal(key_store, SOURCE, 5, _transactions(1))

        reveal = bundled[0]
        assert isinstance(reveal, Reveal)
        assert reveal.counter == "6"
        assert reveal.public_key == TEST_EDPK
        assert reveal.source == SOURCE

    def test_operations_are_renumbered_in_order(self, key_store: KeyStore) -> None:
        bundled = bundle_reveal(key_store, SOURCE, 5, _transactions(3))

        assert [op.counter for op in bundled] == ["6", "7", "8", "9"]
        assert [op.amount for op in bundled[1:]] == ["1000", "2000", "3000"]

    def test_bundled_reveal_limits(self, key_store: KeyStore) -> None:
        reveal = bundle_reveal(key_store, SOURCE, 0, _transactions(1))[0]

        assert reveal.fee == "0"
        assert reveal.gas_limit == str(BUNDLED_REVEAL_GAS_LIMIT)
        assert reveal.storage_limit == "0"

    def test_inputs_are_not_modified(self, key_store: KeyStore) -> None:
        operations = _transactions(2)
        bundle_reveal(key_store, SOURCE, 41, operations)

        assert [op.counter for op in operations] == ["0", "0"]

    def test_renumbering_keeps_other_fields(self, key_store: KeyStore) -> None:
        delegation = build_delegation(SOURCE, BAKER, 99, fee=2000)
        renumbered = bundle_reveal(key_store, SOURCE, 10, [delegation])[1]

        assert renumbered.counter == "12"
        assert renumbered.delegate == BAKER
        assert renumbered.fee == "2000"
        assert renumbered.kind == "delegation"


class TestAppendRevealOperation:
    """Tests for the chain-aware bundling step."""

    @pytest.mark.asyncio
    async def test_revealed_account_unchanged(self, key_store: KeyStore) -> None:
        reader = FakeChainReader(revealed=True)
        operations = [build_transaction(SOURCE, DESTINATION, 10, 1500, 6)]

        result = await append_reveal_operation(reader, key_store, SOURCE, 5, operations)

        assert result == operations
        assert result is not operations
        assert reader.reveal_queries == [SOURCE]

    @pytest.mark.asyncio
    async def test_unrevealed_account_gets_reveal(self, key_store: KeyStore) -> None:
        reader = FakeChainReader(revealed=False)
        operations = [build_delegation(SOURCE, BAKER, 6)]

        result = await append_reveal_operation(reader, key_store, SOURCE, 5, operations)

        assert [op.kind for op in result] == ["reveal", "delegation"]
        assert [op.counter for op in result] == ["6", "7"]

    @pytest.mark.asyncio
    async def test_reveal_query_failure_propagates(self, key_store: KeyStore) -> None:
        class FailingReader(FakeChainReader):
            async def is_manager_key_revealed_for_account(self, address: str) -> bool:
                raise ChainQueryError("Query failed: HTTP 500", status=500)

        with pytest.raises(ChainQueryError):
            await append_reveal_operation(FailingReader(), key_store, SOURCE, 5, _transactions(1))


class TestNextCounter:
    @pytest.mark.asyncio
    async def test_next_counter_is_chain_counter_plus_one(self) -> None:
        reader = FakeChainReader(counter=41)
        assert await next_counter(reader, SOURCE) == 42

    @pytest.mark.asyncio
    async def test_next_counter_never_cached(self) -> None:
        reader = FakeChainReader(counter=5)
        first = await next_counter(reader, SOURCE)
        reader.counter = 6
        second = await next_counter(reader, SOURCE)

        assert (first, second) == (6, 7)
        assert reader.counter_queries == [SOURCE, SOURCE]
