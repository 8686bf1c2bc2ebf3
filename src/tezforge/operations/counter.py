"""Account counter lookup."""

from __future__ import annotations

from tezforge.chain.reader import ChainReader


async def next_counter(reader: ChainReader, address: str) -> int:
    """
    Counter to use for the next operation from ``address``.

    Always read from the chain, never cached: the node only advances the
    counter after an injection succeeds, so a remembered value goes stale.
    Two concurrent calls for the same account can get the same value; only
    one of the resulting injections will be accepted.

    Raises:
        ChainQueryError: Propagated from the reader
    """
    return await reader.get_counter_for_account(address) + 1
