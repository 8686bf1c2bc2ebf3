"""
Operation construction: builders, counter lookup and reveal bundling.
"""

from tezforge.operations.builder import (
    build_account_origination,
    build_activation,
    build_contract_invocation,
    build_contract_origination,
    build_delegation,
    build_origination,
    build_reveal,
    build_transaction,
)
from tezforge.operations.counter import next_counter
from tezforge.operations.reveal import append_reveal_operation, bundle_reveal

__all__ = [
    # Builders
    "build_transaction",
    "build_contract_invocation",
    "build_delegation",
    "build_origination",
    "build_account_origination",
    "build_contract_origination",
    "build_reveal",
    "build_activation",
    # Counters
    "next_counter",
    # Reveal bundling
    "bundle_reveal",
    "append_reveal_operation",
]
