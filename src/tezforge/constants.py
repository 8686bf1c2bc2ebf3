"""Constants for tezforge.

This module defines the protocol constants used across the package,
including the signing watermark, default fees and gas/storage limits,
RPC routes and the set of applied-operation kinds a node may report.
"""

# Signing
OPERATION_GROUP_WATERMARK = "03"  # Distinguishes operation groups from blocks/endorsements
SIGNING_DIGEST_SIZE = 32  # blake2b-256

# Default fees (mutez)
DEFAULT_DELEGATION_FEE = 1258
DEFAULT_ACCOUNT_ORIGINATION_FEE = 1266
DEFAULT_KEY_REVEAL_FEE = 1270

# Default limits
DEFAULT_TRANSACTION_GAS_LIMIT = 10600
DEFAULT_TRANSACTION_STORAGE_LIMIT = 300
DEFAULT_DELEGATION_GAS_LIMIT = 10000
DEFAULT_DELEGATION_STORAGE_LIMIT = 0
DEFAULT_ACCOUNT_ORIGINATION_GAS_LIMIT = 10600
DEFAULT_ACCOUNT_ORIGINATION_STORAGE_LIMIT = 277
DEFAULT_KEY_REVEAL_GAS_LIMIT = 10000
DEFAULT_KEY_REVEAL_STORAGE_LIMIT = 0

# Reveal prepended to a group from an unrevealed account; its fee is carried
# by the operations that follow it
BUNDLED_REVEAL_FEE = 0
BUNDLED_REVEAL_GAS_LIMIT = 10600
BUNDLED_REVEAL_STORAGE_LIMIT = 0

# Kinds a successful preapply may report
VALID_APPLIED_KINDS = frozenset(
    {"activate_account", "reveal", "transaction", "origination", "delegation"}
)

# Kinds whose remotely forged bytes are decoded and checked locally
REMOTE_FORGE_VALIDATED_KINDS = frozenset(
    {"reveal", "transaction", "delegation", "origination"}
)

# RPC routes (relative to the node URL)
BLOCK_HEAD_PATH = "chains/{chain}/blocks/head"
COUNTER_PATH = "chains/{chain}/blocks/head/context/contracts/{address}/counter"
MANAGER_KEY_PATH = "chains/{chain}/blocks/head/context/contracts/{address}/manager_key"
FORGE_PATH = "chains/{chain}/blocks/head/helpers/forge/operations"
PREAPPLY_PATH = "chains/{chain}/blocks/head/helpers/preapply/operations"
INJECTION_PATH = "injection/operation?chain={chain}"

# Network
DEFAULT_TIMEOUT_MS = 30000

__all__ = [
    "OPERATION_GROUP_WATERMARK",
    "SIGNING_DIGEST_SIZE",
    "DEFAULT_DELEGATION_FEE",
    "DEFAULT_ACCOUNT_ORIGINATION_FEE",
    "DEFAULT_KEY_REVEAL_FEE",
    "DEFAULT_TRANSACTION_GAS_LIMIT",
    "DEFAULT_TRANSACTION_STORAGE_LIMIT",
    "DEFAULT_DELEGATION_GAS_LIMIT",
    "DEFAULT_DELEGATION_STORAGE_LIMIT",
    "DEFAULT_ACCOUNT_ORIGINATION_GAS_LIMIT",
    "DEFAULT_ACCOUNT_ORIGINATION_STORAGE_LIMIT",
    "DEFAULT_KEY_REVEAL_GAS_LIMIT",
    "DEFAULT_KEY_REVEAL_STORAGE_LIMIT",
    "BUNDLED_REVEAL_FEE",
    "BUNDLED_REVEAL_GAS_LIMIT",
    "BUNDLED_REVEAL_STORAGE_LIMIT",
    "VALID_APPLIED_KINDS",
    "REMOTE_FORGE_VALIDATED_KINDS",
    "BLOCK_HEAD_PATH",
    "COUNTER_PATH",
    "MANAGER_KEY_PATH",
    "FORGE_PATH",
    "PREAPPLY_PATH",
    "INJECTION_PATH",
    "DEFAULT_TIMEOUT_MS",
]
