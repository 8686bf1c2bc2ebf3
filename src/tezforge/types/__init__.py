"""
tezforge types.

Operation variants, key material and pipeline results.
"""

from tezforge.types.keystore import KeyStore, StoreType
from tezforge.types.operations import (
    Activation,
    Delegation,
    ManagerOperation,
    Operation,
    Origination,
    Reveal,
    StackableOperation,
    Transaction,
    parse_operation,
)
from tezforge.types.results import (
    AppliedOperationResult,
    BlockHead,
    OperationResult,
    SignedOperationGroup,
)

__all__ = [
    # Key material
    "KeyStore",
    "StoreType",
    # Operations
    "Operation",
    "StackableOperation",
    "ManagerOperation",
    "Reveal",
    "Transaction",
    "Delegation",
    "Origination",
    "Activation",
    "parse_operation",
    # Results
    "BlockHead",
    "SignedOperationGroup",
    "AppliedOperationResult",
    "OperationResult",
]
