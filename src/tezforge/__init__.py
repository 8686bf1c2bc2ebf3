"""
tezforge - Tezos operation submission.

Build, forge, sign, preapply and inject Tezos operations.

Modules:
- `client`: TezosOperationsClient, one ``send_*`` call per operation kind
- `operations`: Builders, counter lookup and reveal bundling
- `forging`: Local and remote (validated) forging
- `signing`: Software and hardware signers
- `pipeline`: The head -> forge -> sign -> preapply -> inject pipeline
- `chain`: Node RPC transport and chain state reads
- `errors`: Exception hierarchy
- `utils`: Logging and base58 helpers

Example:
    >>> from tezforge import KeyStore, NodeConfig, TezosOperationsClient
    >>> client = TezosOperationsClient(NodeConfig(url="https://..."), codec=codec)
    >>> result = await client.send_delegation_operation(key_store, key_store.public_key_hash, "tz1...")
"""

from tezforge.errors import (
    AppliedResultError,
    ChainQueryError,
    CodecError,
    ForgeValidationError,
    NodeRequestError,
    ParameterParseError,
    ResponseParseError,
    SigningError,
    TezForgeError,
    ValidationError,
)
from tezforge.config import NETWORKS, Network, NodeConfig, get_node_config
from tezforge.types import (
    Activation,
    AppliedOperationResult,
    BlockHead,
    Delegation,
    KeyStore,
    Operation,
    OperationResult,
    Origination,
    Reveal,
    SignedOperationGroup,
    StackableOperation,
    StoreType,
    Transaction,
)
from tezforge.chain import ChainReader, NodeRpcClient, TezosNodeReader
from tezforge.michelson import MichelsonTranslator, TezosParameterFormat
from tezforge.forging import Forger, LocalForger, OperationCodec, RemoteValidatingForger
from tezforge.signing import (
    HardwareDevice,
    HardwareSigner,
    Signer,
    SoftwareSigner,
    sign_operation_group,
)
from tezforge.pipeline import OperationSubmitter, SubmissionStage
from tezforge.client import TezosOperationsClient

__version__ = "0.1.0"

__all__ = [
    # Client
    "TezosOperationsClient",
    # Config
    "Network",
    "NodeConfig",
    "NETWORKS",
    "get_node_config",
    # Types
    "KeyStore",
    "StoreType",
    "Operation",
    "StackableOperation",
    "Reveal",
    "Transaction",
    "Delegation",
    "Origination",
    "Activation",
    "BlockHead",
    "SignedOperationGroup",
    "AppliedOperationResult",
    "OperationResult",
    # Collaborators
    "ChainReader",
    "TezosNodeReader",
    "NodeRpcClient",
    "OperationCodec",
    "MichelsonTranslator",
    "TezosParameterFormat",
    "HardwareDevice",
    # Forging / signing / pipeline
    "Forger",
    "LocalForger",
    "RemoteValidatingForger",
    "Signer",
    "SoftwareSigner",
    "HardwareSigner",
    "sign_operation_group",
    "OperationSubmitter",
    "SubmissionStage",
    # Errors
    "TezForgeError",
    "ValidationError",
    "ChainQueryError",
    "NodeRequestError",
    "CodecError",
    "ForgeValidationError",
    "ResponseParseError",
    "ParameterParseError",
    "AppliedResultError",
    "SigningError",
]
