"""
Shared fixtures for tezforge tests.

External collaborators (codec, chain reader, hardware device) are replaced by
small in-memory fakes; node HTTP calls are patched per test.
"""

import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest
from nacl.signing import SigningKey

from tezforge.config import NodeConfig
from tezforge.types import BlockHead, KeyStore, StoreType
from tezforge.utils.encoding import b58encode_with_hint


# =============================================================================
# Test Constants
# =============================================================================

NODE_URL = "https://tezos-node.test"

BRANCH = "BLockHashForTestsOnly1111111111111111111111111111111"
PROTOCOL = "PsCARTHAGazKbHtnKfLzQg3kms52kSRpgnDY982a9oYsSXRLQEb"

SOURCE = "tz1Yju7jmmsaUiG9qQLoYv35v5pHgnWoLWbt"
DESTINATION = "tz1fX6A2miVXjNyReg2dpt2TsXLkZ4w7zRGa"
BAKER = "tz1db53osfzRqqgQeLtBt4kcFcQoXJwPJJ5G"
KT_ADDRESS = "KT1WvyJ1qUrWzShA2T6QeL7AW4DR6GspUimM"

OPERATION_GROUP_ID = '"ooWqRNbxqFHDv7SjaxQtszfD5ZRkvUCfAXBqsFsmFcrrFGHcB3n"\n'

# Deterministic test key (DO NOT USE IN PRODUCTION)
TEST_SEED = bytes(range(32))
TEST_SIGNING_KEY = SigningKey(TEST_SEED)
TEST_PUBLIC_KEY_BYTES = bytes(TEST_SIGNING_KEY.verify_key)
TEST_EDSK = b58encode_with_hint(TEST_SEED + TEST_PUBLIC_KEY_BYTES, "edsk")
TEST_EDPK = b58encode_with_hint(TEST_PUBLIC_KEY_BYTES, "edpk")


# =============================================================================
# Fakes for external collaborators
# =============================================================================


class FakeCodec:
    """Reversible stand-in codec: JSON, hex encoded, one operation per line."""

    def __init__(self, decoded: Optional[List[Dict[str, Any]]] = None) -> None:
        self.decoded = decoded
        self.encoded_operations: List[Dict[str, Any]] = []

    def encode_branch(self, branch: str) -> str:
        return branch.encode().hex()

    def encode_operation(self, operation: Dict[str, Any]) -> str:
        if operation.get("destination") == "invalid":
            raise ValueError("unsupported address prefix")
        self.encoded_operations.append(operation)
        return (json.dumps(operation, sort_keys=True) + "\n").encode().hex()

    def parse_operation_group(self, forged: str) -> List[Dict[str, Any]]:
        if self.decoded is not None:
            return self.decoded
        lines = bytes.fromhex(forged).decode().split("\n")
        return [json.loads(line[line.index("{"):]) for line in lines if "{" in line]


class FakeChainReader:
    """In-memory chain state."""

    def __init__(self, counter: int = 5, revealed: bool = True) -> None:
        self.counter = counter
        self.revealed = revealed
        self.head = BlockHead(hash=BRANCH, protocol=PROTOCOL)
        self.counter_queries: List[str] = []
        self.reveal_queries: List[str] = []
        self.head_queries = 0

    async def get_block_head(self) -> BlockHead:
        self.head_queries += 1
        return self.head

    async def get_counter_for_account(self, address: str) -> int:
        self.counter_queries.append(address)
        return self.counter

    async def is_manager_key_revealed_for_account(self, address: str) -> bool:
        self.reveal_queries.append(address)
        return self.revealed


class FakeHardwareDevice:
    """Hardware device that signs with the test key and records requests."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.requests: List[tuple] = []

    async def sign_operation(self, derivation_path: str, watermarked_hex: str) -> bytes:
        self.requests.append((derivation_path, watermarked_hex))
        if self.fail:
            raise RuntimeError("user rejected the operation")
        return TEST_SIGNING_KEY.sign(bytes.fromhex(watermarked_hex)).signature


# =============================================================================
# HTTP mocking helpers
# =============================================================================


def create_mock_response(
    status_code: int = 200,
    json_data: Any = None,
    text: str = "",
) -> MagicMock:
    """Create a mock httpx Response."""
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
    return response


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def node_config() -> NodeConfig:
    return NodeConfig(url=NODE_URL, timeout=5000)


@pytest.fixture
def key_store() -> KeyStore:
    return KeyStore(
        public_key=TEST_EDPK,
        private_key=TEST_EDSK,
        public_key_hash=SOURCE,
        store_type=StoreType.SOFTWARE,
    )


@pytest.fixture
def hardware_key_store() -> KeyStore:
    return KeyStore(
        public_key=TEST_EDPK,
        public_key_hash=SOURCE,
        store_type=StoreType.HARDWARE,
    )


@pytest.fixture
def codec() -> FakeCodec:
    return FakeCodec()


@pytest.fixture
def chain_reader() -> FakeChainReader:
    return FakeChainReader()


@pytest.fixture
def hardware_device() -> FakeHardwareDevice:
    return FakeHardwareDevice()


@pytest.fixture
def applied_transaction() -> List[Dict[str, Any]]:
    """Successful preapply response for a single transaction."""
    return [
        {
            "contents": [
                {
                    "kind": "transaction",
                    "source": SOURCE,
                    "fee": "100000",
                    "counter": "6",
                    "gas_limit": "10600",
                    "storage_limit": "300",
                    "amount": "10000000",
                    "destination": DESTINATION,
                    "metadata": {
                        "operation_result": {"status": "applied", "consumed_gas": "10207"},
                    },
                }
            ],
            "signature": "edsigtest",
        }
    ]
