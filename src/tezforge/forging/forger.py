"""
Operation group forging.

Forging turns a branch and an ordered list of operations into the bytes that
get signed. Two strategies share the Forger interface:

- LocalForger encodes everything with a local codec. Deterministic, no
  network, and the default.
- RemoteValidatingForger asks the node to forge, then decodes the result
  locally and checks it against what was asked for. It exists for contract
  parameters the local codec cannot encode yet and is NOT trustless: only
  the operation count, the fields listed in ``_VALIDATED_FIELDS`` and
  origination scripts are checked, contract parameters are not.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, Sequence, Tuple, runtime_checkable

from tezforge.chain.rpc import NodeRpcClient
from tezforge.constants import FORGE_PATH, REMOTE_FORGE_VALIDATED_KINDS
from tezforge.errors import CodecError, ForgeValidationError
from tezforge.forging.codec import OperationCodec
from tezforge.types import Operation
from tezforge.utils.logging import get_logger

_logger = get_logger(__name__)

_CODEC_ERRORS = (ValueError, KeyError, TypeError)

# Fields compared between the requested and the decoded operation, per kind
_VALIDATED_FIELDS: Dict[str, Tuple[str, ...]] = {
    "reveal": ("kind", "fee"),
    "transaction": ("kind", "fee", "amount", "destination"),
    "delegation": ("kind", "fee", "delegate"),
    "origination": ("kind", "fee", "balance", "spendable", "delegatable", "delegate"),
}


@runtime_checkable
class Forger(Protocol):
    """Produces the forged hex of an operation group."""

    async def forge(self, branch: str, operations: Sequence[Operation]) -> str:
        ...


class LocalForger:
    """
    Forges with the local codec: branch prefix, then operations in order.

    Example:
        ```python
        forger = LocalForger(codec)
        forged = await forger.forge(head.hash, operations)
        ```
    """

    def __init__(self, codec: OperationCodec) -> None:
        self._codec = codec

    async def forge(self, branch: str, operations: Sequence[Operation]) -> str:
        return self.forge_sync(branch, operations)

    def forge_sync(self, branch: str, operations: Sequence[Operation]) -> str:
        """
        Forge without awaiting; the local path never does I/O.

        Raises:
            CodecError: If the codec rejects the branch or any field
        """
        _logger.debug(
            "Forging locally",
            extra={"branch": branch, "kinds": [op.kind for op in operations]},
        )
        try:
            encoded = self._codec.encode_branch(branch)
        except _CODEC_ERRORS as e:
            raise CodecError(f"Could not encode branch {branch}: {e}") from e

        for operation in operations:
            try:
                encoded += self._codec.encode_operation(operation.to_rpc())
            except _CODEC_ERRORS as e:
                raise CodecError(
                    f"Could not encode {operation.kind}: {e}",
                    kind=operation.kind,
                ) from e

        return encoded


class RemoteValidatingForger:
    """
    Forges on the node, then checks the result with a local decode.

    Not trustless. Kinds outside ``reveal``, ``transaction``, ``delegation``
    and ``origination`` (activations) pass through unchecked, as do contract
    invocation parameters.
    """

    def __init__(self, rpc: NodeRpcClient, codec: OperationCodec) -> None:
        self._rpc = rpc
        self._codec = codec

    async def forge(self, branch: str, operations: Sequence[Operation]) -> str:
        """
        Raises:
            NodeRequestError: If the node refuses to forge
            ForgeValidationError: If the returned bytes do not match the request
        """
        _logger.warning("Remote forging is not intrinsically trustless")

        contents = [op.to_rpc() for op in operations]
        path = FORGE_PATH.format(chain=self._rpc.chain)
        body = await self._rpc.post(path, {"branch": branch, "contents": contents})
        forged = body.replace("\n", "").replace('"', "").replace("'", "")

        if any(op["kind"] in REMOTE_FORGE_VALIDATED_KINDS for op in contents):
            self.validate(forged, contents)

        return forged

    def validate(self, forged: str, contents: List[Dict[str, Any]]) -> None:
        """
        Compare decoded operations with the requested ones, position by position.

        The decoded group must hold exactly as many operations as were sent.

        Raises:
            ForgeValidationError: Naming the kind of the first mismatching operation
        """
        checked = [op for op in contents if op["kind"] in REMOTE_FORGE_VALIDATED_KINDS]
        try:
            decoded = self._codec.parse_operation_group(forged)
        except _CODEC_ERRORS as e:
            raise ForgeValidationError(
                checked[0]["kind"],
                details={"reason": f"undecodable forge response: {e}"},
            ) from e

        if len(decoded) != len(contents):
            index = min(len(decoded), len(contents))
            first_unmatched = contents[index] if index < len(contents) else decoded[index]
            _logger.error(
                "Forged group has a different number of operations",
                extra={"requested": len(contents), "decoded": len(decoded)},
            )
            raise ForgeValidationError(
                first_unmatched.get("kind", "unknown"),
                field="count",
                details={"index": index, "requested": len(contents), "decoded": len(decoded)},
            )

        for index, requested in enumerate(contents):
            kind = requested["kind"]
            if kind not in REMOTE_FORGE_VALIDATED_KINDS:
                continue

            returned = decoded[index]
            for field in _VALIDATED_FIELDS[kind]:
                if returned.get(field) != requested.get(field):
                    _logger.error(
                        "Forged operation failed validation",
                        extra={"kind": kind, "field": field, "index": index},
                    )
                    raise ForgeValidationError(kind, field=field, details={"index": index})

            if kind == "origination" and returned.get("script") != requested.get("script"):
                raise ForgeValidationError(kind, field="script", details={"index": index})
