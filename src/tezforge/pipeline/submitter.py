"""
Operation submission pipeline.

A submission runs these stages in order, once, with no retries:

    FETCH_HEAD -> FORGE -> SIGN -> PREAPPLY -> VALIDATE_APPLIED -> INJECT -> DONE

Any failure aborts the call. Nothing reaches the chain before INJECT, so
there is nothing to roll back; to try again, call ``send_operation`` again,
which reads a fresh head and re-forges. Counters are not re-read here, that
is the caller's job (see ``TezosOperationsClient``).
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Sequence

import pydantic

from tezforge.chain.reader import ChainReader
from tezforge.chain.rpc import NodeRpcClient
from tezforge.constants import INJECTION_PATH, PREAPPLY_PATH, VALID_APPLIED_KINDS
from tezforge.errors import AppliedResultError, ResponseParseError, TezForgeError
from tezforge.forging.forger import Forger
from tezforge.signing.base import Signer, sign_operation_group
from tezforge.types import (
    AppliedOperationResult,
    Operation,
    OperationResult,
    SignedOperationGroup,
)
from tezforge.utils.logging import get_logger, truncate_for_logging

_logger = get_logger(__name__)


class SubmissionStage(str, Enum):
    """Stages of a submission, in execution order."""

    FETCH_HEAD = "fetch_head"
    FORGE = "forge"
    SIGN = "sign"
    PREAPPLY = "preapply"
    VALIDATE_APPLIED = "validate_applied"
    INJECT = "inject"
    DONE = "done"


def check_applied_operation_results(applied: List[Any]) -> None:
    """
    Reject a preapply result that reports anything but a known applied kind.

    Only the first element is inspected: tezforge submits one group per call.

    Args:
        applied: Decoded preapply response

    Raises:
        AppliedResultError: With the result ``id`` for a bad top-level kind,
            or the entry's ``metadata`` for a bad content kind, or the raw
            element when it does not have the shape of an operation result
    """
    if not applied or not isinstance(applied[0], dict):
        raise AppliedResultError("preapply returned no operation result")

    try:
        first = AppliedOperationResult.model_validate(applied[0])
    except pydantic.ValidationError as e:
        _logger.error("Malformed preapply result", extra={"result": truncate_for_logging(applied[0])})
        raise AppliedResultError(
            applied[0],
            details={"errors": e.errors(include_url=False)},
        ) from None

    if first.kind is not None and first.kind not in VALID_APPLIED_KINDS:
        _logger.error("Preapply failed", extra={"id": first.id, "kind": first.kind})
        raise AppliedResultError(first.id, kind=first.kind)

    for content in first.contents:
        kind = content.get("kind")
        if kind not in VALID_APPLIED_KINDS:
            _logger.error(
                "Preapply failed",
                extra={"kind": kind, "metadata": truncate_for_logging(content.get("metadata"))},
            )
            raise AppliedResultError(content.get("metadata"), kind=kind)


class OperationSubmitter:
    """
    Drives one operation group from block head to injection.

    Holds no per-submission state, so one instance can serve concurrent
    submissions for different accounts.

    Example:
        ```python
        submitter = OperationSubmitter(reader, rpc, LocalForger(codec))
        result = await submitter.send_operation(operations, SoftwareSigner("edsk..."))
        print(result.operation_group_id)
        ```
    """

    def __init__(self, reader: ChainReader, rpc: NodeRpcClient, forger: Forger) -> None:
        self._reader = reader
        self._rpc = rpc
        self._forger = forger

    @property
    def forger(self) -> Forger:
        return self._forger

    async def send_operation(
        self,
        operations: Sequence[Operation],
        signer: Signer,
        derivation_path: str = "",
    ) -> OperationResult:
        """
        Forge, sign, preapply, validate and inject ``operations`` as one group.

        Args:
            operations: Operations with their final counters
            signer: Signer for the source account
            derivation_path: BIP44 path for hardware signers

        Returns:
            OperationResult with the first preapply result and the group id

        Raises:
            TezForgeError: Any pipeline failure; its ``stage`` attribute names
                the stage that failed
        """
        stage = SubmissionStage.FETCH_HEAD
        try:
            self._enter(stage)
            head = await self._reader.get_block_head()

            stage = SubmissionStage.FORGE
            self._enter(stage)
            forged = await self._forger.forge(head.hash, operations)

            stage = SubmissionStage.SIGN
            self._enter(stage)
            signed = await sign_operation_group(forged, signer, derivation_path)

            stage = SubmissionStage.PREAPPLY
            self._enter(stage)
            applied = await self.apply_operation(head.hash, head.protocol, operations, signed)

            stage = SubmissionStage.VALIDATE_APPLIED
            self._enter(stage)
            check_applied_operation_results(applied)

            stage = SubmissionStage.INJECT
            self._enter(stage)
            operation_group_id = await self.inject_operation(signed)
        except TezForgeError as e:
            e.at_stage(stage.value)
            raise

        self._enter(SubmissionStage.DONE)
        _logger.info(
            "Operation group injected",
            extra={"operation_group_id": operation_group_id.strip()},
        )
        return OperationResult(results=applied[0], operation_group_id=operation_group_id)

    async def apply_operation(
        self,
        branch: str,
        protocol: str,
        operations: Sequence[Operation],
        signed: SignedOperationGroup,
    ) -> List[Any]:
        """
        Dry-run the signed group on the node.

        Returns:
            Decoded preapply response (a list)

        Raises:
            NodeRequestError: If the node refuses the request
            ResponseParseError: If the body is not a JSON array
        """
        payload: List[Dict[str, Any]] = [
            {
                "protocol": protocol,
                "branch": branch,
                "contents": [op.to_rpc() for op in operations],
                "signature": signed.signature,
            }
        ]
        path = PREAPPLY_PATH.format(chain=self._rpc.chain)
        text = await self._rpc.post(path, payload)
        _logger.debug("Preapply response", extra={"body": truncate_for_logging(text)})

        try:
            applied = json.loads(text)
        except ValueError:
            _logger.error("Failed to parse preapply response")
            raise ResponseParseError(path, raw_body=text, payload=payload) from None

        if not isinstance(applied, list):
            _logger.error("Preapply response is not an array")
            raise ResponseParseError(path, raw_body=text, payload=payload)

        return applied

    async def inject_operation(self, signed: SignedOperationGroup) -> str:
        """
        Inject the signed group.

        Returns:
            Response body verbatim: the operation group id
        """
        path = INJECTION_PATH.format(chain=self._rpc.chain)
        return await self._rpc.post(path, signed.hex())

    @staticmethod
    def _enter(stage: SubmissionStage) -> None:
        _logger.debug("Submission stage", extra={"stage": stage.value})
