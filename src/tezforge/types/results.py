"""
Pipeline Result Types

Values produced while a submission runs. All of them live for one call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockHead(BaseModel):
    """Current chain head; only ``hash`` and ``protocol`` are used."""

    model_config = ConfigDict(frozen=True, extra="allow")

    hash: str
    protocol: str
    chain_id: Optional[str] = None


@dataclass(frozen=True)
class SignedOperationGroup:
    """
    Forged operation bytes followed by their detached signature.

    Attributes:
        bytes: ``forged bytes ++ raw signature``; the watermark is not included
        signature: "edsig" encoded signature
    """

    bytes: bytes
    signature: str

    def hex(self) -> str:
        return self.bytes.hex()


class AppliedOperationResult(BaseModel):
    """One element of a preapply response, kept loosely typed."""

    model_config = ConfigDict(extra="allow")

    kind: Optional[str] = None
    id: Optional[str] = None
    metadata: Optional[Any] = None
    contents: List[Dict[str, Any]] = Field(default_factory=list)


@dataclass(frozen=True)
class OperationResult:
    """
    Terminal output of a submission.

    Attributes:
        results: First preapply result, exactly as the node returned it
        operation_group_id: Injection response body, verbatim
    """

    results: Dict[str, Any]
    operation_group_id: str
