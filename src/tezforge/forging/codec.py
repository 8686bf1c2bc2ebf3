"""Binary operation codec interface."""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable


@runtime_checkable
class OperationCodec(Protocol):
    """
    Converts operations to and from the protocol's binary encoding.

    All byte strings are hex. Decoded operations use the same field names and
    decimal-string numbers as the RPC representation, with absent optional
    fields left out.
    """

    def encode_branch(self, branch: str) -> str:
        """Encode a base58 block hash as the group's branch prefix."""
        ...

    def encode_operation(self, operation: Dict[str, Any]) -> str:
        """Encode one operation in its RPC dict form."""
        ...

    def parse_operation_group(self, forged: str) -> List[Dict[str, Any]]:
        """Decode a forged group (branch prefix included) into its operations."""
        ...
