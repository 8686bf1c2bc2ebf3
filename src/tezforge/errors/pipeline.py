"""
Submission pipeline exceptions.

Every exception here aborts the in-progress submission. None of them are
retried by tezforge; callers restart from the block head read if they want
another attempt, which re-reads the counter and re-forges on a fresh branch.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from tezforge.errors.base import TezForgeError


class ValidationError(TezForgeError):
    """
    Raised when caller input is rejected before anything is sent.

    Example:
        >>> raise ValidationError("amount must be non-negative", field="amount")
    """

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field

        super().__init__(message, details=details)
        self.field = field


class ChainQueryError(TezForgeError):
    """
    Raised when a chain state read (head, counter, manager key) fails.

    Covers transport failures, non-2xx statuses and malformed bodies.

    Example:
        >>> raise ChainQueryError("Counter query failed", path="...", status=404)
    """

    code = "CHAIN_QUERY_ERROR"

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path
        if status is not None:
            details["status"] = status

        super().__init__(message, details=details)
        self.path = path
        self.status = status


class NodeRequestError(TezForgeError):
    """
    Raised when a forge, preapply or injection POST is refused by the node.

    Example:
        >>> raise NodeRequestError("Injection failed", path="injection/operation", status=500)
    """

    code = "NODE_REQUEST_ERROR"

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        status: Optional[int] = None,
        body: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path
        if status is not None:
            details["status"] = status
        if body is not None:
            details["body"] = body

        super().__init__(message, details=details)
        self.path = path
        self.status = status
        self.body = body


class CodecError(TezForgeError):
    """
    Raised when the operation codec rejects a field while forging locally.

    Example:
        >>> raise CodecError("Unsupported destination prefix", kind="transaction")
    """

    code = "CODEC_ERROR"

    def __init__(
        self,
        message: str,
        *,
        kind: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if kind:
            details["kind"] = kind

        super().__init__(message, details=details)
        self.kind = kind


class ForgeValidationError(TezForgeError):
    """
    Raised when bytes forged by a remote node do not decode to what was asked.

    Example:
        >>> raise ForgeValidationError("transaction", field="amount")
    """

    code = "FORGE_VALIDATION_ERROR"

    def __init__(
        self,
        kind: str,
        *,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["kind"] = kind
        if field:
            details["field"] = field

        message = f"Forged {kind} failed validation"
        if field:
            message += f" ({field} mismatch)"

        super().__init__(message, details=details)
        self.kind = kind
        self.field = field


class ResponseParseError(TezForgeError):
    """
    Raised when a node response body is not the JSON that was expected.

    Carries the raw body and the request payload so the failure can be
    reproduced.

    Example:
        >>> raise ResponseParseError(
        ...     "chains/main/blocks/head/helpers/preapply/operations",
        ...     raw_body="<html>502</html>",
        ...     payload=[{"branch": "BL..."}],
        ... )
    """

    code = "RESPONSE_PARSE_ERROR"

    def __init__(
        self,
        path: str,
        *,
        raw_body: str,
        payload: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["path"] = path
        details["raw_body"] = raw_body
        details["payload"] = payload

        super().__init__(
            f"Could not parse JSON response from {path}: {raw_body!r} for {payload!r}",
            details=details,
        )
        self.path = path
        self.raw_body = raw_body
        self.payload = payload


class ParameterParseError(TezForgeError):
    """
    Raised when contract code, storage or parameters are not valid Micheline.

    Example:
        >>> raise ParameterParseError("storage", source="{ Unit")
    """

    code = "PARAMETER_PARSE_ERROR"

    def __init__(
        self,
        what: str,
        *,
        source: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["what"] = what
        details["source"] = source

        super().__init__(
            f"Could not parse {what} as Micheline",
            details=details,
        )
        self.what = what
        self.source = source


class AppliedResultError(TezForgeError):
    """
    Raised when preapply succeeded at HTTP level but reported a failed kind.

    Example:
        >>> raise AppliedResultError("proto.alpha.contract.counter_in_the_past")
    """

    code = "APPLIED_RESULT_ERROR"

    def __init__(
        self,
        reason: Any,
        *,
        kind: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        details["reason"] = reason
        if kind:
            details["kind"] = kind

        super().__init__(
            f"Could not apply operation because: {reason}",
            details=details,
        )
        self.reason = reason
        self.kind = kind


class SigningError(TezForgeError):
    """
    Raised when the software or hardware signing backend fails.

    Example:
        >>> raise SigningError("Device rejected the operation", store_type="hardware")
    """

    code = "SIGNING_ERROR"

    def __init__(
        self,
        message: str,
        *,
        store_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if store_type:
            details["store_type"] = store_type

        super().__init__(message, details=details)
        self.store_type = store_type
