"""
Base exception class for tezforge.

Any TezForgeError aborts the submission it is raised in. On the way out the
submitter stamps the error with the pipeline stage that was running, so a
caller can tell a refused forge from a refused injection without parsing
messages: only an error whose stage is ``inject`` may have reached the chain.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TezForgeError(Exception):
    """
    Base exception for all tezforge errors.

    Attributes:
        code: Machine-readable error code, one per subclass.
        message: Human-readable error description.
        stage: Submission stage that was running ("fetch_head", "forge",
            "sign", "preapply", "validate_applied", "inject"), or None when
            the error was raised outside a submission (builders, key loading).
        details: Additional error context.

    Example:
        >>> try:
        ...     await client.send_transaction_operation(store, "tz1...", 10, 1500)
        ... except TezForgeError as e:
        ...     if e.stage != "inject":
        ...         retry_later()
    """

    code = "TEZFORGE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.details = dict(details or {})

    def at_stage(self, stage: str) -> TezForgeError:
        """Record ``stage`` unless one is already set. Returns self."""
        if self.stage is None:
            self.stage = stage
        return self

    def __str__(self) -> str:
        if self.stage is None:
            return f"[{self.code}] {self.message}"
        return f"[{self.code}] {self.message} (during {self.stage})"

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary form for structured logs and JSON responses."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "details": self.details,
        }
