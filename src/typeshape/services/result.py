"""OperationResult: what every typeshape service operation returns.

The CLI never sees exceptions from the domain layer. Services translate
:class:`~typeshape.domain.errors.InvalidInstance` and friends into an
:class:`ErrorCode`, and the code alone decides the process exit status.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Why an operation failed."""

    INVALID_INSTANCE = "INVALID_INSTANCE"
    INVALID_SCHEMA = "INVALID_SCHEMA"
    BAD_REFERENCE = "BAD_REFERENCE"
    BAD_INPUT = "BAD_INPUT"

    @property
    def exit_code(self) -> int:
        """1 when the document was rejected, 2 when the check could not run."""
        return 1 if self is ErrorCode.INVALID_INSTANCE else 2


class OperationError(BaseModel):
    """Structured error payload within an OperationResult."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class OperationResult(BaseModel):
    """Outcome of ``check`` or ``describe``.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"check"`` or ``"describe"``).
        data: The validated value or rendered schema on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: OperationError | None = None

    @classmethod
    def success(cls, op: str, **data: Any) -> OperationResult:
        return cls(ok=True, op=op, data=data)

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> OperationResult:
        return cls(
            ok=False,
            op=op,
            error=OperationError(code=code, message=message, detail=detail),
        )

    @property
    def exit_code(self) -> int:
        if self.ok:
            return 0
        return self.error.code.exit_code if self.error else 2
