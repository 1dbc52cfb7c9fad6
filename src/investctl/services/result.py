"""ServiceResult and ServiceError — the contract every service method returns.

INVARIANT: Business-rule failures are returned, never raised.
The CLI and the tests consume this type; ``error.code`` holds an
:class:`~investctl.domain.errors.ErrorCode` value.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from investctl.domain.errors import ErrorCode


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Tagged success-or-failure value for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"withdraw"``).
        data: Operation-specific payload on success.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry timings).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Build a failed result carrying *code* and *message*."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=str(code), message=message, detail=detail),
        )
