"""Error codes carried by failed service results."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Failure kinds an investment operation can report."""

    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    INVALID_EXPIRATION_DATE = "INVALID_EXPIRATION_DATE"
    NOT_FOUND = "NOT_FOUND"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    VALIDATION_FAILED = "VALIDATION_FAILED"
