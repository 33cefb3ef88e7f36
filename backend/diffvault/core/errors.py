"""
Structured error taxonomy for DiffVault.

Every application error has:
  - A stable error code (prefixed by domain)
  - An HTTP status code
  - A human-readable message
  - An optional detail dict for machine consumers

No internal state (stack traces, document content) is ever surfaced to clients.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable, versioned error codes. Never reuse a retired code."""

    # Diff engine
    DIFF_INVALID_INPUT = "DIFF_001"
    DIFF_INPUT_TOO_LARGE = "DIFF_002"

    # File ingestion
    FILE_UNSUPPORTED_TYPE = "FILE_001"
    FILE_TOO_LARGE = "FILE_002"
    FILE_DECODE_FAILED = "FILE_003"

    # Generic
    VALIDATION_ERROR = "GEN_001"
    INTERNAL_ERROR = "GEN_002"
    NOT_FOUND = "GEN_003"
    RATE_LIMITED = "GEN_004"


class AppError(Exception):
    """Base class for all application errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        http_status: int = 500,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        self.detail = detail or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "detail": self.detail,
            }
        }


# ── Typed convenience subclasses ──────────────────────────────────────── #


class ValidationError(AppError):
    def __init__(
        self,
        message: str,
        detail: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            http_status=422,
            detail=detail,
        )


class InvalidInputTypeError(ValidationError, TypeError):
    """Raised by the diff facade when an argument is not text."""

    def __init__(self, argument: str, received: object) -> None:
        super().__init__(
            f"{argument} must be a string, got {type(received).__name__}",
            detail={"argument": argument, "received_type": type(received).__name__},
            code=ErrorCode.DIFF_INVALID_INPUT,
        )


class PayloadTooLargeError(AppError):
    def __init__(self, code: ErrorCode, message: str, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(
            code=code,
            message=message,
            http_status=413,
            detail={"size_bytes": size_bytes, "limit_bytes": limit_bytes},
        )


class InputTooLargeError(PayloadTooLargeError):
    def __init__(self, message: str, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(ErrorCode.DIFF_INPUT_TOO_LARGE, message, size_bytes, limit_bytes)


class FileTooLargeError(PayloadTooLargeError):
    def __init__(self, message: str, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(ErrorCode.FILE_TOO_LARGE, message, size_bytes, limit_bytes)


class UnsupportedFileTypeError(ValidationError):
    def __init__(self, extension: str, allowed: list[str]) -> None:
        shown = extension or "(none)"
        super().__init__(
            f'Unsupported file type: "{shown}". Please upload a text-based file.',
            detail={"extension": extension, "allowed": allowed},
            code=ErrorCode.FILE_UNSUPPORTED_TYPE,
        )


class FileDecodeError(ValidationError):
    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(
            f"Failed to read {filename} as UTF-8 text.",
            detail={"filename": filename, "reason": reason},
            code=ErrorCode.FILE_DECODE_FAILED,
        )
