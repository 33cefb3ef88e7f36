"""
Input-size guard for diff requests.

The diff engine enforces no limit of its own; every entry point that
accepts text from outside calls ``ensure_within_limit`` before invoking it.
"""

from __future__ import annotations

import structlog

from diffvault.core.errors import InputTooLargeError

_log = structlog.get_logger(__name__)

_MIB = 1024 * 1024


def utf8_size(text: str) -> int:
    return len(text.encode("utf-8"))


def format_bytes(size: int) -> str:
    """Format a byte count as ``"32 B"``, ``"1.5 KB"`` or ``"1.00 MB"``."""
    if size < 1024:
        return f"{size} B"
    if size < _MIB:
        return f"{size / 1024:.1f} KB"
    return f"{size / _MIB:.2f} MB"


def ensure_within_limit(original: str, modified: str, limit_bytes: int) -> int:
    """
    Check the combined UTF-8 size of both diff inputs.

    Returns:
        The measured combined size in bytes.

    Raises:
        InputTooLargeError: If the combined size exceeds ``limit_bytes``.
    """
    size = utf8_size(original) + utf8_size(modified)
    if size > limit_bytes:
        _log.warning("input_too_large", size_bytes=size, limit_bytes=limit_bytes)
        raise InputTooLargeError(
            f"Inputs are too large ({size / _MIB:.2f} MB). "
            f"Maximum combined size is {limit_bytes / _MIB:.2f} MB.",
            size_bytes=size,
            limit_bytes=limit_bytes,
        )
    return size
