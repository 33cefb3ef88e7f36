"""
Text file ingestion for the upload endpoint.

Responsible for:
  1. Extension allow-list validation
  2. Per-file size enforcement
  3. UTF-8 decoding (a leading BOM is dropped)
  4. Syntax language hint for the viewer
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from diffvault.config.settings import Settings
from diffvault.core.errors import FileDecodeError, FileTooLargeError, UnsupportedFileTypeError
from diffvault.services.ingestion.size_guard import format_bytes

_log = structlog.get_logger(__name__)

_LANGUAGES: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".json": "json",
    ".css": "css",
    ".html": "html",
    ".xml": "xml",
    ".md": "markdown",
    ".sh": "bash",
    ".bash": "bash",
    ".sql": "sql",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".env": "bash",
}


@dataclass(frozen=True)
class IngestedFile:
    """A decoded upload ready to be diffed."""

    filename: str
    extension: str
    language: str
    size_bytes: int
    text: str


def get_file_extension(filename: str) -> str:
    """Return the lowercase extension including the dot, or ``""``."""
    dot = filename.rfind(".")
    if dot == -1:
        return ""
    return filename[dot:].lower()


def is_supported_file_type(filename: str, allowed: list[str]) -> bool:
    return get_file_extension(filename) in allowed


def lang_from_extension(extension: str) -> str:
    """Map an extension to a syntax-highlight language name."""
    return _LANGUAGES.get(extension.lower(), "plaintext")


def read_text_upload(filename: str, data: bytes, settings: Settings) -> IngestedFile:
    """
    Validate and decode one uploaded file.

    Raises:
        UnsupportedFileTypeError: Extension not in the configured allow-list.
        FileTooLargeError: File exceeds ``max_file_size_bytes``.
        FileDecodeError: Content is not valid UTF-8.
    """
    extension = get_file_extension(filename)
    if not is_supported_file_type(filename, settings.supported_file_extensions):
        raise UnsupportedFileTypeError(extension, settings.supported_file_extensions)

    limit = settings.max_file_size_bytes
    if len(data) > limit:
        raise FileTooLargeError(
            f"File too large: {format_bytes(len(data))}. "
            f"Maximum allowed size is {format_bytes(limit)}.",
            size_bytes=len(data),
            limit_bytes=limit,
        )

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FileDecodeError(filename, str(exc)) from exc

    _log.info("file_ingested", filename=filename, size_bytes=len(data), extension=extension)
    return IngestedFile(
        filename=filename,
        extension=extension,
        language=lang_from_extension(extension),
        size_bytes=len(data),
        text=text,
    )
