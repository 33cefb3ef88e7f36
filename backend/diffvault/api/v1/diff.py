"""Diff API endpoints."""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from diffvault.api.deps import SettingsDep
from diffvault.core.metrics import DIFF_DURATION, DIFFS_COMPUTED
from diffvault.schemas.diff import (
    DiffLimits,
    DiffRequest,
    DiffResult,
    FileDiffResponse,
    FileInfo,
    InlineDiffRequest,
    InlineDiffResponse,
)
from diffvault.services.diff import compute_diff, compute_inline_char_diff
from diffvault.services.ingestion.size_guard import ensure_within_limit
from diffvault.services.ingestion.text_file import IngestedFile, read_text_upload

_log = structlog.get_logger(__name__)
router = APIRouter(prefix="/diff", tags=["diff"])


async def _run_line_diff(original: str, modified: str, ignore_whitespace: bool) -> DiffResult:
    """Run the engine on a worker thread so large inputs never block the event loop."""
    with DIFF_DURATION.labels(granularity="line").time():
        result = await run_in_threadpool(compute_diff, original, modified, ignore_whitespace)
    DIFFS_COMPUTED.labels(granularity="line").inc()
    _log.info(
        "diff_served",
        added=result.stats.added,
        removed=result.stats.removed,
        unchanged=result.stats.unchanged,
        ignore_whitespace=ignore_whitespace,
    )
    return result


def _file_info(ingested: IngestedFile) -> FileInfo:
    return FileInfo(
        filename=ingested.filename,
        extension=ingested.extension,
        language=ingested.language,
        size_bytes=ingested.size_bytes,
    )


@router.post(
    "",
    response_model=DiffResult,
    summary="Compute a line diff of two texts",
)
async def create_diff(body: DiffRequest, settings: SettingsDep) -> DiffResult:
    """
    Compare two texts line by line.

    The combined UTF-8 size is checked before the engine runs; oversized
    input is rejected with 413 and never reaches the aligner.
    """
    ensure_within_limit(body.original, body.modified, settings.diff_input_limit_bytes)
    return await _run_line_diff(body.original, body.modified, body.ignore_whitespace)


@router.post(
    "/inline",
    response_model=InlineDiffResponse,
    summary="Character-level diff of one changed line pair",
)
async def create_inline_diff(body: InlineDiffRequest, settings: SettingsDep) -> InlineDiffResponse:
    ensure_within_limit(body.old_line, body.new_line, settings.diff_input_limit_bytes)
    with DIFF_DURATION.labels(granularity="char").time():
        segments = await run_in_threadpool(compute_inline_char_diff, body.old_line, body.new_line)
    DIFFS_COMPUTED.labels(granularity="char").inc()
    return InlineDiffResponse(segments=tuple(segments))


@router.post(
    "/files",
    response_model=FileDiffResponse,
    summary="Upload two text files and diff them",
)
async def diff_files(
    original: Annotated[UploadFile, File(description="Original text file")],
    modified: Annotated[UploadFile, File(description="Modified text file")],
    settings: SettingsDep,
    ignore_whitespace: Annotated[bool, Form(alias="ignoreWhitespace")] = False,
) -> FileDiffResponse:
    """
    Diff two uploaded text files.

    Each file is validated (extension, size, UTF-8) on its own, then the
    pair goes through the same combined size guard as ``POST /diff``.
    """
    left = read_text_upload(original.filename or "original", await original.read(), settings)
    right = read_text_upload(modified.filename or "modified", await modified.read(), settings)
    ensure_within_limit(left.text, right.text, settings.diff_input_limit_bytes)

    result = await _run_line_diff(left.text, right.text, ignore_whitespace)
    return FileDiffResponse(
        result=result,
        original_file=_file_info(left),
        modified_file=_file_info(right),
    )


@router.get(
    "/limits",
    response_model=DiffLimits,
    summary="Input limits enforced by this server",
)
async def get_limits(settings: SettingsDep) -> DiffLimits:
    return DiffLimits(
        max_file_size_bytes=settings.max_file_size_bytes,
        max_diff_input_bytes=settings.diff_input_limit_bytes,
        supported_file_extensions=settings.supported_file_extensions,
    )
