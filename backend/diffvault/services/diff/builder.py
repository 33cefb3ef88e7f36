"""Expands aligned line runs into the addressed, numbered diff model."""

from __future__ import annotations

from collections.abc import Iterable

from diffvault.schemas.diff import (
    AddedLine,
    AddedLineNumber,
    DiffChunk,
    DiffLine,
    DiffResult,
    DiffStats,
    RemovedLine,
    RemovedLineNumber,
    UnchangedLine,
    UnchangedLineNumber,
)
from diffvault.services.diff.aligner import Run, RunKind


def build_diff_result(runs: Iterable[Run[str]]) -> DiffResult:
    """
    Number every line of every run and collect statistics.

    Left and right counters both start at 1. Removed lines advance only the
    left counter, added lines only the right one, unchanged lines both.
    One chunk is emitted per non-empty run; runs are never merged or split.
    """
    left_no = 1
    right_no = 1
    added = removed = unchanged = 0
    chunks: list[DiffChunk] = []

    for run in runs:
        lines: list[DiffLine] = []

        if run.kind is RunKind.DELETED:
            for content in run.left:
                lines.append(
                    RemovedLine(content=content, line_number=RemovedLineNumber(left=left_no))
                )
                left_no += 1
                removed += 1
        elif run.kind is RunKind.INSERTED:
            for content in run.right:
                lines.append(
                    AddedLine(content=content, line_number=AddedLineNumber(right=right_no))
                )
                right_no += 1
                added += 1
        else:
            for original, content in zip(run.left, run.right, strict=True):
                lines.append(
                    UnchangedLine(
                        content=content,
                        original_content=original if original != content else None,
                        line_number=UnchangedLineNumber(left=left_no, right=right_no),
                    )
                )
                left_no += 1
                right_no += 1
                unchanged += 1

        if lines:
            chunks.append(DiffChunk(lines=tuple(lines), is_unchanged=run.kind is RunKind.EQUAL))

    return DiffResult(
        chunks=tuple(chunks),
        stats=DiffStats(added=added, removed=removed, unchanged=unchanged),
    )
