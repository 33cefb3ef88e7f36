"""
Diff facade: the public entry points of the diff engine.

Both functions are pure. They perform no I/O, keep no state between calls
and are safe to run concurrently on independent inputs. Neither enforces a
size limit; callers bound input size first (see
``diffvault.services.ingestion.size_guard``).
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from diffvault.core.errors import InvalidInputTypeError
from diffvault.schemas.diff import CharSegment, DiffResult
from diffvault.services.diff.aligner import RunKind, align
from diffvault.services.diff.builder import build_diff_result

_log = structlog.get_logger(__name__)

_SEGMENT_TYPES: dict[RunKind, str] = {
    RunKind.EQUAL: "equal",
    RunKind.INSERTED: "added",
    RunKind.DELETED: "removed",
}


def split_lines(text: str) -> list[str]:
    """
    Split text into line tokens on ``\\n``.

    A single trailing newline terminates the last line rather than starting
    an empty one, so ``"a\\nb\\n"`` gives ``["a", "b"]`` while ``"a\\n\\n"``
    gives ``["a", ""]``. Empty text has no lines.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _trimmed_equals(a: str, b: str) -> bool:
    return a.strip() == b.strip()


def _line_equality(ignore_whitespace: bool) -> Callable[[str, str], bool] | None:
    # Only leading/trailing whitespace is ignored; runs of inner
    # whitespace still have to match.
    return _trimmed_equals if ignore_whitespace else None


def compute_diff(original: str, modified: str, ignore_whitespace: bool = False) -> DiffResult:
    """
    Compute a line-level diff between two texts.

    Args:
        original: The original (left) text.
        modified: The modified (right) text.
        ignore_whitespace: Compare lines after stripping leading and trailing
            whitespace. The result still carries the untrimmed content.

    Returns:
        DiffResult with numbered chunks, statistics and line counts.

    Raises:
        InvalidInputTypeError: If either text is not a ``str``.
    """
    if not isinstance(original, str):
        raise InvalidInputTypeError("original", original)
    if not isinstance(modified, str):
        raise InvalidInputTypeError("modified", modified)

    start = time.perf_counter()
    left = split_lines(original)
    right = split_lines(modified)
    runs = align(left, right, _line_equality(ignore_whitespace))
    result = build_diff_result(runs)

    _log.debug(
        "diff_computed",
        original_lines=len(left),
        modified_lines=len(right),
        runs=len(runs),
        edit_distance=result.stats.added + result.stats.removed,
        ignore_whitespace=ignore_whitespace,
        duration_ms=int((time.perf_counter() - start) * 1000),
    )
    return result


def compute_inline_char_diff(old_line: str, new_line: str) -> list[CharSegment]:
    """
    Compute a character-level diff of one changed line pair.

    Characters always compare exactly. Each aligned run becomes one segment;
    ``removed`` and ``equal`` segments concatenate to ``old_line``, ``added``
    and ``equal`` segments to ``new_line``.
    """
    if not isinstance(old_line, str):
        raise InvalidInputTypeError("old_line", old_line)
    if not isinstance(new_line, str):
        raise InvalidInputTypeError("new_line", new_line)

    segments: list[CharSegment] = []
    for run in align(old_line, new_line):
        chars = run.right if run.kind is RunKind.INSERTED else run.left
        segments.append(CharSegment(type=_SEGMENT_TYPES[run.kind], value="".join(chars)))
    return segments
