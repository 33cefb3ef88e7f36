"""
Sequence aligner: shortest edit script between two token sequences.

Implements the linear-space variant of Eugene W. Myers' O(ND) algorithm
("An O(ND) Difference Algorithm and Its Variations", 1986): a forward and
a backward greedy search meet on the middle snake, and the two halves
around it are diffed recursively. Time is O((N + M) * D) where D is the
size of the edit script; working memory is O(N + M). Common prefix and
suffix are stripped at every level of the recursion.

The same aligner serves line-level and character-level diffs; callers
supply the token sequences and, optionally, an equality predicate.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class RunKind(StrEnum):
    """Classification of an aligned span."""

    EQUAL = "equal"
    INSERTED = "inserted"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class Run(Generic[T]):
    """
    A maximal contiguous span of tokens sharing one classification.

    ``left`` holds tokens from the original sequence, ``right`` tokens from
    the modified one. Deleted runs have an empty ``right``, inserted runs an
    empty ``left``. Equal runs carry both sides, which differ only when the
    equality predicate is looser than ``==``.
    """

    kind: RunKind
    left: tuple[T, ...] = ()
    right: tuple[T, ...] = ()

    def __len__(self) -> int:
        return len(self.right) if self.kind is RunKind.INSERTED else len(self.left)


# Edit operations produced by the search, one per token.
_EQ = 0
_DEL = 1
_INS = 2


def _diff_range(
    a: Sequence[T],
    a_off: int,
    a_len: int,
    b: Sequence[T],
    b_off: int,
    b_len: int,
    equals: Callable[[T, T], bool],
    ops: list[int],
) -> None:
    """Append the edit ops for ``a[a_off:a_off+a_len]`` against the matching range of ``b``."""
    prefix = 0
    while prefix < a_len and prefix < b_len and equals(a[a_off + prefix], b[b_off + prefix]):
        prefix += 1
    a_off += prefix
    b_off += prefix
    a_len -= prefix
    b_len -= prefix

    suffix = 0
    while (
        suffix < a_len
        and suffix < b_len
        and equals(a[a_off + a_len - suffix - 1], b[b_off + b_len - suffix - 1])
    ):
        suffix += 1
    a_len -= suffix
    b_len -= suffix

    ops.extend([_EQ] * prefix)
    if not a_len:
        ops.extend([_INS] * b_len)
    elif not b_len:
        ops.extend([_DEL] * a_len)
    else:
        _bisect(a, a_off, a_len, b, b_off, b_len, equals, ops)
    ops.extend([_EQ] * suffix)


def _bisect(
    a: Sequence[T],
    a_off: int,
    a_len: int,
    b: Sequence[T],
    b_off: int,
    b_len: int,
    equals: Callable[[T, T], bool],
    ops: list[int],
) -> None:
    """
    Find a point on the middle snake and diff each half around it.

    Runs the greedy search forward from the start and backward from the
    end at once; the first overlap lies on a shortest edit path. ``v1[k]``
    is the furthest x reached forward on diagonal ``k``, ``v2[k]`` the
    number of tokens consumed backward. Both ranges have their common
    prefix and suffix already stripped.
    """
    max_d = (a_len + b_len + 1) // 2
    v_offset = max_d
    v_len = 2 * max_d + 2
    v1 = [-1] * v_len
    v2 = [-1] * v_len
    v1[v_offset + 1] = 0
    v2[v_offset + 1] = 0
    delta = a_len - b_len
    # With an odd delta the paths meet during a forward step, else a backward one.
    front = delta % 2 != 0
    # Diagonals that have run off the grid are skipped from then on.
    k1_start = k1_end = k2_start = k2_end = 0

    for d in range(max_d):
        for k1 in range(-d + k1_start, d + 1 - k1_end, 2):
            k1_offset = v_offset + k1
            if k1 == -d or (k1 != d and v1[k1_offset - 1] < v1[k1_offset + 1]):
                x1 = v1[k1_offset + 1]
            else:
                x1 = v1[k1_offset - 1] + 1
            y1 = x1 - k1
            while x1 < a_len and y1 < b_len and equals(a[a_off + x1], b[b_off + y1]):
                x1 += 1
                y1 += 1
            v1[k1_offset] = x1
            if x1 > a_len:
                k1_end += 2
            elif y1 > b_len:
                k1_start += 2
            elif front:
                k2_offset = v_offset + delta - k1
                if 0 <= k2_offset < v_len and v2[k2_offset] != -1:
                    if x1 >= a_len - v2[k2_offset]:
                        _split(a, a_off, a_len, b, b_off, b_len, x1, y1, equals, ops)
                        return

        for k2 in range(-d + k2_start, d + 1 - k2_end, 2):
            k2_offset = v_offset + k2
            if k2 == -d or (k2 != d and v2[k2_offset - 1] < v2[k2_offset + 1]):
                x2 = v2[k2_offset + 1]
            else:
                x2 = v2[k2_offset - 1] + 1
            y2 = x2 - k2
            while (
                x2 < a_len
                and y2 < b_len
                and equals(a[a_off + a_len - x2 - 1], b[b_off + b_len - y2 - 1])
            ):
                x2 += 1
                y2 += 1
            v2[k2_offset] = x2
            if x2 > a_len:
                k2_end += 2
            elif y2 > b_len:
                k2_start += 2
            elif not front:
                k1_offset = v_offset + delta - k2
                if 0 <= k1_offset < v_len and v1[k1_offset] != -1:
                    x1 = v1[k1_offset]
                    y1 = x1 - (k1_offset - v_offset)
                    if x1 >= a_len - x2:
                        _split(a, a_off, a_len, b, b_off, b_len, x1, y1, equals, ops)
                        return

    # No overlap before max_d: the ranges share no token at all.
    ops.extend([_DEL] * a_len)
    ops.extend([_INS] * b_len)


def _split(
    a: Sequence[T],
    a_off: int,
    a_len: int,
    b: Sequence[T],
    b_off: int,
    b_len: int,
    x: int,
    y: int,
    equals: Callable[[T, T], bool],
    ops: list[int],
) -> None:
    _diff_range(a, a_off, x, b, b_off, y, equals, ops)
    _diff_range(a, a_off + x, a_len - x, b, b_off + y, b_len - y, equals, ops)


def edit_script(
    left: Sequence[T],
    right: Sequence[T],
    equals: Callable[[T, T], bool] | None = None,
) -> list[int]:
    """Return the per-token edit operations of a minimal edit script."""
    ops: list[int] = []
    _diff_range(left, 0, len(left), right, 0, len(right), equals or operator.eq, ops)
    return ops


def align(
    left: Sequence[T],
    right: Sequence[T],
    equals: Callable[[T, T], bool] | None = None,
) -> list[Run[T]]:
    """
    Align two token sequences into runs of a minimal edit script.

    Between two equal runs, all deletions are emitted as one ``DELETED``
    run followed by all insertions as one ``INSERTED`` run, so fully
    disjoint inputs yield exactly one run of each.

    Args:
        left: Original token sequence.
        right: Modified token sequence.
        equals: Token equality predicate. Defaults to ``==``.

    Returns:
        Ordered runs. Concatenating ``EQUAL`` and ``DELETED`` left tokens
        reproduces ``left``; ``EQUAL`` and ``INSERTED`` right tokens
        reproduce ``right``.
    """
    runs: list[Run[T]] = []
    i = j = 0
    eq_start: tuple[int, int] | None = None
    del_start = ins_start = None
    del_count = ins_count = 0

    def flush_changes() -> None:
        nonlocal del_start, ins_start, del_count, ins_count
        if del_count:
            removed = tuple(left[del_start : del_start + del_count])
            runs.append(Run(RunKind.DELETED, left=removed))
        if ins_count:
            inserted = tuple(right[ins_start : ins_start + ins_count])
            runs.append(Run(RunKind.INSERTED, right=inserted))
        del_start = ins_start = None
        del_count = ins_count = 0

    def flush_equal() -> None:
        nonlocal eq_start
        if eq_start is not None:
            li, rj = eq_start
            runs.append(Run(RunKind.EQUAL, left=tuple(left[li:i]), right=tuple(right[rj:j])))
            eq_start = None

    for op in edit_script(left, right, equals):
        if op == _EQ:
            flush_changes()
            if eq_start is None:
                eq_start = (i, j)
            i += 1
            j += 1
        elif op == _DEL:
            flush_equal()
            if del_start is None:
                del_start = i
            del_count += 1
            i += 1
        else:
            flush_equal()
            if ins_start is None:
                ins_start = j
            ins_count += 1
            j += 1

    flush_equal()
    flush_changes()
    return runs
