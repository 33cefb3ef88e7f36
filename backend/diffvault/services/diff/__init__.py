"""Diff engine: sequence aligner, addressed model builder and facade."""

from diffvault.services.diff.aligner import Run, RunKind, align
from diffvault.services.diff.builder import build_diff_result
from diffvault.services.diff.engine import compute_diff, compute_inline_char_diff, split_lines

__all__ = [
    "Run",
    "RunKind",
    "align",
    "build_diff_result",
    "compute_diff",
    "compute_inline_char_diff",
    "split_lines",
]
