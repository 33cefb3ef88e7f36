"""Prometheus metrics exposed on ``/metrics``."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

DIFFS_COMPUTED = Counter(
    "diffvault_diffs_computed_total",
    "Diffs computed, by granularity",
    ["granularity"],
)

INPUTS_REJECTED = Counter(
    "diffvault_inputs_rejected_total",
    "Diff inputs rejected before reaching the engine, by error code",
    ["code"],
)

DIFF_DURATION = Histogram(
    "diffvault_diff_duration_seconds",
    "Wall time spent in the diff engine",
    ["granularity"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)
