"""Prometheus metrics for wait calls."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

waits_total = Counter(
    "kubewait_waits_total",
    "Completed wait calls by resource kind and outcome",
    ["kind", "outcome"],
)

wait_duration_seconds = Histogram(
    "kubewait_wait_duration_seconds",
    "Wall-clock duration of wait calls",
    ["kind"],
    buckets=(0.1, 0.5, 1, 2.5, 5, 10, 30, 60, 120, 300, 600),
)

watch_events_total = Counter(
    "kubewait_watch_events_total",
    "Watch events consumed by the condition watcher",
    ["type"],
)
