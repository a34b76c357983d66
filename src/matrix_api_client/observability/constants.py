# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `matrix_client_` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`

Label Best Practices:
    Use only categorical labels:
    - `endpoint` - Endpoint name (sync, login, register, whoami, ...)
    - `outcome` - success or the error class name
    - `method` - HTTP method

    NEVER use user IDs, room IDs or since tokens as label values.
"""


METRIC_PREFIX = "matrix_client"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Dispatch Metrics (dispatcher.py)
# =============================================================================

DISPATCHES_TOTAL = f"{METRIC_PREFIX}_dispatches_total"
"""Total dispatches by endpoint and outcome."""

DISPATCH_DURATION_SECONDS = f"{METRIC_PREFIX}_dispatch_duration_seconds"
"""Time from dispatch start until the typed response or error is ready."""

AUTHENTICATION_REJECTIONS_TOTAL = f"{METRIC_PREFIX}_authentication_rejections_total"
"""Dispatches refused locally because no session was set."""


# =============================================================================
# Sync Metrics (sync.py)
# =============================================================================

SYNC_BATCHES_TOTAL = f"{METRIC_PREFIX}_sync_batches_total"
"""Sync responses delivered by sync streams."""

SYNC_STREAM_FAILURES_TOTAL = f"{METRIC_PREFIX}_sync_stream_failures_total"
"""Sync streams that terminated with an error."""


# =============================================================================
# Histogram Buckets
# =============================================================================

DISPATCH_DURATION_BUCKETS = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0)
"""Buckets for dispatch durations; the upper range covers long-poll syncs."""


__all__ = [
    "AUTHENTICATION_REJECTIONS_TOTAL",
    "DISPATCHES_TOTAL",
    "DISPATCH_DURATION_BUCKETS",
    "DISPATCH_DURATION_SECONDS",
    "METRIC_PREFIX",
    "SYNC_BATCHES_TOTAL",
    "SYNC_STREAM_FAILURES_TOTAL",
]
