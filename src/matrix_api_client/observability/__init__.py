# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability and metrics for the Matrix API client.

Classes:
    DispatchMetrics: Dataclass counters for dispatches and sync streams.
    PrometheusDispatchMetrics: Prometheus counters and histograms.

Functions:
    get_prometheus_dispatch_metrics: Get or create the Prometheus metrics singleton.
    reset_prometheus_dispatch_metrics: Reset the Prometheus metrics singleton.

Constants:
    All metric name constants from the constants module.
"""

from .constants import (
    AUTHENTICATION_REJECTIONS_TOTAL,
    DISPATCH_DURATION_BUCKETS,
    DISPATCH_DURATION_SECONDS,
    DISPATCHES_TOTAL,
    METRIC_PREFIX,
    SYNC_BATCHES_TOTAL,
    SYNC_STREAM_FAILURES_TOTAL,
)
from .metrics import (
    SUCCESS_OUTCOME,
    DispatchMetrics,
    PrometheusDispatchMetrics,
    get_prometheus_dispatch_metrics,
    reset_prometheus_dispatch_metrics,
)

__all__ = [
    "AUTHENTICATION_REJECTIONS_TOTAL",
    "DISPATCHES_TOTAL",
    "DISPATCH_DURATION_BUCKETS",
    "DISPATCH_DURATION_SECONDS",
    "METRIC_PREFIX",
    "SUCCESS_OUTCOME",
    "SYNC_BATCHES_TOTAL",
    "SYNC_STREAM_FAILURES_TOTAL",
    # Metrics
    "DispatchMetrics",
    "PrometheusDispatchMetrics",
    "get_prometheus_dispatch_metrics",
    "reset_prometheus_dispatch_metrics",
]
