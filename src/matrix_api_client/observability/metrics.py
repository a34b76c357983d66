# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Dispatch metrics for the Matrix API client.

This module provides:
1. DispatchMetrics - Dataclass counters for dispatches and sync streams
2. PrometheusDispatchMetrics - Prometheus counters and histograms for the same

Usage:
    metrics = DispatchMetrics()

    # Record a successful dispatch
    metrics.record_success("sync", duration=0.42)

    # Record a failed dispatch
    metrics.record_failure("login", "TransportError", duration=0.01)

    # Get stats for JSON serialization
    stats = metrics.get_stats()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram

from .constants import (
    AUTHENTICATION_REJECTIONS_TOTAL,
    DISPATCH_DURATION_BUCKETS,
    DISPATCH_DURATION_SECONDS,
    DISPATCHES_TOTAL,
    SYNC_BATCHES_TOTAL,
    SYNC_STREAM_FAILURES_TOTAL,
)

logger = logging.getLogger(__name__)

SUCCESS_OUTCOME = "success"


@dataclass
class DispatchMetrics:
    """
    Counters for dispatches and sync streams.

    Thread Safety:
        All updates take a threading.Lock so that counters stay consistent
        when dispatches run on several event loops or threads.

    Example:
        >>> metrics = DispatchMetrics()
        >>> metrics.record_success("whoami", duration=0.1)
        >>> metrics.record_failure("whoami", "ProtocolError")
        >>> metrics.get_success_rate()
        0.5
    """

    dispatches: int = 0
    successes: int = 0
    failures: int = 0
    authentication_rejections: int = 0
    sync_batches: int = 0
    sync_stream_failures: int = 0

    # Per-endpoint and per-error breakdowns
    _per_endpoint: dict[str, int] = field(default_factory=dict, repr=False)
    _per_error: dict[str, int] = field(default_factory=dict, repr=False)

    # Optional Prometheus mirror of the counters
    prometheus: PrometheusDispatchMetrics | None = field(default=None, repr=False)

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_success_rate(self) -> float:
        """
        Proportion of dispatches that succeeded.

        Returns:
            A float between 0.0 and 1.0. Returns 1.0 if nothing has been
            dispatched yet.
        """
        return self.successes / self.dispatches if self.dispatches > 0 else 1.0

    def record_success(self, endpoint: str, duration: float | None = None) -> None:
        """Record a dispatch that produced a typed response."""
        with self._lock:
            self.dispatches += 1
            self.successes += 1
            self._per_endpoint[endpoint] = self._per_endpoint.get(endpoint, 0) + 1

        if self.prometheus is not None:
            self.prometheus.observe_dispatch(endpoint, SUCCESS_OUTCOME, duration)

    def record_failure(
        self, endpoint: str, error_type: str, duration: float | None = None
    ) -> None:
        """
        Record a failed dispatch.

        Args:
            endpoint: Endpoint name
            error_type: Class name of the raised error (e.g. 'TransportError')
            duration: Time spent in the dispatch, if known
        """
        with self._lock:
            self.dispatches += 1
            self.failures += 1
            self._per_endpoint[endpoint] = self._per_endpoint.get(endpoint, 0) + 1
            self._per_error[error_type] = self._per_error.get(error_type, 0) + 1
            if error_type == "AuthenticationRequiredError":
                self.authentication_rejections += 1

        if self.prometheus is not None:
            self.prometheus.observe_dispatch(endpoint, error_type, duration)

    def record_sync_batch(self) -> None:
        """Record a sync response delivered by a sync stream."""
        with self._lock:
            self.sync_batches += 1

        if self.prometheus is not None:
            self.prometheus.observe_sync_batch()

    def record_sync_failure(self) -> None:
        """Record a sync stream terminating with an error."""
        with self._lock:
            self.sync_stream_failures += 1

        if self.prometheus is not None:
            self.prometheus.observe_sync_failure()

    def get_stats(self) -> dict[str, Any]:
        """
        Return metrics as a dictionary for JSON serialization.

        Returns:
            Dictionary containing all counters and breakdowns.
        """
        with self._lock:
            return {
                "dispatches": self.dispatches,
                "successes": self.successes,
                "failures": self.failures,
                "success_rate": self.get_success_rate(),
                "authentication_rejections": self.authentication_rejections,
                "sync_batches": self.sync_batches,
                "sync_stream_failures": self.sync_stream_failures,
                "per_endpoint": dict(self._per_endpoint),
                "per_error": dict(self._per_error),
            }

    def reset(self) -> None:
        """Reset all counters to zero."""
        with self._lock:
            self.dispatches = 0
            self.successes = 0
            self.failures = 0
            self.authentication_rejections = 0
            self.sync_batches = 0
            self.sync_stream_failures = 0
            self._per_endpoint.clear()
            self._per_error.clear()


class PrometheusDispatchMetrics:
    """
    Prometheus counters and histograms for dispatches.

    Metrics:
        - matrix_client_dispatches_total{endpoint, outcome}
        - matrix_client_dispatch_duration_seconds{endpoint}
        - matrix_client_authentication_rejections_total{endpoint}
        - matrix_client_sync_batches_total
        - matrix_client_sync_stream_failures_total

    Usage:
        >>> prom_metrics = PrometheusDispatchMetrics(registry=CollectorRegistry())
        >>> prom_metrics.observe_dispatch("sync", "success", 0.42)
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """
        Initialize Prometheus dispatch metrics.

        Args:
            registry: Optional CollectorRegistry. If None, uses the default registry.
        """
        kwargs: dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry

        self.dispatches = Counter(
            DISPATCHES_TOTAL,
            "Total dispatches by endpoint and outcome",
            ["endpoint", "outcome"],
            **kwargs,
        )

        self.dispatch_duration_seconds = Histogram(
            DISPATCH_DURATION_SECONDS,
            "Duration of dispatches",
            ["endpoint"],
            buckets=DISPATCH_DURATION_BUCKETS,
            **kwargs,
        )

        self.authentication_rejections = Counter(
            AUTHENTICATION_REJECTIONS_TOTAL,
            "Dispatches refused because no session was set",
            ["endpoint"],
            **kwargs,
        )

        self.sync_batches = Counter(
            SYNC_BATCHES_TOTAL,
            "Sync responses delivered by sync streams",
            **kwargs,
        )

        self.sync_stream_failures = Counter(
            SYNC_STREAM_FAILURES_TOTAL,
            "Sync streams terminated by an error",
            **kwargs,
        )

        logger.info("Prometheus dispatch metrics initialized")

    def observe_dispatch(
        self, endpoint: str, outcome: str, duration_seconds: float | None = None
    ) -> None:
        """
        Observe a finished dispatch.

        Args:
            endpoint: Endpoint name
            outcome: 'success' or the error class name
            duration_seconds: Dispatch duration, if measured
        """
        self.dispatches.labels(endpoint=endpoint, outcome=outcome).inc()
        if duration_seconds is not None:
            self.dispatch_duration_seconds.labels(endpoint=endpoint).observe(
                duration_seconds
            )
        if outcome == "AuthenticationRequiredError":
            self.authentication_rejections.labels(endpoint=endpoint).inc()

    def observe_sync_batch(self) -> None:
        self.sync_batches.inc()

    def observe_sync_failure(self) -> None:
        self.sync_stream_failures.inc()


# Module-level singleton registered with the default registry
_prometheus_dispatch_metrics: PrometheusDispatchMetrics | None = None
_prometheus_lock = threading.Lock()


def get_prometheus_dispatch_metrics() -> PrometheusDispatchMetrics:
    """
    Get or create the Prometheus dispatch metrics singleton.

    Uses double-checked locking so that concurrent callers never register
    the same metric names twice with the default registry.
    """
    global _prometheus_dispatch_metrics

    if _prometheus_dispatch_metrics is None:
        with _prometheus_lock:
            if _prometheus_dispatch_metrics is None:
                _prometheus_dispatch_metrics = PrometheusDispatchMetrics()

    return _prometheus_dispatch_metrics


def reset_prometheus_dispatch_metrics() -> None:
    """Reset the Prometheus dispatch metrics singleton (mainly for testing)."""
    global _prometheus_dispatch_metrics
    _prometheus_dispatch_metrics = None


__all__ = [
    "SUCCESS_OUTCOME",
    "DispatchMetrics",
    "PrometheusDispatchMetrics",
    "get_prometheus_dispatch_metrics",
    "reset_prometheus_dispatch_metrics",
]
