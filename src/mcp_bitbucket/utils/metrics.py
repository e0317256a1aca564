"""Request events and Prometheus metrics for Bitbucket API calls.

The client reports one RequestEvent per executed request to an optional sink.
Nothing in the request path depends on a sink being present.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

logger = logging.getLogger("mcp-bitbucket.utils.metrics")


@dataclass(frozen=True)
class RequestEvent:
    """Structured record of one executed Bitbucket request."""

    method: str
    path: str
    duration_seconds: float
    status_code: int | None = None
    error_type: str | None = None
    operation: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error_type is None


class EventSink(Protocol):
    """Anything that accepts request events."""

    def record(self, event: RequestEvent) -> None: ...


def _safe_create_metric(
    metric_class: type[Any],
    name: str,
    documentation: str,
    labelnames: list[str],
    registry: CollectorRegistry,
) -> Any | None:
    """Create a Prometheus metric, reusing an already registered one.

    Returns:
        The metric instance, or None if a clashing collector cannot be found
    """
    try:
        return metric_class(name, documentation, labelnames, registry=registry)
    except ValueError as e:
        if "Duplicated timeseries" not in str(e):
            raise
        collector = registry._names_to_collectors.get(name)
        if collector is None:
            logger.warning(f"Metric {name} already registered, metrics disabled for it")
        return collector


class PrometheusEventSink:
    """Event sink that feeds request counts and durations to Prometheus."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or REGISTRY
        self.requests = _safe_create_metric(
            Counter,
            "mcp_bitbucket_requests_total",
            "Bitbucket API requests by operation and outcome",
            ["operation", "method", "status_code", "error_type"],
            self.registry,
        )
        self.request_duration = _safe_create_metric(
            Histogram,
            "mcp_bitbucket_request_duration_seconds",
            "Bitbucket API request duration in seconds",
            ["operation", "method"],
            self.registry,
        )

    def record(self, event: RequestEvent) -> None:
        operation = event.operation or "unknown"
        if self.requests is not None:
            self.requests.labels(
                operation=operation,
                method=event.method,
                status_code=str(event.status_code) if event.status_code else "none",
                error_type=event.error_type or "none",
            ).inc()
        if self.request_duration is not None:
            self.request_duration.labels(
                operation=operation, method=event.method
            ).observe(event.duration_seconds)
