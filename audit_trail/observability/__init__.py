"""Observability: in-memory audit pipeline counters."""

from audit_trail.observability.metrics import MetricsCollector

__all__ = ["MetricsCollector"]
