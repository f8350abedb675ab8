"""Audit pipeline counters. Thread-safe, in-memory."""

import threading
from typing import Any

AUDIT_RECORDS_DISPATCHED = "audit_records_dispatched"
AUDIT_RECORDS_EXCLUDED = "audit_records_excluded"
AUDIT_CAPTURE_FAILED = "audit_capture_failed"
AUDIT_DISPATCH_FAILED = "audit_dispatch_failed"
AUDIT_DISPATCH_DROPPED = "audit_dispatch_dropped"


class MetricsCollector:
    """
    Counters for the audit pipeline, optionally labelled by resource type.
    Exposes increment, get, export_metrics.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, float] = {}
        self._counters_by_resource: dict[str, dict[str, float]] = {}

    def increment(
        self,
        name: str,
        value: float = 1.0,
        *,
        resource_type: str | None = None,
    ) -> None:
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value
            if resource_type is not None:
                by_resource = self._counters_by_resource.setdefault(name, {})
                by_resource[resource_type] = by_resource.get(resource_type, 0) + value

    def get(self, name: str, *, resource_type: str | None = None) -> float:
        with self._lock:
            if resource_type is None:
                return self._counters.get(name, 0)
            return self._counters_by_resource.get(name, {}).get(resource_type, 0)

    def export_metrics(self) -> dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "counters_by_resource": {
                    k: dict(v) for k, v in self._counters_by_resource.items()
                },
            }

    def reset(self) -> None:
        """Reset all metrics (for tests)."""
        with self._lock:
            self._counters.clear()
            self._counters_by_resource.clear()
