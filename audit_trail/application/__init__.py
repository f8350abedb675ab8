"""Audit capture pipeline: orchestrator, adapter registry, dispatcher, declarations."""

from audit_trail.application.audit_log_service import AuditLogService
from audit_trail.application.audit_log_sink import AuditLogSink
from audit_trail.application.decorators import audit_log
from audit_trail.application.dispatcher import AuditDispatcher
from audit_trail.application.registry import ResourceAdapterRegistry
from audit_trail.application.resource_adapter import ResourceAdapter

__all__ = [
    "AuditLogService",
    "AuditLogSink",
    "AuditDispatcher",
    "ResourceAdapter",
    "ResourceAdapterRegistry",
    "audit_log",
]
