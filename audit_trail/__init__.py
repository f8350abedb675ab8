"""Audit trail capture: before/after snapshots of audited operations."""

from audit_trail.application import AuditLogService, ResourceAdapterRegistry, audit_log
from audit_trail.domain import AuditAction, AuditOptions, AuditRecord, AuditResource

__version__ = "0.1.0"

__all__ = [
    "AuditAction",
    "AuditLogService",
    "AuditOptions",
    "AuditRecord",
    "AuditResource",
    "ResourceAdapterRegistry",
    "audit_log",
]
