"""Audit domain: enums, options, records, exceptions. No I/O."""

from audit_trail.domain.constants import AuditAction, AuditResource
from audit_trail.domain.exceptions import (
    AuditError,
    InvalidAdapterError,
    InvalidAuditOptionsError,
    NotRegisteredError,
)
from audit_trail.domain.models import AuditOptions, AuditRecord

__all__ = [
    "AuditAction",
    "AuditResource",
    "AuditOptions",
    "AuditRecord",
    "AuditError",
    "InvalidAdapterError",
    "InvalidAuditOptionsError",
    "NotRegisteredError",
]
