"""Audit log sinks: PostgreSQL table or structured log lines."""

from audit_trail.infrastructure.sinks.db_sink import DbAuditLogSink
from audit_trail.infrastructure.sinks.logging_sink import LoggingAuditLogSink

__all__ = ["DbAuditLogSink", "LoggingAuditLogSink"]
