"""Explicit startup wiring: adapter registry, sink, dispatcher, audit service."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audit_trail.application.audit_log_service import AuditLogService
from audit_trail.application.audit_log_sink import AuditLogSink
from audit_trail.application.dispatcher import AuditDispatcher
from audit_trail.application.registry import ResourceAdapterRegistry
from audit_trail.config.settings import AuditSettings, get_settings
from audit_trail.infrastructure.adapters import PermissionAdapter, RoleAdapter, UserAdapter
from audit_trail.infrastructure.database.session import (
    build_session_factory,
    create_engine_from_settings,
)
from audit_trail.infrastructure.sinks import DbAuditLogSink, LoggingAuditLogSink
from audit_trail.observability.metrics import MetricsCollector

logger = logging.getLogger(__name__)


def build_adapter_registry(
    session_factory: async_sessionmaker[AsyncSession],
) -> ResourceAdapterRegistry:
    """Registry with the role, permission and user adapters."""
    registry = ResourceAdapterRegistry()
    registry.register(RoleAdapter(session_factory))
    registry.register(PermissionAdapter(session_factory))
    registry.register(UserAdapter(session_factory))
    return registry


def build_sink(
    settings: AuditSettings,
    session_factory: async_sessionmaker[AsyncSession],
) -> AuditLogSink:
    if settings.audit_sink == "log":
        return LoggingAuditLogSink()
    return DbAuditLogSink(session_factory)


def create_audit_log_service(
    settings: Optional[AuditSettings] = None,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> AuditLogService:
    """Build the audit pipeline once at startup. Engine is created from settings if no factory is given."""
    settings = settings or get_settings()
    if session_factory is None:
        session_factory = build_session_factory(create_engine_from_settings(settings))
    metrics = MetricsCollector()
    service = AuditLogService(
        sink=build_sink(settings, session_factory),
        registry=build_adapter_registry(session_factory),
        dispatcher=AuditDispatcher(
            max_pending=settings.audit_max_pending_dispatches,
            metrics=metrics,
        ),
        metrics=metrics,
    )
    logger.info(
        "audit_pipeline_ready",
        extra={"audit_sink": settings.audit_sink, "environment": settings.environment},
    )
    return service
