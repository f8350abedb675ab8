"""Fixtures for audit pipeline tests: mock sink, mock adapters, isolated registry."""

from unittest.mock import AsyncMock

import pytest

from audit_trail.application.audit_log_service import AuditLogService
from audit_trail.application.registry import ResourceAdapterRegistry
from audit_trail.domain.constants import AuditResource


def make_adapter(resource_type=AuditResource.ROLE):
    adapter = AsyncMock()
    adapter.resource_type = resource_type
    adapter.fetch_one = AsyncMock(return_value=None)
    adapter.fetch_many = AsyncMock(return_value=[])
    return adapter


@pytest.fixture
def sink():
    s = AsyncMock()
    s.create_audit_log = AsyncMock(return_value=None)
    s.create_audit_log_batch = AsyncMock(return_value=None)
    return s


@pytest.fixture
def role_adapter():
    return make_adapter(AuditResource.ROLE)


@pytest.fixture
def registry(role_adapter):
    r = ResourceAdapterRegistry()
    r.register(role_adapter)
    return r


@pytest.fixture
def audit_service(sink, registry):
    return AuditLogService(sink=sink, registry=registry)
