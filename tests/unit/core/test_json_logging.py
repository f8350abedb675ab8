"""JsonFormatter: request context and extra fields in every line."""

import json
import logging

from audit_trail.config.logging import JsonFormatter
from audit_trail.core.context import RequestContext, RequestContextData


def make_record(**extra):
    record = logging.LogRecord("audit_trail.test", logging.ERROR, __file__, 1, "audit_prior_capture_failed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_includes_context_and_extra():
    with RequestContext.scope(RequestContextData(request_id="req-1", actor_id="u-1")):
        line = JsonFormatter().format(make_record(resource_type="role", error="db down"))
    data = json.loads(line)
    assert data["message"] == "audit_prior_capture_failed"
    assert data["level"] == "ERROR"
    assert data["request_id"] == "req-1"
    assert data["actor_id"] == "u-1"
    assert data["resource_type"] == "role"
    assert data["error"] == "db down"


def test_without_context():
    data = json.loads(JsonFormatter().format(make_record()))
    assert data["request_id"] is None
    assert data["actor_id"] is None
