"""AuditDispatcher: detached tasks, failure logging, pending bound, drain."""

import asyncio

from audit_trail.application.dispatcher import AuditDispatcher
from audit_trail.observability.metrics import (
    AUDIT_DISPATCH_DROPPED,
    AUDIT_DISPATCH_FAILED,
    MetricsCollector,
)


async def test_dispatch_runs_task_in_background():
    dispatcher = AuditDispatcher()
    written = []

    async def write(record, *, skip_duplicates):
        written.append((record, skip_duplicates))

    assert dispatcher.dispatch(write, "r1", skip_duplicates=True, resource_type="role")
    assert written == []
    await dispatcher.drain()
    assert written == [("r1", True)]
    assert dispatcher.pending_count == 0


async def test_failure_is_logged_not_raised(caplog):
    metrics = MetricsCollector()
    dispatcher = AuditDispatcher(metrics=metrics)

    async def write(record):
        raise ConnectionError("sink unavailable")

    dispatcher.dispatch(write, "r1", resource_type="role")
    await dispatcher.drain()

    failures = [r for r in caplog.records if r.getMessage() == "audit_dispatch_failed"]
    assert len(failures) == 1
    assert failures[0].error == "sink unavailable"
    assert metrics.get(AUDIT_DISPATCH_FAILED, resource_type="role") == 1


async def test_dispatch_dropped_when_pending_limit_reached():
    metrics = MetricsCollector()
    dispatcher = AuditDispatcher(max_pending=1, metrics=metrics)
    release = asyncio.Event()

    async def write(record):
        await release.wait()

    assert dispatcher.dispatch(write, "r1") is True
    assert dispatcher.dispatch(write, "r2") is False
    assert metrics.get(AUDIT_DISPATCH_DROPPED) == 1

    release.set()
    await dispatcher.drain()
    assert dispatcher.dispatch(write, "r3") is True
    await dispatcher.drain()


async def test_drain_with_nothing_pending():
    dispatcher = AuditDispatcher()
    await dispatcher.drain()
    assert dispatcher.pending_count == 0
