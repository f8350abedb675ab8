"""DB-backed audit log sink. Persists records to PostgreSQL (audit_logs table)."""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Sequence

from pydantic_core import to_jsonable_python
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audit_trail.domain.models import AuditRecord
from audit_trail.infrastructure.database.models import AuditLog

UNIQUE_CONSTRAINT = "uq_audit_logs_resource_action_created_at"


def _to_json(value: Any) -> Any:
    if value is None:
        return None
    return to_jsonable_python(value, fallback=str)


def audit_log_row(record: AuditRecord, created_at: datetime) -> Dict[str, Any]:
    """Column values for one audit_logs row; snapshots become JSON-compatible values."""
    return {
        "id": uuid.uuid4(),
        "user_id": record.actor_id,
        "request_id": record.request_id,
        "action": record.action.value,
        "resource_type": record.resource_type.value,
        "resource_id": record.resource_id,
        "old_data": _to_json(record.old_data),
        "new_data": _to_json(record.new_data),
        "ip": record.ip,
        "user_agent": record.user_agent,
        "created_at": created_at,
    }


class DbAuditLogSink:
    """Implements AuditLogSink. The creation timestamp is stamped here, at write time."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_audit_log(self, record: AuditRecord) -> None:
        row = audit_log_row(record, datetime.now(timezone.utc))
        async with self._session_factory() as session:
            session.add(AuditLog(**row))
            await session.commit()

    async def create_audit_log_batch(
        self,
        records: Sequence[AuditRecord],
        *,
        skip_duplicates: bool = True,
    ) -> None:
        if not records:
            return
        created_at = datetime.now(timezone.utc)
        stmt = insert(AuditLog).values([audit_log_row(r, created_at) for r in records])
        if skip_duplicates:
            stmt = stmt.on_conflict_do_nothing(constraint=UNIQUE_CONSTRAINT)
        async with self._session_factory() as session:
            await session.execute(stmt)
            await session.commit()
