"""Permission snapshots. Permissions carry no associations relevant to audit."""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audit_trail.domain.constants import AuditResource
from audit_trail.infrastructure.adapters.ids import to_int_id, unique_ids
from audit_trail.infrastructure.database.models import Permission

PERMISSION_COLUMNS = (
    Permission.id,
    Permission.code,
    Permission.name,
    Permission.description,
    Permission.resource,
    Permission.action,
    Permission.is_active,
    Permission.created_at,
    Permission.updated_at,
)


class PermissionAdapter:
    resource_type = AuditResource.PERMISSION

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def fetch_one(self, resource_id: Any) -> Optional[Dict[str, Any]]:
        permission_id = to_int_id(resource_id)
        if permission_id is None:
            return None
        async with self._session_factory() as session:
            result = await session.execute(
                select(*PERMISSION_COLUMNS).where(Permission.id == permission_id)
            )
            permission = result.mappings().one_or_none()
        return dict(permission) if permission is not None else None

    async def fetch_many(self, resource_ids: Sequence[Any]) -> List[Dict[str, Any]]:
        permission_ids = unique_ids(resource_ids, to_int_id)
        if not permission_ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(*PERMISSION_COLUMNS)
                .where(Permission.id.in_(permission_ids))
                .order_by(Permission.id)
            )
            return [dict(permission) for permission in result.mappings().all()]
