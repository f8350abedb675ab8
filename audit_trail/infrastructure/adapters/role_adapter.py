"""Role snapshots, including the ids of the permissions assigned to each role."""

from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audit_trail.domain.constants import AuditResource
from audit_trail.infrastructure.adapters.ids import to_int_id, unique_ids
from audit_trail.infrastructure.database.models import Role, RolePermission

ROLE_COLUMNS = (
    Role.id,
    Role.name,
    Role.code,
    Role.description,
    Role.is_active,
    Role.created_at,
    Role.updated_at,
)


class RoleAdapter:
    """Implements ResourceAdapter for roles. Association ids land under ``permission_ids``."""

    resource_type = AuditResource.ROLE

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def fetch_one(self, resource_id: Any) -> Optional[Dict[str, Any]]:
        role_id = to_int_id(resource_id)
        if role_id is None:
            return None
        async with self._session_factory() as session:
            result = await session.execute(select(*ROLE_COLUMNS).where(Role.id == role_id))
            role = result.mappings().one_or_none()
            if role is None:
                return None
            result = await session.execute(
                select(RolePermission.permission_id)
                .where(RolePermission.role_id == role_id)
                .order_by(RolePermission.permission_id)
            )
            permission_ids = list(result.scalars().all())
        return {**role, "permission_ids": permission_ids}

    async def fetch_many(self, resource_ids: Sequence[Any]) -> List[Dict[str, Any]]:
        role_ids = unique_ids(resource_ids, to_int_id)
        if not role_ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(*ROLE_COLUMNS).where(Role.id.in_(role_ids)).order_by(Role.id)
            )
            roles = result.mappings().all()
            result = await session.execute(
                select(RolePermission.role_id, RolePermission.permission_id)
                .where(RolePermission.role_id.in_(role_ids))
                .order_by(RolePermission.role_id, RolePermission.permission_id)
            )
            assignments = result.all()

        permissions_by_role: Dict[int, List[int]] = defaultdict(list)
        for role_id, permission_id in assignments:
            permissions_by_role[role_id].append(permission_id)
        return [
            {**role, "permission_ids": permissions_by_role.get(role["id"], [])}
            for role in roles
        ]
