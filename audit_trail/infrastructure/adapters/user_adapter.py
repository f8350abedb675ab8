"""User snapshots with assigned role ids. Never selects password or refresh_token."""

from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audit_trail.domain.constants import AuditResource
from audit_trail.infrastructure.adapters.ids import to_str_id, unique_ids
from audit_trail.infrastructure.database.models import User, UserRole

USER_COLUMNS = (
    User.id,
    User.username,
    User.email,
    User.first_name,
    User.last_name,
    User.phone,
    User.avatar,
    User.is_active,
    User.is_verified,
)


class UserAdapter:
    resource_type = AuditResource.USER

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def fetch_one(self, resource_id: Any) -> Optional[Dict[str, Any]]:
        user_id = to_str_id(resource_id)
        if user_id is None:
            return None
        async with self._session_factory() as session:
            result = await session.execute(select(*USER_COLUMNS).where(User.id == user_id))
            user = result.mappings().one_or_none()
            if user is None:
                return None
            result = await session.execute(
                select(UserRole.role_id)
                .where(UserRole.user_id == user_id)
                .order_by(UserRole.role_id)
            )
            role_ids = list(result.scalars().all())
        return {**user, "role_ids": role_ids}

    async def fetch_many(self, resource_ids: Sequence[Any]) -> List[Dict[str, Any]]:
        user_ids = unique_ids(resource_ids, to_str_id)
        if not user_ids:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(*USER_COLUMNS).where(User.id.in_(user_ids)).order_by(User.id)
            )
            users = result.mappings().all()
            result = await session.execute(
                select(UserRole.user_id, UserRole.role_id)
                .where(UserRole.user_id.in_(user_ids))
                .order_by(UserRole.user_id, UserRole.role_id)
            )
            assignments = result.all()

        roles_by_user: Dict[str, List[int]] = defaultdict(list)
        for user_id, role_id in assignments:
            roles_by_user[user_id].append(role_id)
        return [{**user, "role_ids": roles_by_user.get(user["id"], [])} for user in users]
