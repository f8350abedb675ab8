"""Fixtures for adapter tests: in-memory SQLite via aiosqlite, seeded RBAC tables, query counter."""

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from audit_trail.infrastructure.database.models import (
    Permission,
    Role,
    RolePermission,
    User,
    UserRole,
)
from audit_trail.infrastructure.database.session import Base

# audit_logs uses PostgreSQL-only column types; adapters never touch it.
RBAC_TABLES = [
    Role.__table__,
    Permission.__table__,
    RolePermission.__table__,
    User.__table__,
    UserRole.__table__,
]


class QueryCounter:
    def __init__(self):
        self.statements: list[str] = []

    def __call__(self, conn, cursor, statement, parameters, context, executemany):
        self.statements.append(statement)

    @property
    def selects(self) -> int:
        return sum(1 for s in self.statements if s.lstrip().upper().startswith("SELECT"))

    def reset(self):
        self.statements.clear()


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, tables=RBAC_TABLES)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def query_counter(engine):
    counter = QueryCounter()
    event.listen(engine.sync_engine, "before_cursor_execute", counter)
    yield counter
    event.remove(engine.sync_engine, "before_cursor_execute", counter)


@pytest.fixture
async def seeded(session_factory):
    async with session_factory() as session:
        session.add_all(
            [
                Role(id=1, name="Admin", code="admin", description="all access", is_active=True),
                Role(id=2, name="Viewer", code="viewer", is_active=True),
                Role(id=3, name="Editor", code="editor", is_active=False),
                Permission(id=1, code="user:read", name="Read users", resource="user", action="read"),
                Permission(id=2, code="user:write", name="Write users", resource="user", action="write"),
                Permission(id=3, code="role:read", name="Read roles", resource="role", action="read"),
                User(
                    id="u-1",
                    username="alice",
                    email="alice@example.com",
                    password="hashed-secret",
                    refresh_token="refresh-secret",
                    first_name="Alice",
                ),
                User(
                    id="u-2",
                    username="bob",
                    email="bob@example.com",
                    password="hashed-secret-2",
                ),
            ]
        )
        await session.flush()
        session.add_all(
            [
                RolePermission(role_id=1, permission_id=1),
                RolePermission(role_id=1, permission_id=2),
                RolePermission(role_id=1, permission_id=3),
                RolePermission(role_id=2, permission_id=1),
                UserRole(user_id="u-1", role_id=1),
                UserRole(user_id="u-1", role_id=2),
            ]
        )
        await session.commit()
    return session_factory
