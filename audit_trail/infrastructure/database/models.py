# audit_trail/infrastructure/database/models.py

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.sql import func

from audit_trail.infrastructure.database.session import Base


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class Role(TimestampMixin, Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(191), nullable=False, unique=True)
    code = Column(String(191), nullable=False, unique=True)
    description = Column(String(191), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class Permission(TimestampMixin, Base):
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(191), nullable=False, unique=True)
    name = Column(String(191), nullable=False)
    description = Column(String(191), nullable=True)
    resource = Column(String(191), nullable=False)
    action = Column(String(191), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)


class RolePermission(Base):
    __tablename__ = "role_permissions"

    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)
    permission_id = Column(
        Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True
    )


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(191), nullable=False, unique=True)
    email = Column(String(191), nullable=False, unique=True)
    password = Column(String(191), nullable=False)
    refresh_token = Column(Text, nullable=True)
    first_name = Column(String(191), nullable=True)
    last_name = Column(String(191), nullable=True)
    phone = Column(String(191), nullable=True)
    avatar = Column(String(191), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_verified = Column(Boolean, nullable=False, default=False)


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)


class AuditLog(Base):
    """One row per audited change. Written once, never updated."""

    __tablename__ = "audit_logs"
    __table_args__ = (
        # Uniqueness policy behind skip_duplicates on batch inserts.
        UniqueConstraint(
            "resource_type",
            "resource_id",
            "action",
            "created_at",
            name="uq_audit_logs_resource_action_created_at",
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String(191), nullable=True, index=True)
    request_id = Column(String(191), nullable=True, index=True)
    action = Column(String(191), nullable=False, index=True)
    resource_type = Column(String(191), nullable=False, index=True)
    resource_id = Column(String(191), nullable=True)
    old_data = Column(JSONB(none_as_null=True), nullable=True)
    new_data = Column(JSONB(none_as_null=True), nullable=True)
    ip = Column(String(191), nullable=True)
    user_agent = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
