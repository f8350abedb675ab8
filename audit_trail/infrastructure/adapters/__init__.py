"""SQLAlchemy-backed resource adapters for audit snapshots."""

from audit_trail.infrastructure.adapters.permission_adapter import PermissionAdapter
from audit_trail.infrastructure.adapters.role_adapter import RoleAdapter
from audit_trail.infrastructure.adapters.user_adapter import UserAdapter

__all__ = ["PermissionAdapter", "RoleAdapter", "UserAdapter"]
