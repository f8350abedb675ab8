"""Audit action and resource enums."""

from enum import Enum


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    UPDATE_STATUS = "UPDATE_STATUS"
    DELETE = "DELETE"
    BATCH_DELETE = "BATCH_DELETE"

    # RBAC
    ASSIGN_PERMISSIONS = "ASSIGN_PERMISSIONS"
    ASSIGN_ROLES = "ASSIGN_ROLES"
    REMOVE_ROLE = "REMOVE_ROLE"

    # Users
    UPDATE_PROFILE = "UPDATE_PROFILE"
    CHANGE_PASSWORD = "CHANGE_PASSWORD"
    VERIFY_USER = "VERIFY_USER"
    CREATE_USER = "CREATE_USER"


class AuditResource(str, Enum):
    """Resource type tag. Each value needs exactly one registered adapter."""

    ROLE = "role"
    PERMISSION = "permission"
    USER = "user"
