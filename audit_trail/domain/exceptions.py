"""Audit-layer exceptions. Typed, no HTTP."""


class AuditError(Exception):
    """Base for all audit-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotRegisteredError(AuditError):
    """Raised when no resource adapter is registered for a resource type."""

    def __init__(self, resource_type: str) -> None:
        self.resource_type = resource_type
        super().__init__(f"No adapter registered for resource: {resource_type}")


class InvalidAdapterError(AuditError):
    """Raised when an adapter declares a resource type that is not an AuditResource."""


class InvalidAuditOptionsError(AuditError):
    """Raised when an audit declaration is inconsistent (e.g. id_arg and id_path both set)."""
