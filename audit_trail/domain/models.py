"""Audit declaration and record models. Domain-level immutability."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from audit_trail.domain.constants import AuditAction, AuditResource
from audit_trail.domain.exceptions import InvalidAuditOptionsError

Condition = Callable[[Sequence[Any], Any, Any], bool]


@dataclass(frozen=True)
class AuditOptions:
    """
    Per-operation audit declaration. Defined once where an operation is marked
    auditable and never changed afterwards.

    The resource id is located either before the call (``id_arg`` or ``id_path``,
    mutually exclusive) or after it (``id_from_result``, for CREATE).
    """

    action: AuditAction
    resource_type: AuditResource
    id_arg: Optional[int] = None
    id_path: Optional[str] = None
    id_from_result: Optional[str] = None
    batch: bool = False
    condition: Optional[Condition] = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "action", AuditAction(self.action))
            object.__setattr__(self, "resource_type", AuditResource(self.resource_type))
        except ValueError as e:
            raise InvalidAuditOptionsError(f"Invalid audit declaration: {e}") from e
        if self.id_arg is not None and self.id_path is not None:
            raise InvalidAuditOptionsError(
                "Invalid audit declaration: id_arg and id_path are mutually exclusive"
            )
        if self.id_arg is not None and (
            isinstance(self.id_arg, bool) or not isinstance(self.id_arg, int) or self.id_arg < 0
        ):
            raise InvalidAuditOptionsError(
                f"Invalid audit declaration: id_arg must be a non-negative int, got {self.id_arg!r}"
            )
        for name in ("id_path", "id_from_result"):
            value = getattr(self, name)
            if value is not None and not value.strip():
                raise InvalidAuditOptionsError(
                    f"Invalid audit declaration: {name} must not be empty"
                )


@dataclass(frozen=True)
class AuditRecord:
    """
    Immutable audit record: who, what, which resource, before/after snapshots.
    The creation timestamp is assigned by the sink when the record is persisted.
    """

    actor_id: Optional[str]
    request_id: Optional[str]
    action: AuditAction
    resource_type: AuditResource
    resource_id: Optional[str]
    old_data: Any
    new_data: Any
    ip: Optional[str]
    user_agent: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging."""
        return {
            "actor_id": self.actor_id,
            "request_id": self.request_id,
            "action": self.action.value,
            "resource_type": self.resource_type.value,
            "resource_id": self.resource_id,
            "old_data": self.old_data,
            "new_data": self.new_data,
            "ip": self.ip,
            "user_agent": self.user_agent,
        }
