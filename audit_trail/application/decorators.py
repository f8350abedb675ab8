"""Declarative audit for service methods.

The decorated object exposes its ``AuditLogService`` as ``audit_log_service``::

    class RolesService:
        def __init__(self, audit_log_service: AuditLogService) -> None:
            self.audit_log_service = audit_log_service

        @audit_log(AuditOptions(action=AuditAction.UPDATE, resource_type=AuditResource.ROLE, id_arg=0))
        async def update(self, role_id: int, dto: UpdateRoleDto) -> dict:
            ...
"""

import functools
import inspect
import logging
from typing import Any, Awaitable, Callable, TypeVar

from audit_trail.domain.exceptions import InvalidAuditOptionsError
from audit_trail.domain.models import AuditOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")

AUDIT_SERVICE_ATTRIBUTE = "audit_log_service"


def audit_log(
    options: AuditOptions,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Mark an async method auditable. ``id_arg`` indexes arguments after ``self``."""

    def decorator(method: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        if not inspect.iscoroutinefunction(method):
            raise InvalidAuditOptionsError(
                f"@audit_log requires an async method, got {method.__qualname__}"
            )
        signature = inspect.signature(method)

        @functools.wraps(method)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
            service = getattr(self, AUDIT_SERVICE_ATTRIBUTE, None)
            if service is None:
                logger.warning(
                    "audit_service_missing",
                    extra={"operation": f"{type(self).__name__}.{method.__name__}"},
                )
                return await method(self, *args, **kwargs)

            # Keyword-passed arguments land at their positional index.
            bound = signature.bind(self, *args, **kwargs)
            return await service.execute(
                options,
                functools.partial(method, self),
                bound.args[1:],
                bound.kwargs,
                context=self,
            )

        wrapper.__audit_options__ = options  # type: ignore[attr-defined]
        return wrapper

    return decorator
