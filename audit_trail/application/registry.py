"""Resource adapter registry: resource type tag -> adapter instance."""

import logging
from typing import Dict, List, Union

from audit_trail.application.resource_adapter import ResourceAdapter
from audit_trail.domain.constants import AuditResource
from audit_trail.domain.exceptions import InvalidAdapterError, NotRegisteredError

logger = logging.getLogger(__name__)


class ResourceAdapterRegistry:
    """
    Decouples the audit pipeline from resource-specific fetch logic.
    Populated during startup, read-only afterwards; no locking.
    """

    def __init__(self) -> None:
        self._adapters: Dict[AuditResource, ResourceAdapter] = {}

    def register(self, adapter: ResourceAdapter) -> None:
        """Register adapter under its resource type. A later registration replaces an earlier one."""
        try:
            resource_type = AuditResource(adapter.resource_type)
        except ValueError as e:
            raise InvalidAdapterError(
                f"Adapter {type(adapter).__name__} declares unknown resource type "
                f"{adapter.resource_type!r}"
            ) from e
        if resource_type in self._adapters:
            logger.info(
                "audit_adapter_replaced",
                extra={"resource_type": resource_type.value, "adapter": type(adapter).__name__},
            )
        self._adapters[resource_type] = adapter

    def resolve(self, resource_type: Union[AuditResource, str]) -> ResourceAdapter:
        """Return the adapter for resource_type. Raises NotRegisteredError if none."""
        try:
            return self._adapters[AuditResource(resource_type)]
        except (KeyError, ValueError):
            raise NotRegisteredError(getattr(resource_type, "value", resource_type)) from None

    def registered_types(self) -> List[AuditResource]:
        return list(self._adapters)
