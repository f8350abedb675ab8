"""Resource adapter protocol. The orchestrator depends on this; infrastructure implements it."""

from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from audit_trail.domain.constants import AuditResource

ResourceId = Union[str, int]
Snapshot = Dict[str, Any]


class ResourceAdapter(Protocol):
    """Read-only access to one resource type's current state, for "before" snapshots."""

    @property
    def resource_type(self) -> AuditResource:
        ...

    async def fetch_one(self, resource_id: ResourceId) -> Optional[Snapshot]:
        """Return the snapshot, or None if the resource does not exist."""
        ...

    async def fetch_many(self, resource_ids: Sequence[ResourceId]) -> List[Snapshot]:
        """Return snapshots for the ids that exist. Unknown ids are omitted, never raised."""
        ...
