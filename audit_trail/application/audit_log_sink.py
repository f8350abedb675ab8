"""Audit log sink protocol. Pipeline depends on this; infrastructure implements it."""

from typing import Protocol, Sequence

from audit_trail.domain.models import AuditRecord


class AuditLogSink(Protocol):
    """Durable destination for finished audit records."""

    async def create_audit_log(self, record: AuditRecord) -> None:
        ...

    async def create_audit_log_batch(
        self,
        records: Sequence[AuditRecord],
        *,
        skip_duplicates: bool = True,
    ) -> None:
        """Persist all records; duplicates are skipped per the sink's own uniqueness policy."""
        ...
