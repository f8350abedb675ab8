"""Audit log sink that emits each record as a structured log line."""

import logging
from typing import Sequence

from audit_trail.domain.models import AuditRecord

logger = logging.getLogger(__name__)


class LoggingAuditLogSink:
    """Implements AuditLogSink for deployments without an audit database."""

    def __init__(self, log: logging.Logger = logger) -> None:
        self._logger = log

    async def create_audit_log(self, record: AuditRecord) -> None:
        self._logger.info("audit_record", extra={"audit": record.to_dict()})

    async def create_audit_log_batch(
        self,
        records: Sequence[AuditRecord],
        *,
        skip_duplicates: bool = True,
    ) -> None:
        seen = set()
        for record in records:
            key = (record.resource_type, record.resource_id, record.action)
            if skip_duplicates and key in seen:
                continue
            seen.add(key)
            await self.create_audit_log(record)
