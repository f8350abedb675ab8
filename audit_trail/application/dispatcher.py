"""Fire-and-forget dispatch of audit writes on detached asyncio tasks."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

from audit_trail.observability.metrics import (
    AUDIT_DISPATCH_DROPPED,
    AUDIT_DISPATCH_FAILED,
    MetricsCollector,
)

logger = logging.getLogger(__name__)


class AuditDispatcher:
    """
    Runs audit writes without the caller awaiting them. Holds a strong reference
    to every in-flight task, logs failures, and drops new work once
    ``max_pending`` tasks are in flight. Tasks still running when the process
    stops are lost.
    """

    def __init__(
        self,
        max_pending: int = 1000,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self._max_pending = max_pending
        self._metrics = metrics
        self._pending: Set[asyncio.Task[None]] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def dispatch(
        self,
        task: Callable[..., Awaitable[Any]],
        *args: Any,
        resource_type: Optional[str] = None,
        **kwargs: Any,
    ) -> bool:
        """Schedule task(*args, **kwargs) in the background. Returns False if dropped."""
        if len(self._pending) >= self._max_pending:
            logger.warning(
                "audit_dispatch_dropped",
                extra={"resource_type": resource_type, "pending": len(self._pending)},
            )
            if self._metrics is not None:
                self._metrics.increment(AUDIT_DISPATCH_DROPPED, resource_type=resource_type)
            return False
        background = asyncio.create_task(self._run(task, args, kwargs, resource_type))
        self._pending.add(background)
        background.add_done_callback(self._pending.discard)
        return True

    async def _run(
        self,
        task: Callable[..., Awaitable[Any]],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        resource_type: Optional[str],
    ) -> None:
        try:
            await task(*args, **kwargs)
        except Exception as e:
            logger.error(
                "audit_dispatch_failed",
                extra={"resource_type": resource_type, "error": str(e)},
                exc_info=True,
            )
            if self._metrics is not None:
                self._metrics.increment(AUDIT_DISPATCH_FAILED, resource_type=resource_type)

    async def drain(self) -> None:
        """Wait for every in-flight dispatch, including ones scheduled while waiting."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
