"""Audit capture orchestrator: before snapshot, operation, after state, fire-and-forget record."""

import functools
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from audit_trail.application.audit_log_sink import AuditLogSink
from audit_trail.application.dispatcher import AuditDispatcher
from audit_trail.application.registry import ResourceAdapterRegistry
from audit_trail.core.context import RequestContext
from audit_trail.core.paths import get_path
from audit_trail.domain.models import AuditOptions, AuditRecord
from audit_trail.observability.metrics import (
    AUDIT_CAPTURE_FAILED,
    AUDIT_RECORDS_DISPATCHED,
    AUDIT_RECORDS_EXCLUDED,
    MetricsCollector,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Snapshot fields matched against batch ids, in order.
SNAPSHOT_KEY_FIELDS = ("id", "resource_id")


def normalize_resource_ids(resource_id: Any) -> List[Any]:
    """Batch ids as a list: sequences are copied, None is empty, a scalar is wrapped."""
    if resource_id is None:
        return []
    if isinstance(resource_id, (list, tuple, set, frozenset)):
        return list(resource_id)
    return [resource_id]


def _stringify_id(resource_id: Any) -> Optional[str]:
    if resource_id is None:
        return None
    if isinstance(resource_id, (list, tuple)):
        return ",".join(map(str, resource_id))
    return str(resource_id)


def _snapshot_key(snapshot: Any) -> Any:
    for field in SNAPSHOT_KEY_FIELDS:
        key = get_path(snapshot, field)
        if key is not None:
            return key
    return None


def _old_data_by_id(old_data: Any) -> Dict[str, Any]:
    if not isinstance(old_data, (list, tuple)):
        return {}
    by_id: Dict[str, Any] = {}
    for snapshot in old_data:
        key = _snapshot_key(snapshot)
        if key is not None:
            by_id[str(key)] = snapshot
    return by_id


class AuditLogService:
    """
    Wraps a business operation and records what it changed.

    Sequence per invocation: resolve id from arguments, capture the prior
    snapshot (before the operation runs), run the operation, resolve the id from
    the result when needed, apply the inclusion condition, then hand the record
    to the sink without awaiting it. Only the operation's own exceptions reach
    the caller; every audit failure is logged and swallowed.
    """

    def __init__(
        self,
        sink: AuditLogSink,
        registry: ResourceAdapterRegistry,
        dispatcher: Optional[AuditDispatcher] = None,
        metrics: Optional[MetricsCollector] = None,
    ) -> None:
        self._sink = sink
        self._registry = registry
        self._metrics = metrics or MetricsCollector()
        self._dispatcher = dispatcher or AuditDispatcher(metrics=self._metrics)

    @property
    def dispatcher(self) -> AuditDispatcher:
        return self._dispatcher

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics

    async def execute(
        self,
        options: AuditOptions,
        operation: Callable[..., Awaitable[T]],
        args: Sequence[Any],
        kwargs: Optional[Mapping[str, Any]] = None,
        context: Any = None,
    ) -> T:
        """Run operation(*args, **kwargs) under audit and return its result unchanged."""
        kwargs = kwargs or {}

        # 1. Id known before the call (UPDATE/DELETE)
        resource_id_from_args = self._resource_id_from_args(options, args)

        # 2. Prior snapshot, strictly before the operation mutates anything
        old_data = None
        if resource_id_from_args is not None:
            lookup_ids = (
                normalize_resource_ids(resource_id_from_args)
                if options.batch
                else resource_id_from_args
            )
            old_data = await self._fetch_old_data(options, lookup_ids)

        # 3. Business operation; failures propagate and nothing is audited
        result = await operation(*args, **kwargs)

        # 4. Id known only after the call (CREATE)
        resource_id = (
            resource_id_from_args
            if resource_id_from_args is not None
            else self._resource_id_from_result(options, result)
        )

        # 5. Inclusion condition, fail closed
        if not self._should_log(options, args, result, context):
            self._metrics.increment(
                AUDIT_RECORDS_EXCLUDED, resource_type=options.resource_type.value
            )
            return result

        # 6. Fire-and-forget
        self._dispatch(options, resource_id, old_data, result)

        # 7.
        return result

    def wrap(
        self,
        options: AuditOptions,
        operation: Callable[..., Awaitable[T]],
    ) -> Callable[..., Awaitable[T]]:
        """Audited version of a plain coroutine function. The condition context is None."""
        signature = inspect.signature(operation)

        @functools.wraps(operation)
        async def audited(*args: Any, **kwargs: Any) -> T:
            # Keyword-passed arguments land at their positional index.
            bound = signature.bind(*args, **kwargs)
            return await self.execute(options, operation, bound.args, bound.kwargs)

        return audited

    def _resource_id_from_args(self, options: AuditOptions, args: Sequence[Any]) -> Any:
        try:
            if options.id_arg is not None:
                return args[options.id_arg] if options.id_arg < len(args) else None
            if options.id_path:
                return get_path(args[0] if args else None, options.id_path)
        except Exception as e:
            self._capture_failed("audit_id_from_args_failed", options, e)
        return None

    def _resource_id_from_result(self, options: AuditOptions, result: Any) -> Any:
        if not options.id_from_result:
            return None
        try:
            return get_path(result, options.id_from_result)
        except Exception as e:
            self._capture_failed("audit_id_from_result_failed", options, e)
            return None

    async def _fetch_old_data(self, options: AuditOptions, resource_id: Any) -> Any:
        try:
            adapter = self._registry.resolve(options.resource_type)
            if isinstance(resource_id, list):
                if not resource_id:
                    return []
                return await adapter.fetch_many(resource_id)
            return await adapter.fetch_one(resource_id)
        except Exception as e:
            self._capture_failed("audit_prior_capture_failed", options, e)
            return None

    def _should_log(
        self,
        options: AuditOptions,
        args: Sequence[Any],
        result: Any,
        context: Any,
    ) -> bool:
        if options.condition is None:
            return True
        try:
            return bool(options.condition(args, result, context))
        except Exception as e:
            logger.error(
                "audit_condition_failed",
                extra={
                    "resource_type": options.resource_type.value,
                    "action": options.action.value,
                    "error": str(e),
                },
            )
            return False

    def _dispatch(
        self,
        options: AuditOptions,
        resource_id: Any,
        old_data: Any,
        result: Any,
    ) -> None:
        try:
            actor_id = RequestContext.get_actor_id()
            request_id = RequestContext.get_request_id()
            ip = RequestContext.get_ip()
            user_agent = RequestContext.get_user_agent()

            def build(record_id: Any, record_old_data: Any) -> AuditRecord:
                return AuditRecord(
                    actor_id=actor_id,
                    request_id=request_id,
                    action=options.action,
                    resource_type=options.resource_type,
                    resource_id=_stringify_id(record_id),
                    old_data=record_old_data,
                    new_data=result,
                    ip=ip,
                    user_agent=user_agent,
                )

            resource_type = options.resource_type.value
            if options.batch:
                old_by_id = _old_data_by_id(old_data)
                records = [
                    build(record_id, old_by_id.get(str(record_id)))
                    for record_id in normalize_resource_ids(resource_id)
                ]
                if not records:
                    logger.debug(
                        "audit_batch_empty",
                        extra={"resource_type": resource_type, "action": options.action.value},
                    )
                    return
                dispatched = self._dispatcher.dispatch(
                    self._sink.create_audit_log_batch,
                    records,
                    skip_duplicates=True,
                    resource_type=resource_type,
                )
            else:
                records = [build(resource_id, old_data)]
                dispatched = self._dispatcher.dispatch(
                    self._sink.create_audit_log,
                    records[0],
                    resource_type=resource_type,
                )
            if dispatched:
                self._metrics.increment(
                    AUDIT_RECORDS_DISPATCHED, len(records), resource_type=resource_type
                )
        except Exception as e:
            logger.error(
                "audit_dispatch_failed",
                extra={
                    "resource_type": options.resource_type.value,
                    "action": options.action.value,
                    "error": str(e),
                },
                exc_info=True,
            )

    def _capture_failed(self, event: str, options: AuditOptions, error: Exception) -> None:
        logger.error(
            event,
            extra={
                "resource_type": options.resource_type.value,
                "action": options.action.value,
                "error": str(error),
            },
        )
        self._metrics.increment(AUDIT_CAPTURE_FAILED, resource_type=options.resource_type.value)
