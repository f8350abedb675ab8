# audit_trail/core/context.py

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass
class RequestContextData:
    """Ambient identifiers of the request being served."""

    request_id: str
    actor_id: Optional[str] = None
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    method: Optional[str] = None
    path: Optional[str] = None


request_context_ctx: contextvars.ContextVar[Optional[RequestContextData]] = contextvars.ContextVar(
    "request_context", default=None
)


class RequestContext:
    """
    Read access to the current request context. Every getter returns None when
    no request is active (e.g. system-triggered jobs).
    """

    @staticmethod
    def current() -> Optional[RequestContextData]:
        return request_context_ctx.get()

    @staticmethod
    def get_request_id() -> Optional[str]:
        ctx = request_context_ctx.get()
        return ctx.request_id if ctx else None

    @staticmethod
    def get_actor_id() -> Optional[str]:
        ctx = request_context_ctx.get()
        return ctx.actor_id if ctx else None

    @staticmethod
    def get_ip() -> Optional[str]:
        ctx = request_context_ctx.get()
        return ctx.ip if ctx else None

    @staticmethod
    def get_user_agent() -> Optional[str]:
        ctx = request_context_ctx.get()
        return ctx.user_agent if ctx else None

    @staticmethod
    def set_actor_id(actor_id: Any) -> None:
        """Attach the authenticated actor to the active context. No-op outside a request."""
        ctx = request_context_ctx.get()
        if ctx is not None:
            ctx.actor_id = None if actor_id is None else str(actor_id)

    @staticmethod
    @contextmanager
    def scope(data: RequestContextData) -> Iterator[RequestContextData]:
        token = request_context_ctx.set(data)
        try:
            yield data
        finally:
            request_context_ctx.reset(token)

    @staticmethod
    def run(data: RequestContextData, callback: Callable[[], T]) -> T:
        """Run callback with data as the active context."""
        with RequestContext.scope(data):
            return callback()
