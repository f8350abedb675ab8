"""API middleware: request context for audit records and logs."""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from audit_trail.core.context import RequestContext, RequestContextData

REQUEST_ID_HEADER = "X-Request-ID"
USER_AGENT_HEADER = "User-Agent"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Generate or preserve the request ID; capture client IP and user agent into the
    request-scoped context; echo the request ID on the response. The auth layer
    attaches the actor later via RequestContext.set_actor_id.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        data = RequestContextData(
            request_id=request_id,
            ip=request.client.host if request.client else None,
            user_agent=request.headers.get(USER_AGENT_HEADER),
            method=request.method,
            path=request.url.path,
        )
        request.state.request_id = request_id
        with RequestContext.scope(data):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
