"""Request ID and request logging middleware."""

import logging
import time
import uuid

from fastapi import Request, Response
from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-Id"

logger = logging.getLogger(__name__)


def get_request_id(request: Request) -> str:
    """Request ID assigned by RequestIdMiddleware, or '-' outside of it."""
    return getattr(request.state, "request_id", "-")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ID and log when it arrives and is answered."""

    async def dispatch(self, request: Request, call_next):
        """Process request with request ID context."""
        # Reuse the caller's ID so logs can be correlated across services
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        trace.get_current_span().set_attribute("http.request_id", request_id)

        path = request.url.path
        start = time.perf_counter()
        logger.debug(
            f"request received: {request.method} {path}",
            extra={"request_id": request_id, "method": request.method, "endpoint": path},
        )

        response: Response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            f"request answered: {request.method} {path} {response.status_code} in {elapsed_ms:.1f}ms",
            extra={
                "request_id": request_id,
                "method": request.method,
                "endpoint": path,
                "response_time_ms": round(elapsed_ms, 1),
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
