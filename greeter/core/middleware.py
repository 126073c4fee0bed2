import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from greeter.core.context import bind_request, release_request
from greeter.core.errors import METHOD_MISS
from greeter.core.logger import logger


def get_client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "-"


def classify(request: Request, status: int):
    """Return (event, level) for a finished request."""
    if status >= 500:
        return "SYSTEM_ERROR", "error"
    if status == 404:
        if getattr(request.state, "route_miss", None) == METHOD_MISS:
            return "METHOD_NOT_ALLOWED", "warning"
        return "ROUTE_NOT_FOUND", "warning"
    if status >= 400:
        return "CLIENT_ERROR", "warning"
    return "GREETING_SERVED", "info"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get("X-Trace-Id") or uuid.uuid4().hex
        tokens = bind_request(trace_id, get_client_ip(request))
        try:
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000

            response.headers["X-Trace-Id"] = trace_id

            event, level = classify(request, response.status_code)
            getattr(logger, level)(event, extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2)
            })
            return response
        finally:
            release_request(tokens)
