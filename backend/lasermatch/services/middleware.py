"""Request tracing middleware for the workspace matcher API."""
import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from lasermatch.services.perf_monitor import tracker

logger = logging.getLogger("lasermatch.middleware")

UNTRACKED_PATHS = {"/health"}


def _route_template(request: Request) -> str:
    """``/api/workspace/match`` style template of the matched route, else the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Tags every response with X-Request-ID and X-Process-Time, and feeds the
    match tracker with per-route request counts. 4xx responses from the
    workspace routes (invalid workpiece, zero-capacity costing) are counted
    as rejections so their rate shows on /health.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        response: Response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(duration_ms)

        if request.url.path in UNTRACKED_PATHS:
            return response

        route = _route_template(request)
        rejected = 400 <= response.status_code < 500
        tracker.record_request(route, rejected=rejected)

        log = logger.warning if rejected else logger.info
        log(
            "%s %s -> %d",
            request.method, route, response.status_code,
            extra={
                "http_method": request.method,
                "http_path": route,
                "http_status": response.status_code,
                "request_id": request_id,
                "duration_ms": duration_ms,
            },
        )
        return response
