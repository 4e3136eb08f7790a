"""Request tracing middleware for the spa estimator API."""
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from spa_estimator.services.logging_config import get_logger

logger = get_logger("middleware")

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"
SKIP_LOG_PATHS = {"/health"}

# Inbound ids longer than this are replaced rather than echoed
_MAX_REQUEST_ID_LENGTH = 64


def _inbound_request_id(request: Request) -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if supplied and len(supplied) <= _MAX_REQUEST_ID_LENGTH:
        return supplied
    return str(uuid.uuid4())


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id and a wall-clock duration.

    - Reuses a caller-supplied X-Request-ID so an estimate can be traced
      across services; otherwise assigns a uuid4.
    - Sets X-Request-ID and X-Process-Time (ms) on the response.
    - Logs one line per request except SKIP_LOG_PATHS: INFO for success,
      WARNING for 4xx (rejected estimates), ERROR for 5xx.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _inbound_request_id(request)
        request.state.request_id = request_id
        start_time = time.perf_counter()

        response: Response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = str(duration_ms)

        if request.url.path not in SKIP_LOG_PATHS:
            if response.status_code >= 500:
                level = logging.ERROR
            elif response.status_code >= 400:
                level = logging.WARNING
            else:
                level = logging.INFO
            logger.log(
                level,
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "http_method": request.method,
                    "http_path": request.url.path,
                    "http_status": response.status_code,
                    "request_id": request_id,
                    "duration_ms": duration_ms,
                },
            )

        return response
