import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from library_api.context import request_id_var

logger = logging.getLogger("library_api.request")

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or f"req-{uuid.uuid4().hex[:12]}"

        token = request_id_var.set(request_id)
        start = time.perf_counter()

        try:
            response = await call_next(request)
            latency_ms = max((time.perf_counter() - start) * 1000, 0.0)
            logger.info(
                "http_request_complete",
                extra={
                    "method": request.method,
                    "path": str(request.url.path),
                    "status_code": response.status_code,
                    "latency_ms": round(latency_ms, 3),
                },
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)
