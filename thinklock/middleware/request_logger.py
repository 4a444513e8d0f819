# ==============================================================================
# REQUEST LOGGER MIDDLEWARE
# ==============================================================================
# Structured request/response logging
# ==============================================================================

from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from thinklock.core.constants import APIConstants

logger = logging.getLogger(__name__)


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Middleware for structured request/response logging.

    Logs method, path, status and timing of every request. A request
    id supplied by the caller is reused, otherwise one is generated;
    it is echoed back in the ``X-Request-ID`` header.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Process request with logging."""
        request_id = (
            request.headers.get(APIConstants.REQUEST_ID_HEADER)
            or str(uuid.uuid4())[:8]
        )
        request.state.request_id = request_id

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} "
                f"- Error ({duration_ms:.2f}ms): {str(e)}"
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000

        log_level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(
            log_level,
            f"[{request_id}] {request.method} {request.url.path} "
            f"- {response.status_code} ({duration_ms:.2f}ms)"
        )

        response.headers[APIConstants.REQUEST_ID_HEADER] = request_id
        response.headers[APIConstants.RESPONSE_TIME_HEADER] = f"{duration_ms:.2f}ms"

        return response
