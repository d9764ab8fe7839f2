# ==============================================================================
# REQUEST CONTEXT MIDDLEWARE
# ==============================================================================
# Correlation ids, request/response logging and timing headers
# ==============================================================================

from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from crud_template.utils.helpers import generate_request_id

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Attach correlation ids to every request.

    The request id is read from ``request_id_header`` and generated when
    the caller sent none; the channel id is taken as sent. Both land on
    ``request.state`` and are echoed on the response together with
    ``X-Response-Time``.
    """

    def __init__(
        self,
        app: ASGIApp,
        request_id_header: str = "x-request-id",
        channel_id_header: str = "x-channel-id",
    ) -> None:
        super().__init__(app)
        self.request_id_header = request_id_header
        self.channel_id_header = channel_id_header

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Process request with correlation ids and logging."""
        request_id = request.headers.get(self.request_id_header) or generate_request_id()
        channel_id = request.headers.get(self.channel_id_header)
        request.state.request_id = request_id
        request.state.channel_id = channel_id

        start_time = time.time()
        log_extra = {"request_id": request_id}

        logger.info(
            f"{request.method} {request.url.path} - Started",
            extra=log_extra,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"{request.method} {request.url.path} "
                f"- Error ({duration_ms:.2f}ms): {e}",
                extra=log_extra,
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        log_level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(
            log_level,
            f"{request.method} {request.url.path} "
            f"- {response.status_code} ({duration_ms:.2f}ms)",
            extra=log_extra,
        )

        response.headers[self.request_id_header] = request_id
        if channel_id:
            response.headers[self.channel_id_header] = channel_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
