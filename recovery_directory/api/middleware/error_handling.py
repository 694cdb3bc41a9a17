# 📄 File: recovery_directory/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Gives every request a tracking number and makes sure that, if something unexpected
# breaks, the caller still gets a tidy error message instead of a crash.
# 🧪 Purpose (Technical Summary):
# Outermost middleware: assigns X-Request-ID (honouring an incoming one), binds it to
# the logging context, logs one access line per request, and converts unhandled
# exceptions into the standard JSON error envelope.
# 🔗 Dependencies:
# FastAPI, starlette BaseHTTPMiddleware, shared.utils.logging (request_id_var)
# 🔄 Connected Modules / Calls From:
# recovery_directory.main (middleware registration and exception handlers)

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.utils.logging import request_id_var

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> JSONResponse:
    """Standard error envelope shared by middleware and exception handlers."""
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "request_id": request_id,
            }
        },
    )
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Request correlation and last-resort error handling.

    Domain exceptions are rendered by the exception handlers in main.py;
    anything that still escapes becomes a 500 here.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.settings = get_settings()

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.exception(f"Unhandled error on {request.method} {request.url.path}")
                details = {"error_type": type(exc).__name__} if self.settings.DEBUG else {}
                response = create_error_response(
                    500,
                    "INTERNAL_SERVER_ERROR",
                    "An internal server error occurred",
                    details,
                    request_id,
                )

            elapsed = time.perf_counter() - started
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{elapsed:.3f}s"
            logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed * 1000:.1f}ms)")
            return response
        finally:
            request_id_var.reset(token)
