# 📄 File: recovery_directory/api/middleware/authentication.py
# 🧭 Purpose (Layman Explanation):
# Checks the login token that comes with a request. Visitors without a token can still
# browse; a forged or expired token is turned away straight at the door.
# 🧪 Purpose (Technical Summary):
# Optional-authentication middleware: verifies a Bearer token when present, stores the
# claims on request.state for the CurrentUser dependencies, and binds the user id to
# the logging context. Route-level requirements live in shared.core.dependencies.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, shared.core.security (python-jose), shared.utils.logging
# 🔄 Connected Modules / Calls From:
# recovery_directory.main (middleware registration), shared.core.dependencies

import logging
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from recovery_directory.api.middleware.error_handling import create_error_response
from recovery_directory.shared.core.exceptions import AuthenticationError
from recovery_directory.shared.core.security import get_security_manager
from recovery_directory.shared.utils.logging import user_id_var

logger = logging.getLogger(__name__)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    JWT verification for requests that carry an Authorization header.

    Paths in skip_paths are never inspected so that a stale token cannot
    block health checks, docs, or the Stripe webhook.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.skip_paths = (
            "/health",
            "/api/v1/health",
            "/docs",
            "/redoc",
            "/openapi.json",
            "/api/v1/payments/webhook",
            "/api/v1/auth/refresh",
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.token_payload = None
        request.state.access_token = None

        if request.url.path.startswith(self.skip_paths):
            return await call_next(request)

        token = self._extract_token(request)
        if not token:
            return await call_next(request)

        try:
            payload = get_security_manager().verify_token(token)
        except AuthenticationError as e:
            return create_error_response(
                e.status_code,
                e.error_code,
                e.message,
                e.details,
                getattr(request.state, "request_id", None),
            )

        request.state.token_payload = payload
        request.state.access_token = token
        user_token = user_id_var.set(payload["sub"])
        try:
            return await call_next(request)
        finally:
            user_id_var.reset(user_token)

    @staticmethod
    def _extract_token(request: Request) -> Optional[str]:
        header = request.headers.get("authorization", "")
        scheme, _, credentials = header.partition(" ")
        if scheme.lower() != "bearer" or not credentials.strip():
            return None
        return credentials.strip()
