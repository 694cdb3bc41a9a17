# 📄 File: recovery_directory/modules/user_management/infrastructure/external/supabase_auth.py
# 🧭 Purpose (Layman Explanation):
# Talks to Supabase, the service that actually checks passwords, hands out login
# tokens, and sends "reset your password" emails.
# 🧪 Purpose (Technical Summary):
# AuthProvider port and its Supabase Auth implementation: password sign-in/sign-up,
# token refresh, global sign-out and password reset mail. SDK calls are blocking and
# run in a worker thread; SDK errors become AuthenticationError / ExternalServiceError.
# 🔗 Dependencies:
# supabase (AuthError), shared.config.supabase, asyncio
# 🔄 Connected Modules / Calls From:
# auth_service.py, user_service.py (password reset), main.py dependency_overrides

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from supabase import AuthApiError, AuthError

from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.config.supabase import get_supabase_manager
from recovery_directory.shared.core.exceptions import AuthenticationError, ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class AuthSession:
    """Tokens and identity returned by the auth platform."""
    user_id: str
    email: Optional[str]
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


class AuthProvider(ABC):
    """Port for the hosted authentication platform."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        pass

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> AuthSession:
        pass

    @abstractmethod
    async def refresh(self, refresh_token: str) -> AuthSession:
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        pass

    @abstractmethod
    async def send_password_reset(self, email: str) -> None:
        pass


def _to_session(response) -> AuthSession:
    user = response.user
    session = response.session
    if user is None:
        raise AuthenticationError("Authentication failed")
    return AuthSession(
        user_id=user.id,
        email=user.email,
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
        expires_in=session.expires_in if session else None,
    )


class SupabaseAuthProvider(AuthProvider):
    """
    Supabase Auth adapter.

    Sign-in and refresh use a throwaway anon client because the SDK stores the
    session on the client object. Admin calls use the shared service-role client.
    """

    def __init__(self):
        self._manager = get_supabase_manager()
        self._settings = get_settings()

    async def sign_in(self, email: str, password: str) -> AuthSession:
        client = self._manager.create_anon_client()
        try:
            response = await asyncio.to_thread(
                client.auth.sign_in_with_password, {"email": email, "password": password}
            )
        except AuthApiError as e:
            logger.info(f"Sign-in refused for {email}: {e.message}")
            raise AuthenticationError("Invalid email or password") from e
        except AuthError as e:
            logger.error(f"Supabase sign-in failed: {e}")
            raise ExternalServiceError("Authentication service unavailable", service="supabase_auth") from e
        return _to_session(response)

    async def sign_up(self, email: str, password: str) -> AuthSession:
        client = self._manager.create_anon_client()
        try:
            response = await asyncio.to_thread(
                client.auth.sign_up, {"email": email, "password": password}
            )
        except AuthApiError as e:
            logger.info(f"Sign-up refused for {email}: {e.message}")
            raise AuthenticationError(e.message or "Registration failed") from e
        except AuthError as e:
            logger.error(f"Supabase sign-up failed: {e}")
            raise ExternalServiceError("Authentication service unavailable", service="supabase_auth") from e
        return _to_session(response)

    async def refresh(self, refresh_token: str) -> AuthSession:
        client = self._manager.create_anon_client()
        try:
            response = await asyncio.to_thread(client.auth.refresh_session, refresh_token)
        except AuthError as e:
            logger.info(f"Token refresh refused: {e}")
            raise AuthenticationError("Session expired, please sign in again") from e
        return _to_session(response)

    async def sign_out(self, access_token: str) -> None:
        try:
            await asyncio.to_thread(self._manager.client.auth.admin.sign_out, access_token, "global")
        except AuthError as e:
            logger.warning(f"Supabase sign-out failed: {e}")
            raise ExternalServiceError("Sign-out failed", service="supabase_auth") from e

    async def send_password_reset(self, email: str) -> None:
        options = {"redirect_to": f"{self._settings.FRONTEND_URL}/reset-password"}
        try:
            await asyncio.to_thread(self._manager.client.auth.reset_password_for_email, email, options)
        except AuthError as e:
            logger.error(f"Password reset email failed for {email}: {e}")
            raise ExternalServiceError("Could not send password reset email", service="supabase_auth") from e
        logger.info(f"Password reset email sent to {email}")
