# 📄 File: recovery_directory/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Handles logging in, signing up, logging out and keeping a login fresh, and makes sure
# every person who logs in also has an account record here.
# 🧪 Purpose (Technical Summary):
# Session workflows on top of the AuthProvider port, keeping the local users table
# in sync (provisioning, last_login) and refusing suspended accounts.
# 🔗 Dependencies:
# AuthProvider, UserService, shared exceptions
# 🔄 Connected Modules / Calls From:
# presentation/api/v1/auth.py

import logging
from dataclasses import dataclass

from fastapi import Depends

from recovery_directory.modules.user_management.domain.models.user import User
from recovery_directory.modules.user_management.domain.services.user_service import UserService
from recovery_directory.modules.user_management.infrastructure.external.supabase_auth import (
    AuthProvider,
    AuthSession,
)
from recovery_directory.shared.core.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


@dataclass
class SignedInUser:
    session: AuthSession
    user: User


class AuthService:
    """Sign-in / sign-up / refresh / sign-out flows."""

    def __init__(
        self,
        auth_provider: AuthProvider = Depends(),
        user_service: UserService = Depends(),
    ):
        self.auth_provider = auth_provider
        self.user_service = user_service

    async def sign_in(self, email: str, password: str) -> SignedInUser:
        session = await self.auth_provider.sign_in(email, password)
        user = await self.user_service.record_login(session.user_id, session.email)
        if user.is_suspended:
            logger.warning(f"Suspended user {user.id} attempted to sign in")
            if session.access_token:
                await self.auth_provider.sign_out(session.access_token)
            raise AuthorizationError("Your account is suspended", user_id=user.id)
        logger.info(f"User {user.id} signed in")
        return SignedInUser(session=session, user=user)

    async def sign_up(self, email: str, password: str) -> SignedInUser:
        session = await self.auth_provider.sign_up(email, password)
        user = await self.user_service.ensure_user(session.user_id, session.email or email)
        logger.info(f"User {user.id} registered")
        return SignedInUser(session=session, user=user)

    async def refresh(self, refresh_token: str) -> SignedInUser:
        session = await self.auth_provider.refresh(refresh_token)
        user = await self.user_service.ensure_user(session.user_id, session.email)
        if user.is_suspended:
            raise AuthorizationError("Your account is suspended", user_id=user.id)
        return SignedInUser(session=session, user=user)

    async def sign_out(self, access_token: str) -> None:
        await self.auth_provider.sign_out(access_token)

    async def request_password_reset(self, email: str) -> None:
        await self.auth_provider.send_password_reset(email)
