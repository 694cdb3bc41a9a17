"""
Common FastAPI dependencies for the Recovery Directory.
Resolves the calling user from the verified token and enforces
active-account and admin requirements server side.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from recovery_directory.modules.user_management.domain.models.user import User, UserRole
from recovery_directory.modules.user_management.domain.repositories.user_repository import UserRepository
from .exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)


class CurrentUser:
    """The authenticated caller, with role and suspension loaded from the users table."""

    def __init__(
        self,
        user_id: str,
        email: Optional[str],
        role: UserRole = UserRole.USER,
        is_suspended: bool = False,
        access_token: Optional[str] = None,
        token_payload: Optional[Dict[str, Any]] = None
    ):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.is_suspended = is_suspended
        self.access_token = access_token
        self.token_payload = token_payload or {}

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_manage(self, owner_id: Optional[str]) -> bool:
        """Owners manage their own listings; admins manage everything."""
        return self.is_admin() or (owner_id is not None and owner_id == self.user_id)

    @classmethod
    def from_user(cls, user: User, access_token: Optional[str] = None, token_payload: Optional[dict] = None) -> "CurrentUser":
        return cls(
            user_id=user.id,
            email=user.email,
            role=user.role,
            is_suspended=user.is_suspended,
            access_token=access_token,
            token_payload=token_payload,
        )


async def get_optional_user(
    request: Request,
    user_repository: UserRepository = Depends(),
) -> Optional[CurrentUser]:
    """
    Caller identity if a valid bearer token was presented, else None.

    The token itself is verified by AuthenticationMiddleware; this dependency
    only turns the verified claims into a CurrentUser. First-time callers get a
    'user' record so that role checks always have a row to read.
    """
    payload = getattr(request.state, "token_payload", None)
    if not payload:
        return None

    user_id = payload["sub"]
    email = payload.get("email")
    user = await user_repository.get_by_id(user_id)
    if user is None:
        user = await user_repository.create(User(id=user_id, email=email))
        logger.info(f"Provisioned user record for {user_id} on first request")

    return CurrentUser.from_user(
        user,
        access_token=getattr(request.state, "access_token", None),
        token_payload=payload,
    )


async def get_current_user(
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
) -> CurrentUser:
    """
    Raises:
        AuthenticationError: If no valid token was presented
    """
    if current_user is None:
        raise AuthenticationError("Authentication required")
    return current_user


async def get_current_active_user(
    current_user: CurrentUser = Depends(get_current_user)
) -> CurrentUser:
    """
    Raises:
        AuthorizationError: If the account is suspended
    """
    if current_user.is_suspended:
        logger.warning(f"Suspended user attempted access: {current_user.user_id}")
        raise AuthorizationError(
            "Your account is suspended. Please contact support.",
            user_id=current_user.user_id,
        )
    return current_user


async def get_current_admin_user(
    current_user: CurrentUser = Depends(get_current_active_user)
) -> CurrentUser:
    """
    Raises:
        AuthorizationError: If user is not an admin
    """
    if not current_user.is_admin():
        logger.warning(f"Non-admin user attempted admin access: {current_user.user_id}")
        raise AuthorizationError(
            "Admin privileges required for this action",
            required_role="admin",
            user_id=current_user.user_id,
        )
    return current_user
