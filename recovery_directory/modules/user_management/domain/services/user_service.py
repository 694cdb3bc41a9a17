# 📄 File: recovery_directory/modules/user_management/domain/services/user_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for managing accounts: creating a record the first time someone signs in,
# letting admins change roles or suspend people, and counting users for the dashboard.
# 🧪 Purpose (Technical Summary):
# Domain service for user lifecycle: idempotent provisioning, role and suspension
# changes, partial updates, statistics, and admin-triggered password reset mail.
# 🔗 Dependencies:
# User domain model, UserRepository, AuthProvider, shared exceptions
# 🔄 Connected Modules / Calls From:
# users.py routes, auth_service.py, shared.core.dependencies (provisioning)

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import Depends

from recovery_directory.modules.user_management.domain.models.user import User, UserRole, UserStats
from recovery_directory.modules.user_management.domain.repositories.user_repository import UserRepository
from recovery_directory.modules.user_management.infrastructure.external.supabase_auth import AuthProvider
from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.core.exceptions import NotFoundError, ValidationError
from recovery_directory.shared.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class UserService:
    """
    Domain service for user management business logic.
    """

    def __init__(
        self,
        user_repository: UserRepository = Depends(),
        auth_provider: AuthProvider = Depends(),
    ):
        self.user_repository = user_repository
        self.auth_provider = auth_provider

    # =========================================================================
    # PROVISIONING
    # =========================================================================

    async def ensure_user(self, user_id: str, email: Optional[str]) -> User:
        """
        Return the stored user, creating a plain 'user' record if there is none.

        Safe to call on every sign-in.
        """
        existing = await self.user_repository.get_by_id(user_id)
        if existing:
            return existing
        user = await self.user_repository.create(User(id=user_id, email=email))
        logger.info(f"Provisioned user record for {user_id}")
        return user

    async def record_login(self, user_id: str, email: Optional[str]) -> User:
        user = await self.ensure_user(user_id, email)
        user.last_login = utc_now()
        if email and not user.email:
            user.email = email
        return await self.user_repository.update(user)

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def list_users(self) -> List[User]:
        return await self.user_repository.list_all()

    async def get_user(self, user_id: str) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", resource_type="user", resource_id=user_id)
        return user

    async def get_user_stats(self, now: Optional[datetime] = None) -> UserStats:
        """
        Counters for the admin dashboard.

        "New this month" starts at 00:00 UTC on the first of the current month;
        "active" means a sign-in within ACTIVE_USER_WINDOW_DAYS.
        """
        now = now or utc_now()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        active_since = now - timedelta(days=get_settings().ACTIVE_USER_WINDOW_DAYS)

        return UserStats(
            total_users=await self.user_repository.count_all(),
            new_users_this_month=await self.user_repository.count_created_since(month_start),
            active_users=await self.user_repository.count_logged_in_since(active_since),
            last_login=await self.user_repository.latest_login(),
        )

    # =========================================================================
    # ADMIN MUTATIONS
    # =========================================================================

    async def update_user(self, user_id: str, email: Optional[str] = None, role: Optional[UserRole] = None) -> User:
        """Apply only the fields that were provided."""
        user = await self.get_user(user_id)
        if email is not None:
            if not email.strip():
                raise ValidationError("Email cannot be blank", field="email")
            user.email = email
        if role is not None:
            user.role = role
        user.touch()
        return await self.user_repository.update(user)

    async def update_user_role(self, user_id: str, role: UserRole) -> User:
        user = await self.get_user(user_id)
        previous = user.role
        user.role = role
        user.touch()
        updated = await self.user_repository.update(user)
        logger.info(f"User {user_id} role changed {previous.value} -> {role.value}")
        return updated

    async def set_suspended(self, user_id: str, suspended: bool) -> User:
        user = await self.get_user(user_id)
        user.is_suspended = suspended
        user.touch()
        updated = await self.user_repository.update(user)
        logger.info(f"User {user_id} {'suspended' if suspended else 'unsuspended'}")
        return updated

    async def suspend_user(self, user_id: str) -> User:
        return await self.set_suspended(user_id, True)

    async def unsuspend_user(self, user_id: str) -> User:
        return await self.set_suspended(user_id, False)

    async def reset_user_password(self, user_id: str) -> None:
        user = await self.get_user(user_id)
        if not user.email:
            raise ValidationError("User has no email address on file", field="email")
        await self.auth_provider.send_password_reset(user.email)
