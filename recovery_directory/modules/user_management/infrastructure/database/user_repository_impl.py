# 📄 File: recovery_directory/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Does the actual saving, finding and counting of accounts in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of UserRepository with domain/model mapping,
# aggregate counts for dashboard statistics, and RepositoryError wrapping.
#
# 🔗 Dependencies:
# - user_management.domain (User, UserRepository)
# - infrastructure.database.models (UserModel)
# - SQLAlchemy async session (request scoped via get_db_session)
#
# 🔄 Connected Modules / Calls From:
# - main.py dependency_overrides[UserRepository]
# - user_service.py, auth_service.py, shared.core.dependencies

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recovery_directory.modules.user_management.domain.models.user import User, UserRole
from recovery_directory.modules.user_management.domain.repositories.user_repository import UserRepository
from recovery_directory.modules.user_management.infrastructure.database.models import UserModel
from recovery_directory.shared.core.exceptions import DuplicateResourceError, NotFoundError, RepositoryError
from recovery_directory.shared.infrastructure.database.session import get_db_session
from recovery_directory.shared.utils.helpers import ensure_aware

logger = logging.getLogger(__name__)


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, user: User) -> User:
        try:
            user_model = self._domain_to_model(user)
            self._session.add(user_model)
            await self._session.flush()
            logger.info(f"Created user with ID: {user.id}")
            return self._model_to_domain(user_model)
        except IntegrityError as e:
            logger.warning(f"User creation failed - id already exists: {user.id}")
            raise DuplicateResourceError("User already exists", resource_type="user", field="id", value=user.id) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error during user creation: {str(e)}")
            raise RepositoryError(f"Failed to create user: {str(e)}", repository="users", operation="create") from e

    async def get_by_id(self, user_id: str) -> Optional[User]:
        try:
            user_model = await self._session.get(UserModel, user_id)
            return self._model_to_domain(user_model) if user_model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving user {user_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve user: {str(e)}", repository="users", operation="get") from e

    async def update(self, user: User) -> User:
        try:
            user_model = await self._session.get(UserModel, user.id)
            if not user_model:
                raise NotFoundError("User not found", resource_type="user", resource_id=user.id)

            user_model.email = user.email
            user_model.role = user.role.value
            user_model.is_suspended = user.is_suspended
            user_model.updated_at = user.updated_at
            user_model.last_login = user.last_login

            await self._session.flush()
            logger.info(f"Updated user: {user.id}")
            return self._model_to_domain(user_model)
        except SQLAlchemyError as e:
            logger.error(f"Database error updating user {user.id}: {str(e)}")
            raise RepositoryError(f"Failed to update user: {str(e)}", repository="users", operation="update") from e

    async def list_all(self) -> List[User]:
        try:
            stmt = select(UserModel).order_by(UserModel.created_at.desc(), UserModel.id.desc())
            result = await self._session.execute(stmt)
            return [self._model_to_domain(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error listing users: {str(e)}")
            raise RepositoryError(f"Failed to list users: {str(e)}", repository="users", operation="list") from e

    async def count_all(self) -> int:
        return await self._scalar(select(func.count()).select_from(UserModel), "count_all")

    async def count_created_since(self, since: datetime) -> int:
        stmt = select(func.count()).select_from(UserModel).where(UserModel.created_at >= since)
        return await self._scalar(stmt, "count_created_since")

    async def count_logged_in_since(self, since: datetime) -> int:
        stmt = select(func.count()).select_from(UserModel).where(UserModel.last_login >= since)
        return await self._scalar(stmt, "count_logged_in_since")

    async def latest_login(self) -> Optional[datetime]:
        value = await self._scalar(select(func.max(UserModel.last_login)), "latest_login", default=None)
        return ensure_aware(value)

    async def _scalar(self, stmt, operation: str, default=0):
        try:
            result = await self._session.execute(stmt)
            value = result.scalar()
            return default if value is None else value
        except SQLAlchemyError as e:
            logger.error(f"Database error in users.{operation}: {str(e)}")
            raise RepositoryError(f"Failed to query users: {str(e)}", repository="users", operation=operation) from e

    def _domain_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            role=user.role.value,
            is_suspended=user.is_suspended,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login=user.last_login,
        )

    def _model_to_domain(self, user_model: UserModel) -> User:
        return User(
            id=user_model.id,
            email=user_model.email,
            role=UserRole(user_model.role),
            is_suspended=bool(user_model.is_suspended),
            created_at=ensure_aware(user_model.created_at),
            updated_at=ensure_aware(user_model.updated_at),
            last_login=ensure_aware(user_model.last_login),
        )
