# 📄 File: recovery_directory/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Lists what the app needs to be able to do with stored accounts (save, find, list, count)
# without tying it to a particular database.
# 🧪 Purpose (Technical Summary):
# Repository interface for User entities; implementations return domain models.
# 🔗 Dependencies:
# Domain models (User), typing, abc
# 🔄 Connected Modules / Calls From:
# user_service.py, auth_service.py, shared.core.dependencies, infrastructure implementation

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementation is in the infrastructure layer
    - Methods return domain entities (User), not database models
    - Writes are flushed, never committed; the request session owns the transaction
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            DuplicateResourceError: If a user with this id already exists
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """
        Save every field of an existing user.

        Raises:
            NotFoundError: If the user does not exist
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """All users, newest first."""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        pass

    @abstractmethod
    async def count_created_since(self, since: datetime) -> int:
        pass

    @abstractmethod
    async def count_logged_in_since(self, since: datetime) -> int:
        pass

    @abstractmethod
    async def latest_login(self) -> Optional[datetime]:
        pass
