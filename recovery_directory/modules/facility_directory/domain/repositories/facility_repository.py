# 📄 File: recovery_directory/modules/facility_directory/domain/repositories/facility_repository.py
# 🧭 Purpose (Layman Explanation):
# Lists what the app needs to do with stored listings (save, find by id or web name,
# page through them, filter by owner or status) without tying it to a database.
# 🧪 Purpose (Technical Summary):
# Repository interface for the Facility aggregate with newest-first keyset paging.
# 🔗 Dependencies:
# Domain models (Facility, ModerationStatus), typing, abc
# 🔄 Connected Modules / Calls From:
# facility_service, moderation_service, search_service, location_service,
# claim_service, subscription_service, infrastructure implementation

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple

from ..models.facility import Facility, ModerationStatus


class FacilityRepository(ABC):
    """
    Repository interface for facility listings.

    All list methods return newest first, ordered by (created_at desc, id desc).
    """

    @abstractmethod
    async def create(self, facility: Facility) -> Facility:
        pass

    @abstractmethod
    async def get_by_id(self, facility_id: str) -> Optional[Facility]:
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Facility]:
        pass

    @abstractmethod
    async def update(self, facility: Facility) -> Facility:
        """
        Save every field of an existing facility.

        Raises:
            NotFoundError: If the facility does not exist
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def delete(self, facility_id: str) -> bool:
        """Returns False when there was nothing to delete."""
        pass

    @abstractmethod
    async def list_by_status(
        self,
        status: Optional[ModerationStatus] = None,
        after: Optional[Tuple[datetime, str]] = None,
        limit: Optional[int] = None,
    ) -> List[Facility]:
        """
        Listings with the given moderation status, or all when status is None.

        Args:
            after: keyset position (created_at, id); only rows strictly older are returned
            limit: maximum rows, unbounded when None
        """
        pass

    @abstractmethod
    async def list_featured(self) -> List[Facility]:
        """Approved and featured listings."""
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[Facility]:
        pass

    @abstractmethod
    async def get_by_subscription_id(self, subscription_id: str) -> Optional[Facility]:
        pass
