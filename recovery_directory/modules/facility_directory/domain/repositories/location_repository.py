# 📄 File: recovery_directory/modules/facility_directory/domain/repositories/location_repository.py
# 🧭 Purpose (Layman Explanation):
# What the app needs to do with the homepage's featured cities.
# 🧪 Purpose (Technical Summary):
# Repository interface for FeaturedLocation rows kept in display order.
# 🔗 Dependencies:
# Domain models (FeaturedLocation), abc
# 🔄 Connected Modules / Calls From:
# location_service, infrastructure implementation

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.location import FeaturedLocation


class LocationRepository(ABC):

    @abstractmethod
    async def list_all(self) -> List[FeaturedLocation]:
        """Ordered by the display order ascending."""
        pass

    @abstractmethod
    async def get_by_id(self, location_id: str) -> Optional[FeaturedLocation]:
        pass

    @abstractmethod
    async def max_order(self) -> Optional[int]:
        """Highest display order in use, None when there are no locations."""
        pass

    @abstractmethod
    async def create(self, location: FeaturedLocation) -> FeaturedLocation:
        pass

    @abstractmethod
    async def update(self, location: FeaturedLocation) -> FeaturedLocation:
        pass

    @abstractmethod
    async def delete(self, location_id: str) -> bool:
        pass
