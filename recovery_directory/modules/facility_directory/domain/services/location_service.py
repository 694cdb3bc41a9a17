# 📄 File: recovery_directory/modules/facility_directory/domain/services/location_service.py
# 🧭 Purpose (Layman Explanation):
# Manages the cities shown on the homepage (adding, editing, removing and putting them
# in order) and counts how many approved listings each city has.
# 🧪 Purpose (Technical Summary):
# Featured-location CRUD with append-at-end ordering, whole-list reorder, image upload
# and cleanup under "locations/", plus city grouping of approved facilities.
# 🔗 Dependencies:
# LocationRepository, FacilityRepository, FileManager, shared helpers
# 🔄 Connected Modules / Calls From:
# locations router, facilities router (GET /facilities/cities)

import logging
from collections import Counter
from typing import Any, Dict, List, Tuple

from fastapi import Depends

from recovery_directory.modules.facility_directory.domain.models.facility import ModerationStatus
from recovery_directory.modules.facility_directory.domain.models.location import CityCount, FeaturedLocation
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.modules.facility_directory.domain.repositories.location_repository import LocationRepository
from recovery_directory.shared.core.exceptions import NotFoundError, ValidationError
from recovery_directory.shared.infrastructure.storage.file_manager import FileManager, UploadedImage, get_file_manager
from recovery_directory.shared.utils.helpers import parse_city_state, utc_now

logger = logging.getLogger(__name__)

LOCATION_STORAGE_PREFIX = "locations/"
EDITABLE_FIELDS = ("city", "state", "image", "total_listings", "coordinates", "is_featured")


class LocationService:

    def __init__(
        self,
        location_repository: LocationRepository = Depends(),
        facility_repository: FacilityRepository = Depends(),
        file_manager: FileManager = Depends(get_file_manager),
    ):
        self.location_repository = location_repository
        self.facility_repository = facility_repository
        self.file_manager = file_manager

    async def list_locations(self) -> List[FeaturedLocation]:
        return await self.location_repository.list_all()

    async def get_location(self, location_id: str) -> FeaturedLocation:
        location = await self.location_repository.get_by_id(location_id)
        if not location:
            raise NotFoundError("Location not found", resource_type="location", resource_id=location_id)
        return location

    async def add_location(self, data: Dict[str, Any]) -> FeaturedLocation:
        """New locations go to the end of the list."""
        if not (data.get("city") or "").strip() or not (data.get("state") or "").strip():
            raise ValidationError("City and state are required", field="city")

        current_max = await self.location_repository.max_order()
        now = utc_now()
        fields = {k: v for k, v in data.items() if k in EDITABLE_FIELDS and v is not None}
        location = FeaturedLocation(
            **fields,
            order=0 if current_max is None else current_max + 1,
            created_at=now,
            updated_at=now,
        )
        created = await self.location_repository.create(location)
        logger.info(f"Featured location added: {created.city}, {created.state} at position {created.order}")
        return created

    async def update_location(self, location_id: str, changes: Dict[str, Any]) -> FeaturedLocation:
        location = await self.get_location(location_id)
        old_image = location.image

        for field in EDITABLE_FIELDS:
            if field in changes and (changes[field] is not None or field in ("image", "coordinates")):
                setattr(location, field, changes[field])
        location.touch()
        saved = await self.location_repository.update(location)

        if old_image and old_image != saved.image:
            await self.file_manager.cleanup_urls([old_image], LOCATION_STORAGE_PREFIX)
        return saved

    async def delete_location(self, location_id: str) -> None:
        location = await self.get_location(location_id)
        await self.file_manager.cleanup_urls([location.image], LOCATION_STORAGE_PREFIX)
        await self.location_repository.delete(location_id)
        logger.info(f"Featured location removed: {location.city}, {location.state}")

    async def reorder_locations(self, ordered_ids: List[str]) -> List[FeaturedLocation]:
        """
        Each id's position in ordered_ids becomes its display order.

        Locations left out of ordered_ids keep their relative order after the
        listed ones. Every id is checked before anything is written; the
        request session commits all positions together.
        """
        locations = []
        for location_id in dict.fromkeys(ordered_ids):
            locations.append(await self.get_location(location_id))

        listed = {location.id for location in locations}
        locations.extend(loc for loc in await self.location_repository.list_all() if loc.id not in listed)

        for index, location in enumerate(locations):
            if location.order != index:
                location.order = index
                location.touch()
                await self.location_repository.update(location)

        logger.info(f"Reordered {len(locations)} featured locations")
        return await self.location_repository.list_all()

    async def upload_image(self, upload: UploadedImage) -> str:
        return await self.file_manager.upload_location_image(upload)

    async def list_cities(self) -> List[CityCount]:
        """Approved listings grouped by "City, State", busiest first."""
        facilities = await self.facility_repository.list_by_status(ModerationStatus.APPROVED)

        counts: Counter = Counter()
        for facility in facilities:
            key = self._city_key(facility.city, facility.state, facility.location)
            if key[0]:
                counts[key] += 1

        cities = [CityCount(city=city, state=state, count=n) for (city, state), n in counts.items()]
        cities.sort(key=lambda c: (-c.count, c.city.lower(), c.state.lower()))
        return cities

    @staticmethod
    def _city_key(city: str, state: str, location: str) -> Tuple[str, str]:
        if city.strip() and state.strip():
            return city.strip(), state.strip()
        return parse_city_state(location)
