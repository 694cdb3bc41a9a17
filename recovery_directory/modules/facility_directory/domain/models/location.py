# 📄 File: recovery_directory/modules/facility_directory/domain/models/location.py
# 🧭 Purpose (Layman Explanation):
# A city the homepage shows off with a picture, and the list of cities that actually
# have listings.
# 🧪 Purpose (Technical Summary):
# FeaturedLocation model (ordered, curated cities) and the CityCount value object
# produced by grouping approved facilities.
# 🔗 Dependencies:
# pydantic, facility.Coordinates, shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# location_service, location_repository_impl, locations router

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.modules.facility_directory.domain.models.facility import Coordinates
from recovery_directory.shared.utils.helpers import generate_id, utc_now


class FeaturedLocation(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_id)
    city: str
    state: str
    image: Optional[str] = None
    total_listings: int = Field(default=0, ge=0)
    coordinates: Optional[Coordinates] = None
    is_featured: bool = True
    order: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def touch(self) -> None:
        self.updated_at = utc_now()


class CityCount(BaseModel):
    """Approved listings per "City, State"."""
    city: str
    state: str
    count: int

    @property
    def label(self) -> str:
        return f"{self.city}, {self.state}" if self.state else self.city
