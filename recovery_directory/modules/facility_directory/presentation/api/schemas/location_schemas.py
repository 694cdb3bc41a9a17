# 📄 File: recovery_directory/modules/facility_directory/presentation/api/schemas/location_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the admin forms for homepage cities.
#
# 🧪 Purpose (Technical Summary):
# Pydantic schemas for /locations endpoints.
#
# 🔗 Dependencies:
# - pydantic, facility_schemas.CoordinatesSchema
#
# 🔄 Connected Modules / Calls From:
# - presentation/api/v1/locations.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.modules.facility_directory.presentation.api.schemas.facility_schemas import CoordinatesSchema


class LocationCreateRequest(BaseModel):
    city: str = Field(..., min_length=1, max_length=120)
    state: str = Field(..., min_length=1, max_length=120)
    image: Optional[str] = None
    total_listings: int = Field(default=0, ge=0)
    coordinates: Optional[CoordinatesSchema] = None
    is_featured: bool = True


class LocationUpdateRequest(BaseModel):
    city: Optional[str] = Field(None, min_length=1, max_length=120)
    state: Optional[str] = Field(None, min_length=1, max_length=120)
    image: Optional[str] = None
    total_listings: Optional[int] = Field(None, ge=0)
    coordinates: Optional[CoordinatesSchema] = None
    is_featured: Optional[bool] = None


class LocationReorderRequest(BaseModel):
    ordered_ids: List[str] = Field(..., description="Location ids in their new display order")


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    city: str
    state: str
    image: Optional[str] = None
    total_listings: int
    coordinates: Optional[CoordinatesSchema] = None
    is_featured: bool
    order: int
    created_at: datetime
    updated_at: datetime


class ImageUploadResponse(BaseModel):
    url: str
