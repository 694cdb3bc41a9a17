# 📄 File: recovery_directory/modules/facility_directory/presentation/api/schemas/facility_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the "add a listing" and "edit a listing" forms and of the listing
# details the site shows.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for facility endpoints. Create fields are
# optional at the schema level so the service can report every missing field at once.
#
# 🔗 Dependencies:
# - pydantic
# - facility_directory.domain.models (enums)
#
# 🔄 Connected Modules / Calls From:
# - presentation/api/v1/facilities.py, presentation/api/v1/admin_facilities.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.modules.facility_directory.domain.models.facility import (
    FacilityClaimStatus,
    ModerationStatus,
    SubscriptionStatus,
)


class TaxonomyRefSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class CoordinatesSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class FacilityCreateRequest(BaseModel):
    """New listing submitted by an owner."""
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = Field(None, description="'City, State'")
    city: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    coordinates: Optional[CoordinatesSchema] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    accreditation: List[str] = Field(default_factory=list)
    treatment_types: List[TaxonomyRefSchema] = Field(default_factory=list)
    amenities: List[TaxonomyRefSchema] = Field(default_factory=list)
    conditions: List[TaxonomyRefSchema] = Field(default_factory=list)
    substances: List[TaxonomyRefSchema] = Field(default_factory=list)
    therapies: List[TaxonomyRefSchema] = Field(default_factory=list)
    languages: List[TaxonomyRefSchema] = Field(default_factory=list)
    insurances: List[TaxonomyRefSchema] = Field(default_factory=list)
    licenses: List[TaxonomyRefSchema] = Field(default_factory=list)


class FacilityUpdateRequest(BaseModel):
    """
    Partial update. Omitted fields stay as they are; address, coordinates,
    website and logo can be cleared with null.
    """
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    location: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    coordinates: Optional[CoordinatesSchema] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    images: Optional[List[str]] = None
    highlights: Optional[List[str]] = None
    accreditation: Optional[List[str]] = None
    treatment_types: Optional[List[TaxonomyRefSchema]] = None
    amenities: Optional[List[TaxonomyRefSchema]] = None
    conditions: Optional[List[TaxonomyRefSchema]] = None
    substances: Optional[List[TaxonomyRefSchema]] = None
    therapies: Optional[List[TaxonomyRefSchema]] = None
    languages: Optional[List[TaxonomyRefSchema]] = None
    insurances: Optional[List[TaxonomyRefSchema]] = None
    licenses: Optional[List[TaxonomyRefSchema]] = None


class FacilityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    location: str
    city: str
    state: str
    address: Optional[str] = None
    coordinates: Optional[CoordinatesSchema] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    images: List[str]
    highlights: List[str]
    accreditation: List[str]
    treatment_types: List[TaxonomyRefSchema]
    amenities: List[TaxonomyRefSchema]
    conditions: List[TaxonomyRefSchema]
    substances: List[TaxonomyRefSchema]
    therapies: List[TaxonomyRefSchema]
    languages: List[TaxonomyRefSchema]
    insurances: List[TaxonomyRefSchema]
    licenses: List[TaxonomyRefSchema]
    rating: float
    review_count: int
    moderation_status: ModerationStatus
    is_verified: bool
    is_featured: bool
    owner_id: Optional[str] = None
    slug: str
    subscription_status: SubscriptionStatus
    claim_status: FacilityClaimStatus
    created_at: datetime
    updated_at: datetime


class FacilityPageResponse(BaseModel):
    items: List[FacilityResponse]
    next_cursor: Optional[str] = None
    has_more: bool


class CityCountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    city: str
    state: str
    count: int
    label: str


class UploadResponse(BaseModel):
    urls: List[str]
