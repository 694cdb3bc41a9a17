# 📄 File: recovery_directory/modules/facility_directory/presentation/api/v1/facilities.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for browsing and searching listings, and for owners to add, edit,
# delete and add photos to their own listings.
# 🧪 Purpose (Technical Summary):
# /facilities router: public list/search/featured/cities/detail endpoints and
# authenticated owner endpoints. Ownership is checked in FacilityService.
# 🔗 Dependencies:
# FastAPI, FacilityService, SearchService, LocationService, facility schemas,
# shared.core.dependencies, shared storage (read_upload)
# 🔄 Connected Modules / Calls From:
# recovery_directory.api.v1.router

"""
Facility API Endpoints

Public:
- GET /: Approved listings, cursor paginated
- GET /search: Filtered and ranked search
- GET /featured: Featured listings
- GET /cities: Listing counts per city
- GET /slug/{slug}, GET /{facility_id}: Listing detail

Owner (authenticated, active account):
- POST /: Submit a listing for review
- GET /mine: The caller's listings
- PATCH /{facility_id}, DELETE /{facility_id}
- POST /{facility_id}/photos, POST /{facility_id}/logo
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from recovery_directory.modules.facility_directory.domain.models.search import SearchParams
from recovery_directory.modules.facility_directory.domain.services.facility_service import FacilityService
from recovery_directory.modules.facility_directory.domain.services.location_service import LocationService
from recovery_directory.modules.facility_directory.domain.services.search_service import SearchService
from recovery_directory.modules.facility_directory.presentation.api.schemas.facility_schemas import (
    CityCountResponse,
    FacilityCreateRequest,
    FacilityPageResponse,
    FacilityResponse,
    FacilityUpdateRequest,
    UploadResponse,
)
from recovery_directory.shared.core.dependencies import CurrentUser, get_current_active_user
from recovery_directory.shared.infrastructure.storage.file_manager import read_upload

logger = logging.getLogger(__name__)

facilities_router = APIRouter()


# =============================================================================
# PUBLIC
# =============================================================================

@facilities_router.get("/", response_model=FacilityPageResponse, summary="List approved facilities")
async def list_facilities(
    cursor: Optional[str] = Query(None, description="Cursor from a previous page"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Page size"),
    facility_service: FacilityService = Depends(),
) -> FacilityPageResponse:
    page = await facility_service.list_facilities(cursor=cursor, limit=limit)
    return FacilityPageResponse(
        items=[FacilityResponse.model_validate(f) for f in page.items],
        next_cursor=page.next_cursor,
        has_more=page.has_more,
    )


@facilities_router.get("/search", response_model=List[FacilityResponse], summary="Search approved facilities")
async def search_facilities(
    query: Optional[str] = Query(None, alias="q", description="Free text"),
    locations: List[str] = Query(default=[], description="'City, State' entries"),
    treatment_types: List[str] = Query(default=[]),
    amenities: List[str] = Query(default=[]),
    insurances: List[str] = Query(default=[]),
    conditions: List[str] = Query(default=[]),
    substances: List[str] = Query(default=[]),
    therapies: List[str] = Query(default=[]),
    languages: List[str] = Query(default=[]),
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    search_service: SearchService = Depends(),
) -> List[FacilityResponse]:
    params = SearchParams(
        query=query,
        locations=locations,
        treatment_types=treatment_types,
        amenities=amenities,
        insurances=insurances,
        conditions=conditions,
        substances=substances,
        therapies=therapies,
        languages=languages,
        min_rating=min_rating,
    )
    results = await search_service.search_facilities(params)
    return [FacilityResponse.model_validate(f) for f in results]


@facilities_router.get("/featured", response_model=List[FacilityResponse], summary="Featured facilities")
async def list_featured(facility_service: FacilityService = Depends()) -> List[FacilityResponse]:
    return [FacilityResponse.model_validate(f) for f in await facility_service.list_featured()]


@facilities_router.get("/cities", response_model=List[CityCountResponse], summary="Listing counts per city")
async def list_cities(location_service: LocationService = Depends()) -> List[CityCountResponse]:
    return [CityCountResponse.model_validate(c) for c in await location_service.list_cities()]


# =============================================================================
# OWNER
# =============================================================================

@facilities_router.get("/mine", response_model=List[FacilityResponse], summary="The caller's listings")
async def list_my_facilities(
    current_user: CurrentUser = Depends(get_current_active_user),
    facility_service: FacilityService = Depends(),
) -> List[FacilityResponse]:
    listings = await facility_service.list_user_listings(current_user.user_id)
    return [FacilityResponse.model_validate(f) for f in listings]


@facilities_router.post(
    "/",
    response_model=FacilityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a new facility for review",
)
async def create_facility(
    body: FacilityCreateRequest,
    current_user: CurrentUser = Depends(get_current_active_user),
    facility_service: FacilityService = Depends(),
) -> FacilityResponse:
    facility = await facility_service.create_facility(current_user.user_id, body.model_dump())
    return FacilityResponse.model_validate(facility)


@facilities_router.get("/slug/{slug}", response_model=FacilityResponse, summary="Facility by slug")
async def get_facility_by_slug(slug: str, facility_service: FacilityService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await facility_service.get_facility_by_slug(slug))


@facilities_router.get("/{facility_id}", response_model=FacilityResponse, summary="Facility by id")
async def get_facility(facility_id: str, facility_service: FacilityService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await facility_service.get_facility(facility_id))


@facilities_router.patch("/{facility_id}", response_model=FacilityResponse, summary="Update a facility")
async def update_facility(
    facility_id: str,
    body: FacilityUpdateRequest,
    current_user: CurrentUser = Depends(get_current_active_user),
    facility_service: FacilityService = Depends(),
) -> FacilityResponse:
    changes = body.model_dump(exclude_unset=True)
    facility = await facility_service.update_facility(facility_id, changes, current_user)
    return FacilityResponse.model_validate(facility)


@facilities_router.delete("/{facility_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a facility")
async def delete_facility(
    facility_id: str,
    current_user: CurrentUser = Depends(get_current_active_user),
    facility_service: FacilityService = Depends(),
) -> None:
    await facility_service.delete_facility(facility_id, current_user)


@facilities_router.post("/{facility_id}/photos", response_model=UploadResponse, summary="Upload facility photos")
async def upload_photos(
    facility_id: str,
    files: List[UploadFile] = File(...),
    current_user: CurrentUser = Depends(get_current_active_user),
    facility_service: FacilityService = Depends(),
) -> UploadResponse:
    uploads = [await read_upload(f) for f in files]
    urls = await facility_service.upload_photos(
        facility_id,
        uploads,
        current_user,
        on_progress=lambda done, total: logger.debug(f"Facility {facility_id} photo {done}/{total} uploaded"),
    )
    return UploadResponse(urls=urls)


@facilities_router.post("/{facility_id}/logo", response_model=UploadResponse, summary="Upload a facility logo")
async def upload_logo(
    facility_id: str,
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(get_current_active_user),
    facility_service: FacilityService = Depends(),
) -> UploadResponse:
    url = await facility_service.upload_logo(facility_id, await read_upload(file), current_user)
    return UploadResponse(urls=[url])
