# 📄 File: recovery_directory/modules/facility_directory/presentation/api/v1/locations.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for homepage cities: anyone can see them, admins manage them.
# 🧪 Purpose (Technical Summary):
# /locations router over LocationService; mutations require an admin.
# 🔗 Dependencies:
# FastAPI, LocationService, location schemas, shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# recovery_directory.api.v1.router

import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status

from recovery_directory.modules.facility_directory.domain.services.location_service import LocationService
from recovery_directory.modules.facility_directory.presentation.api.schemas.location_schemas import (
    ImageUploadResponse,
    LocationCreateRequest,
    LocationReorderRequest,
    LocationResponse,
    LocationUpdateRequest,
)
from recovery_directory.shared.core.dependencies import CurrentUser, get_current_admin_user
from recovery_directory.shared.infrastructure.storage.file_manager import read_upload

logger = logging.getLogger(__name__)

locations_router = APIRouter()


@locations_router.get("/", response_model=List[LocationResponse], summary="Featured locations in display order")
async def list_locations(location_service: LocationService = Depends()) -> List[LocationResponse]:
    return [LocationResponse.model_validate(loc) for loc in await location_service.list_locations()]


@locations_router.post(
    "/",
    response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a featured location (admin)",
)
async def add_location(
    body: LocationCreateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    location_service: LocationService = Depends(),
) -> LocationResponse:
    return LocationResponse.model_validate(await location_service.add_location(body.model_dump()))


@locations_router.put("/order", response_model=List[LocationResponse], summary="Reorder featured locations (admin)")
async def reorder_locations(
    body: LocationReorderRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    location_service: LocationService = Depends(),
) -> List[LocationResponse]:
    locations = await location_service.reorder_locations(body.ordered_ids)
    return [LocationResponse.model_validate(loc) for loc in locations]


@locations_router.post("/image", response_model=ImageUploadResponse, summary="Upload a location image (admin)")
async def upload_location_image(
    file: UploadFile = File(...),
    admin: CurrentUser = Depends(get_current_admin_user),
    location_service: LocationService = Depends(),
) -> ImageUploadResponse:
    return ImageUploadResponse(url=await location_service.upload_image(await read_upload(file)))


@locations_router.patch("/{location_id}", response_model=LocationResponse, summary="Update a featured location (admin)")
async def update_location(
    location_id: str,
    body: LocationUpdateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    location_service: LocationService = Depends(),
) -> LocationResponse:
    location = await location_service.update_location(location_id, body.model_dump(exclude_unset=True))
    return LocationResponse.model_validate(location)


@locations_router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Remove a featured location (admin)")
async def delete_location(
    location_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    location_service: LocationService = Depends(),
) -> None:
    await location_service.delete_location(location_id)
