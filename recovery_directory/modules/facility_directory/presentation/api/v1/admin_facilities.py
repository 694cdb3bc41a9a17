# 📄 File: recovery_directory/modules/facility_directory/presentation/api/v1/admin_facilities.py
# 🧭 Purpose (Layman Explanation):
# The admin review desk's web addresses: see every listing, approve, reject, archive,
# restore, verify and feature them.
# 🧪 Purpose (Technical Summary):
# Admin-only /admin/facilities router over ModerationService. The router-level
# dependency enforces the admin role for every route.
# 🔗 Dependencies:
# FastAPI, ModerationService, facility schemas, shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# recovery_directory.api.v1.router

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from recovery_directory.modules.facility_directory.domain.models.facility import ModerationStatus
from recovery_directory.modules.facility_directory.domain.services.moderation_service import ModerationService
from recovery_directory.modules.facility_directory.presentation.api.schemas.facility_schemas import FacilityResponse
from recovery_directory.shared.core.dependencies import get_current_admin_user

logger = logging.getLogger(__name__)

admin_facilities_router = APIRouter(dependencies=[Depends(get_current_admin_user)])


@admin_facilities_router.get("/", response_model=List[FacilityResponse], summary="All listings (admin)")
async def list_all(
    status: Optional[ModerationStatus] = Query(None, description="Filter by moderation status"),
    moderation_service: ModerationService = Depends(),
) -> List[FacilityResponse]:
    return [FacilityResponse.model_validate(f) for f in await moderation_service.list_all_for_admin(status)]


@admin_facilities_router.get("/archived", response_model=List[FacilityResponse], summary="Archived listings (admin)")
async def list_archived(moderation_service: ModerationService = Depends()) -> List[FacilityResponse]:
    return [FacilityResponse.model_validate(f) for f in await moderation_service.list_archived()]


@admin_facilities_router.post("/{facility_id}/approve", response_model=FacilityResponse, summary="Approve a pending listing")
async def approve_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.approve(facility_id))


@admin_facilities_router.post("/{facility_id}/reject", response_model=FacilityResponse, summary="Reject a pending listing")
async def reject_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.reject(facility_id))


@admin_facilities_router.post("/{facility_id}/archive", response_model=FacilityResponse, summary="Archive an approved listing")
async def archive_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.archive(facility_id))


@admin_facilities_router.post("/{facility_id}/restore", response_model=FacilityResponse, summary="Restore an archived listing to pending")
async def restore_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.restore(facility_id))


@admin_facilities_router.post("/{facility_id}/revert", response_model=FacilityResponse, summary="Send an approved or rejected listing back to pending")
async def revert_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.revert(facility_id))


@admin_facilities_router.post("/{facility_id}/verify", response_model=FacilityResponse, summary="Mark a listing verified")
async def verify_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.verify(facility_id))


@admin_facilities_router.post("/{facility_id}/unverify", response_model=FacilityResponse, summary="Remove the verified mark")
async def unverify_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.unverify(facility_id))


@admin_facilities_router.post("/{facility_id}/feature", response_model=FacilityResponse, summary="Feature a listing")
async def feature_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.feature(facility_id))


@admin_facilities_router.post("/{facility_id}/unfeature", response_model=FacilityResponse, summary="Stop featuring a listing")
async def unfeature_facility(facility_id: str, moderation_service: ModerationService = Depends()) -> FacilityResponse:
    return FacilityResponse.model_validate(await moderation_service.unfeature(facility_id))
