# 📄 File: recovery_directory/modules/facility_claims/presentation/api/v1/claims.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for claiming a listing, disputing a claim, and the admin screens
# that review claims and settle disputes.
# 🧪 Purpose (Technical Summary):
# /claims router over ClaimService. Claim submission is rate limited per client
# address; review, stats and dispute resolution require an admin.
# 🔗 Dependencies:
# FastAPI, slowapi (shared limiter), ClaimService, claim schemas, shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# recovery_directory.api.v1.router

"""
Claims API Endpoints

User (authenticated, active account):
- POST /facility/{facility_id}: Claim a facility
- POST /{claim_id}/dispute: Dispute an approved claim

Admin:
- GET /: All claims, optionally by status
- GET /stats: Claim counters
- GET /facility/{facility_id}: Claims on one facility
- GET /{claim_id}: One claim
- PUT /{claim_id}/status: Approve or reject a pending claim
- POST /{claim_id}/resolve: Settle a dispute
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from recovery_directory.modules.facility_claims.domain.models.claim import ClaimStatus
from recovery_directory.modules.facility_claims.domain.services.claim_service import ClaimService
from recovery_directory.modules.facility_claims.presentation.api.schemas.claim_schemas import (
    ClaimCreateRequest,
    ClaimDisputeRequest,
    ClaimResolveRequest,
    ClaimResponse,
    ClaimStatsResponse,
    ClaimStatusUpdateRequest,
)
from recovery_directory.shared.core.dependencies import (
    CurrentUser,
    get_current_active_user,
    get_current_admin_user,
)
from recovery_directory.shared.core.rate_limiter import claim_rate_limit, limiter

logger = logging.getLogger(__name__)

claims_router = APIRouter()


@claims_router.post(
    "/facility/{facility_id}",
    response_model=ClaimResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Claim ownership of a facility",
    responses={
        404: {"description": "Facility not found"},
        409: {"description": "A pending claim by this user already exists"},
        422: {"description": "Invalid contact data or facility already claimed"},
        429: {"description": "Too many claims"},
    },
)
@limiter.limit(claim_rate_limit)
async def create_claim(
    request: Request,
    facility_id: str,
    body: ClaimCreateRequest,
    current_user: CurrentUser = Depends(get_current_active_user),
    claim_service: ClaimService = Depends(),
) -> ClaimResponse:
    claim = await claim_service.create_claim(facility_id, current_user.user_id, body.model_dump())
    return ClaimResponse.model_validate(claim)


@claims_router.get("/", response_model=List[ClaimResponse], summary="List claims (admin)")
async def list_claims(
    status_filter: Optional[ClaimStatus] = Query(None, alias="status"),
    admin: CurrentUser = Depends(get_current_admin_user),
    claim_service: ClaimService = Depends(),
) -> List[ClaimResponse]:
    return [ClaimResponse.model_validate(c) for c in await claim_service.list_claims(status_filter)]


@claims_router.get("/stats", response_model=ClaimStatsResponse, summary="Claim statistics (admin)")
async def get_claim_stats(
    admin: CurrentUser = Depends(get_current_admin_user),
    claim_service: ClaimService = Depends(),
) -> ClaimStatsResponse:
    return ClaimStatsResponse.model_validate(await claim_service.get_claim_stats())


@claims_router.get("/facility/{facility_id}", response_model=List[ClaimResponse], summary="Claims on a facility (admin)")
async def list_facility_claims(
    facility_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    claim_service: ClaimService = Depends(),
) -> List[ClaimResponse]:
    return [ClaimResponse.model_validate(c) for c in await claim_service.list_facility_claims(facility_id)]


@claims_router.get("/{claim_id}", response_model=ClaimResponse, summary="Get a claim (admin)")
async def get_claim(
    claim_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    claim_service: ClaimService = Depends(),
) -> ClaimResponse:
    return ClaimResponse.model_validate(await claim_service.get_claim(claim_id))


@claims_router.put("/{claim_id}/status", response_model=ClaimResponse, summary="Approve or reject a claim (admin)")
async def update_claim_status(
    claim_id: str,
    body: ClaimStatusUpdateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    claim_service: ClaimService = Depends(),
) -> ClaimResponse:
    claim = await claim_service.update_claim_status(claim_id, ClaimStatus(body.status), admin.user_id, body.notes)
    return ClaimResponse.model_validate(claim)


@claims_router.post("/{claim_id}/dispute", response_model=ClaimResponse, summary="Dispute an approved claim")
async def dispute_claim(
    claim_id: str,
    body: ClaimDisputeRequest,
    current_user: CurrentUser = Depends(get_current_active_user),
    claim_service: ClaimService = Depends(),
) -> ClaimResponse:
    claim = await claim_service.dispute_claim(claim_id, current_user.user_id, body.reason)
    return ClaimResponse.model_validate(claim)


@claims_router.post("/{claim_id}/resolve", response_model=ClaimResponse, summary="Resolve a dispute (admin)")
async def resolve_dispute(
    claim_id: str,
    body: ClaimResolveRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    claim_service: ClaimService = Depends(),
) -> ClaimResponse:
    claim = await claim_service.resolve_dispute(claim_id, admin.user_id, ClaimStatus(body.resolution), body.notes)
    return ClaimResponse.model_validate(claim)
