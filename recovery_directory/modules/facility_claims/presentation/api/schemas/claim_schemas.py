# 📄 File: recovery_directory/modules/facility_claims/presentation/api/schemas/claim_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the "this center is mine" form, the admin review and dispute forms,
# and the claim details admins see.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for /claims endpoints.
#
# 🔗 Dependencies:
# - pydantic, facility_claims.domain.models.claim
#
# 🔄 Connected Modules / Calls From:
# - presentation/api/v1/claims.py

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.modules.facility_claims.domain.models.claim import ClaimStatus


class ClaimCreateRequest(BaseModel):
    """Contact details of the person claiming the facility."""
    name: str = Field(..., max_length=255)
    position: str = Field(..., max_length=255)
    website: str = Field(..., max_length=500)
    email: str = Field(..., max_length=255)
    phone: str = Field(..., max_length=50)


class ClaimStatusUpdateRequest(BaseModel):
    status: Literal["approved", "rejected"]
    notes: Optional[str] = None


class ClaimDisputeRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=2000)


class ClaimResolveRequest(BaseModel):
    resolution: Literal["approved", "rejected"]
    notes: Optional[str] = None


class ClaimResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    facility_id: str
    user_id: str
    status: ClaimStatus
    name: str
    position: str
    website: str
    email: str
    phone: str
    email_verified: bool
    email_matches_domain: bool
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    dispute_reason: Optional[str] = None
    disputed_by: Optional[str] = None
    disputed_at: Optional[datetime] = None
    dispute_resolution: Optional[ClaimStatus] = None
    dispute_resolved_by: Optional[str] = None
    dispute_resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ClaimStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    pending: int
    approved: int
    rejected: int
    disputed: int
    auto_approved: int
    manually_approved: int
