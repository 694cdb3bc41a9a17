# 📄 File: recovery_directory/modules/facility_claims/domain/models/claim.py
# 🧭 Purpose (Layman Explanation):
# A request from someone saying "this treatment center is mine", with their contact
# details, what the admin decided, and any dispute raised about it later.
# 🧪 Purpose (Technical Summary):
# FacilityClaim aggregate with the claim status state machine
# (pending -> approved|rejected, approved -> disputed, disputed -> approved|rejected),
# review stamping, dispute and resolution bookkeeping, and the stats value object.
# 🔗 Dependencies:
# pydantic, enum, shared.core.exceptions, shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# claim_service, claim_repository, claim_repository_impl, claims router

from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.shared.core.exceptions import InvalidTransitionError
from recovery_directory.shared.utils.helpers import generate_id, utc_now


class ClaimStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    DISPUTED = "disputed"


CLAIM_TRANSITIONS: Dict[ClaimStatus, Set[ClaimStatus]] = {
    ClaimStatus.PENDING: {ClaimStatus.APPROVED, ClaimStatus.REJECTED},
    ClaimStatus.APPROVED: {ClaimStatus.DISPUTED},
    ClaimStatus.REJECTED: set(),
    ClaimStatus.DISPUTED: {ClaimStatus.APPROVED, ClaimStatus.REJECTED},
}


class FacilityClaim(BaseModel):
    """
    An ownership claim on a facility.

    Claims whose contact email shares the facility website's domain are
    approved on creation; the rest wait for an admin.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_id)
    facility_id: str
    user_id: str
    status: ClaimStatus = ClaimStatus.PENDING

    name: str
    position: str
    website: str
    email: str
    phone: str

    email_verified: bool = False
    email_matches_domain: bool = False

    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None

    dispute_reason: Optional[str] = None
    disputed_by: Optional[str] = None
    disputed_at: Optional[datetime] = None
    dispute_resolution: Optional[ClaimStatus] = None
    dispute_resolved_by: Optional[str] = None
    dispute_resolved_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def transition_to(self, target: ClaimStatus) -> None:
        if target not in CLAIM_TRANSITIONS[self.status]:
            raise InvalidTransitionError("claim", self.status.value, target.value)
        self.status = target
        self.updated_at = utc_now()

    def review(self, target: ClaimStatus, admin_id: str, notes: Optional[str] = None) -> None:
        # Disputed claims are settled through resolve(), never reviewed again
        if self.status != ClaimStatus.PENDING:
            raise InvalidTransitionError("claim", self.status.value, target.value)
        self.transition_to(target)
        self.reviewed_by = admin_id
        self.reviewed_at = self.updated_at
        if notes is not None:
            self.admin_notes = notes

    def dispute(self, disputed_by: str, reason: str) -> None:
        self.transition_to(ClaimStatus.DISPUTED)
        self.dispute_reason = reason
        self.disputed_by = disputed_by
        self.disputed_at = self.updated_at

    def resolve(self, resolution: ClaimStatus, admin_id: str, notes: Optional[str] = None) -> None:
        if self.status != ClaimStatus.DISPUTED:
            raise InvalidTransitionError("claim", self.status.value, resolution.value)
        self.transition_to(resolution)
        self.dispute_resolution = resolution
        self.dispute_resolved_by = admin_id
        self.dispute_resolved_at = self.updated_at
        if notes is not None:
            self.admin_notes = notes

    @property
    def auto_approved(self) -> bool:
        return self.status == ClaimStatus.APPROVED and self.email_matches_domain


class ClaimStats(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    disputed: int = 0
    auto_approved: int = 0
    manually_approved: int = 0
