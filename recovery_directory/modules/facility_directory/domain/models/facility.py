# 📄 File: recovery_directory/modules/facility_directory/domain/models/facility.py
# 🧭 Purpose (Layman Explanation):
# Describes a treatment center listing: its contact details, photos, what it treats,
# who owns it, and where it is in the review process (waiting, approved, rejected, archived).
# 🧪 Purpose (Technical Summary):
# Facility aggregate with moderation, claim and subscription state enums, the explicit
# moderation transition table, and the verify/unverify/feature rules.
# 🔗 Dependencies:
# pydantic, enum, shared.core.exceptions, shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# facility_service, moderation_service, search_service, claim_service,
# subscription_service, facility_repository_impl

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.shared.core.exceptions import BusinessRuleViolationError, InvalidTransitionError
from recovery_directory.shared.utils.helpers import facility_slug, generate_id, utc_now


class ModerationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ARCHIVED = "archived"


class FacilityClaimStatus(str, Enum):
    """Ownership state of a listing, driven by the claims workflow"""
    UNCLAIMED = "unclaimed"
    CLAIMED = "claimed"
    DISPUTED = "disputed"


class SubscriptionStatus(str, Enum):
    NONE = "none"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELLED = "cancelled"


MODERATION_TRANSITIONS: Dict[ModerationStatus, Set[ModerationStatus]] = {
    ModerationStatus.PENDING: {ModerationStatus.APPROVED, ModerationStatus.REJECTED},
    ModerationStatus.APPROVED: {ModerationStatus.ARCHIVED, ModerationStatus.PENDING},
    ModerationStatus.REJECTED: {ModerationStatus.PENDING},
    ModerationStatus.ARCHIVED: {ModerationStatus.PENDING},
}

TAXONOMY_FIELDS = (
    "treatment_types",
    "amenities",
    "conditions",
    "substances",
    "therapies",
    "languages",
    "insurances",
    "licenses",
)


class TaxonomyRef(BaseModel):
    """Denormalized {id, name} pointer to a taxonomy term"""
    id: str
    name: str


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Facility(BaseModel):
    """
    A directory listing.

    New listings start pending and unclaimed; only approved listings are
    visible in public lists and search.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_id)
    name: str
    description: str = ""
    location: str = ""
    city: str = ""
    state: str = ""
    address: Optional[str] = None
    coordinates: Optional[Coordinates] = None

    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    accreditation: List[str] = Field(default_factory=list)

    treatment_types: List[TaxonomyRef] = Field(default_factory=list)
    amenities: List[TaxonomyRef] = Field(default_factory=list)
    conditions: List[TaxonomyRef] = Field(default_factory=list)
    substances: List[TaxonomyRef] = Field(default_factory=list)
    therapies: List[TaxonomyRef] = Field(default_factory=list)
    languages: List[TaxonomyRef] = Field(default_factory=list)
    insurances: List[TaxonomyRef] = Field(default_factory=list)
    licenses: List[TaxonomyRef] = Field(default_factory=list)

    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)

    moderation_status: ModerationStatus = ModerationStatus.PENDING
    is_verified: bool = False
    is_featured: bool = False

    owner_id: Optional[str] = None
    slug: str = ""

    subscription_id: Optional[str] = None
    subscription_status: SubscriptionStatus = SubscriptionStatus.NONE

    claim_status: FacilityClaimStatus = FacilityClaimStatus.UNCLAIMED
    active_claim_id: Optional[str] = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    # ------------------------------------------------------------------
    # Moderation
    # ------------------------------------------------------------------

    def can_transition_to(self, target: ModerationStatus) -> bool:
        return target in MODERATION_TRANSITIONS[self.moderation_status]

    def transition_to(self, target: ModerationStatus) -> None:
        """
        Raises:
            InvalidTransitionError: if target is not reachable from the current status
        """
        if not self.can_transition_to(target):
            raise InvalidTransitionError("facility", self.moderation_status.value, target.value)
        self.moderation_status = target
        self.touch()

    def verify(self) -> None:
        """Mark verified; a pending listing is approved at the same time."""
        if self.moderation_status in (ModerationStatus.REJECTED, ModerationStatus.ARCHIVED):
            raise BusinessRuleViolationError(
                f"Cannot verify a {self.moderation_status.value} facility",
                rule="verify_requires_pending_or_approved",
                context={"facility_id": self.id, "status": self.moderation_status.value},
            )
        if self.moderation_status == ModerationStatus.PENDING:
            self.moderation_status = ModerationStatus.APPROVED
        self.is_verified = True
        self.touch()

    def unverify(self) -> None:
        self.is_verified = False
        if self.moderation_status == ModerationStatus.APPROVED:
            self.moderation_status = ModerationStatus.PENDING
        self.touch()

    def set_featured(self, featured: bool) -> None:
        self.is_featured = featured
        self.touch()

    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------

    def assign_claim(self, owner_id: str, claim_id: str) -> None:
        self.owner_id = owner_id
        self.active_claim_id = claim_id
        self.claim_status = FacilityClaimStatus.CLAIMED
        self.touch()

    def mark_disputed(self) -> None:
        self.claim_status = FacilityClaimStatus.DISPUTED
        self.touch()

    def release_claim(self) -> None:
        self.owner_id = None
        self.active_claim_id = None
        self.claim_status = FacilityClaimStatus.UNCLAIMED
        self.touch()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def is_public(self) -> bool:
        return self.moderation_status == ModerationStatus.APPROVED

    def regenerate_slug(self) -> None:
        self.slug = facility_slug(self.name, self.location)

    def taxonomy_ids(self, field: str) -> Set[str]:
        return {ref.id for ref in getattr(self, field)}

    def touch(self) -> None:
        self.updated_at = utc_now()
