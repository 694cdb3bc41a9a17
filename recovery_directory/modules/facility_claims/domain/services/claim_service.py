# 📄 File: recovery_directory/modules/facility_claims/domain/services/claim_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for claiming a listing: check the contact details, approve straight away
# when the email belongs to the center's own website, otherwise wait for an admin,
# and handle disputes when someone says a claim is wrong.
# 🧪 Purpose (Technical Summary):
# Claim workflow over ClaimRepository and FacilityRepository. Claim and facility
# writes share the request session, so each operation commits or rolls back as one.
# Enforces at most one active claim per facility and the claim transition table.
# 🔗 Dependencies:
# ClaimRepository, FacilityRepository, shared validators (domains_match) and exceptions
# 🔄 Connected Modules / Calls From:
# claims router

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends

from recovery_directory.modules.facility_claims.domain.models.claim import ClaimStats, ClaimStatus, FacilityClaim
from recovery_directory.modules.facility_claims.domain.repositories.claim_repository import ClaimRepository
from recovery_directory.modules.facility_directory.domain.models.facility import Facility, FacilityClaimStatus
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.shared.core.exceptions import (
    BusinessRuleViolationError,
    DuplicateResourceError,
    NotFoundError,
    ValidationError,
)
from recovery_directory.shared.utils.helpers import utc_now
from recovery_directory.shared.utils.validators import domains_match, is_valid_email, is_valid_website

logger = logging.getLogger(__name__)

CLAIM_CONTACT_FIELDS = ("name", "position", "website", "email", "phone")


class ClaimService:
    """
    Ownership claims, reviews and disputes.
    """

    def __init__(
        self,
        claim_repository: ClaimRepository = Depends(),
        facility_repository: FacilityRepository = Depends(),
    ):
        self.claim_repository = claim_repository
        self.facility_repository = facility_repository

    # =========================================================================
    # CREATE
    # =========================================================================

    async def create_claim(self, facility_id: str, user_id: str, data: Dict[str, Any]) -> FacilityClaim:
        """
        Submit a claim.

        Raises:
            ValidationError: malformed email or website, or a missing contact field
            NotFoundError: facility does not exist
            BusinessRuleViolationError: facility already claimed or under dispute
            DuplicateResourceError: the user already has a pending claim on it
        """
        self._validate_contact(data)

        facility = await self._get_facility(facility_id)
        if facility.claim_status != FacilityClaimStatus.UNCLAIMED:
            raise BusinessRuleViolationError(
                f"This facility is already {facility.claim_status.value}",
                rule="single_active_claim",
                context={"facility_id": facility_id, "claim_status": facility.claim_status.value},
            )

        if await self.claim_repository.find_pending(facility_id, user_id):
            raise DuplicateResourceError(
                "You already have a pending claim for this facility",
                resource_type="claim",
                field="facility_id",
                value=facility_id,
            )

        matches = domains_match(data["email"], data["website"])
        now = utc_now()
        claim = FacilityClaim(
            facility_id=facility_id,
            user_id=user_id,
            status=ClaimStatus.APPROVED if matches else ClaimStatus.PENDING,
            name=data["name"].strip(),
            position=data["position"].strip(),
            website=data["website"].strip(),
            email=data["email"].strip(),
            phone=data["phone"].strip(),
            email_verified=False,
            email_matches_domain=matches,
            created_at=now,
            updated_at=now,
        )
        created = await self.claim_repository.create(claim)

        if matches:
            facility.assign_claim(user_id, created.id)
            await self.facility_repository.update(facility)
            logger.info(f"Claim {created.id} auto-approved by domain match; facility {facility_id} claimed by {user_id}")
        else:
            logger.info(f"Claim {created.id} on facility {facility_id} awaiting review")
        return created

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def list_claims(self, status: Optional[ClaimStatus] = None) -> List[FacilityClaim]:
        return await self.claim_repository.list_claims(status)

    async def list_facility_claims(self, facility_id: str) -> List[FacilityClaim]:
        return await self.claim_repository.list_by_facility(facility_id)

    async def get_claim(self, claim_id: str) -> FacilityClaim:
        claim = await self.claim_repository.get_by_id(claim_id)
        if not claim:
            raise NotFoundError("Claim not found", resource_type="claim", resource_id=claim_id)
        return claim

    async def get_claim_stats(self) -> ClaimStats:
        claims = await self.claim_repository.list_claims()
        stats = ClaimStats(total=len(claims))
        for claim in claims:
            setattr(stats, claim.status.value, getattr(stats, claim.status.value) + 1)
            if claim.status == ClaimStatus.APPROVED:
                if claim.email_matches_domain:
                    stats.auto_approved += 1
                else:
                    stats.manually_approved += 1
        return stats

    # =========================================================================
    # ADMIN REVIEW
    # =========================================================================

    async def update_claim_status(
        self,
        claim_id: str,
        status: ClaimStatus,
        admin_id: str,
        notes: Optional[str] = None,
    ) -> FacilityClaim:
        """Approve or reject a pending claim. Approval hands the facility to the claimant."""
        if status not in (ClaimStatus.APPROVED, ClaimStatus.REJECTED):
            raise ValidationError("Claims can only be approved or rejected", field="status", value=status.value)

        claim = await self.get_claim(claim_id)
        facility = await self._get_facility(claim.facility_id)

        if status == ClaimStatus.APPROVED and facility.active_claim_id and facility.active_claim_id != claim.id:
            raise BusinessRuleViolationError(
                "Facility already has an active claim",
                rule="single_active_claim",
                context={"facility_id": facility.id, "active_claim_id": facility.active_claim_id},
            )

        claim.review(status, admin_id, notes)
        saved = await self.claim_repository.update(claim)

        if status == ClaimStatus.APPROVED:
            facility.assign_claim(claim.user_id, claim.id)
            await self.facility_repository.update(facility)

        logger.info(f"Claim {claim_id} {status.value} by admin {admin_id}")
        return saved

    # =========================================================================
    # DISPUTES
    # =========================================================================

    async def dispute_claim(self, claim_id: str, disputed_by: str, reason: str) -> FacilityClaim:
        """Only an approved claim can be disputed; the facility is locked against new claims."""
        if not reason or not reason.strip():
            raise ValidationError("A dispute reason is required", field="reason")

        claim = await self.get_claim(claim_id)
        facility = await self._get_facility(claim.facility_id)

        claim.dispute(disputed_by, reason.strip())
        saved = await self.claim_repository.update(claim)

        facility.mark_disputed()
        await self.facility_repository.update(facility)

        logger.info(f"Claim {claim_id} disputed by {disputed_by}")
        return saved

    async def resolve_dispute(
        self,
        claim_id: str,
        admin_id: str,
        resolution: ClaimStatus,
        notes: Optional[str] = None,
    ) -> FacilityClaim:
        """
        Settle a disputed claim.

        Upholding it gives the facility back to the claimant; rejecting it
        leaves the facility unclaimed with no owner.
        """
        if resolution not in (ClaimStatus.APPROVED, ClaimStatus.REJECTED):
            raise ValidationError("Resolution must be approved or rejected", field="resolution", value=resolution.value)

        claim = await self.get_claim(claim_id)
        facility = await self._get_facility(claim.facility_id)

        claim.resolve(resolution, admin_id, notes)
        saved = await self.claim_repository.update(claim)

        if resolution == ClaimStatus.APPROVED:
            facility.assign_claim(claim.user_id, claim.id)
        else:
            facility.release_claim()
        await self.facility_repository.update(facility)

        logger.info(f"Dispute on claim {claim_id} resolved as {resolution.value} by admin {admin_id}")
        return saved

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _validate_contact(data: Dict[str, Any]) -> None:
        errors = []
        for field in CLAIM_CONTACT_FIELDS:
            value = data.get(field)
            if not isinstance(value, str) or not value.strip():
                errors.append(f"{field.capitalize()} is required")
        if data.get("email") and not is_valid_email(data["email"]):
            errors.append("Invalid email address")
        if data.get("website") and not is_valid_website(data["website"]):
            errors.append("Invalid website URL")
        if errors:
            raise ValidationError("Invalid claim data", errors=errors)

    async def _get_facility(self, facility_id: str) -> Facility:
        facility = await self.facility_repository.get_by_id(facility_id)
        if not facility:
            raise NotFoundError("Facility not found", resource_type="facility", resource_id=facility_id)
        return facility
