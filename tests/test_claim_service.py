import pytest

from recovery_directory.modules.facility_claims.domain.models.claim import ClaimStatus
from recovery_directory.modules.facility_directory.domain.models.facility import FacilityClaimStatus
from recovery_directory.shared.core.exceptions import (
    BusinessRuleViolationError,
    DuplicateResourceError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)


def claim_data(**overrides) -> dict:
    data = {
        "name": "Jordan Lee",
        "position": "Clinical Director",
        "website": "https://www.riverside.com",
        "email": "jordan@gmail.com",
        "phone": "512-555-0199",
    }
    data.update(overrides)
    return data


async def test_matching_domain_is_auto_approved(claim_service, facility_repo, make_facility):
    facility = make_facility()

    claim = await claim_service.create_claim(facility.id, "user-1", claim_data(email="jordan@riverside.com"))

    assert claim.status == ClaimStatus.APPROVED
    assert claim.email_matches_domain
    stored = facility_repo.facilities[facility.id]
    assert stored.claim_status == FacilityClaimStatus.CLAIMED
    assert stored.owner_id == "user-1"
    assert stored.active_claim_id == claim.id


async def test_other_domain_waits_for_review(claim_service, facility_repo, make_facility):
    facility = make_facility()

    claim = await claim_service.create_claim(facility.id, "user-1", claim_data())

    assert claim.status == ClaimStatus.PENDING
    assert not claim.email_matches_domain
    assert facility_repo.facilities[facility.id].claim_status == FacilityClaimStatus.UNCLAIMED


async def test_invalid_contact_details(claim_service, make_facility):
    facility = make_facility()
    with pytest.raises(ValidationError) as exc_info:
        await claim_service.create_claim(facility.id, "user-1", claim_data(email="nope", website="riverside", phone=""))
    errors = exc_info.value.details["errors"]
    assert "Invalid email address" in errors
    assert "Invalid website URL" in errors
    assert "Phone is required" in errors


async def test_claim_on_missing_facility(claim_service):
    with pytest.raises(NotFoundError):
        await claim_service.create_claim("missing", "user-1", claim_data())


async def test_duplicate_pending_claim(claim_service, make_facility):
    facility = make_facility()
    await claim_service.create_claim(facility.id, "user-1", claim_data())
    with pytest.raises(DuplicateResourceError):
        await claim_service.create_claim(facility.id, "user-1", claim_data())


async def test_claimed_facility_refuses_new_claims(claim_service, make_facility):
    facility = make_facility(claim_status=FacilityClaimStatus.CLAIMED, owner_id="owner-1")
    with pytest.raises(BusinessRuleViolationError):
        await claim_service.create_claim(facility.id, "user-2", claim_data())


async def test_admin_approval_hands_over_facility(claim_service, facility_repo, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data())

    reviewed = await claim_service.update_claim_status(claim.id, ClaimStatus.APPROVED, "admin-1", "Called them")

    assert reviewed.status == ClaimStatus.APPROVED
    assert reviewed.reviewed_by == "admin-1"
    assert reviewed.admin_notes == "Called them"
    assert facility_repo.facilities[facility.id].owner_id == "user-1"


async def test_second_approval_on_same_facility_is_refused(claim_service, make_facility):
    facility = make_facility()
    first = await claim_service.create_claim(facility.id, "user-1", claim_data())
    second = await claim_service.create_claim(facility.id, "user-2", claim_data())
    await claim_service.update_claim_status(first.id, ClaimStatus.APPROVED, "admin-1")

    with pytest.raises(BusinessRuleViolationError):
        await claim_service.update_claim_status(second.id, ClaimStatus.APPROVED, "admin-1")


async def test_rejection_leaves_facility_unclaimed(claim_service, facility_repo, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data())
    await claim_service.update_claim_status(claim.id, ClaimStatus.REJECTED, "admin-1")
    assert facility_repo.facilities[facility.id].claim_status == FacilityClaimStatus.UNCLAIMED


async def test_review_only_accepts_approve_or_reject(claim_service, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data())
    with pytest.raises(ValidationError):
        await claim_service.update_claim_status(claim.id, ClaimStatus.DISPUTED, "admin-1")


async def test_dispute_and_uphold(claim_service, facility_repo, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data(email="a@riverside.com"))

    disputed = await claim_service.dispute_claim(claim.id, "user-2", "  I am the real owner ")
    assert disputed.status == ClaimStatus.DISPUTED
    assert disputed.dispute_reason == "I am the real owner"
    assert facility_repo.facilities[facility.id].claim_status == FacilityClaimStatus.DISPUTED

    with pytest.raises(BusinessRuleViolationError):
        await claim_service.create_claim(facility.id, "user-3", claim_data())

    resolved = await claim_service.resolve_dispute(claim.id, "admin-1", ClaimStatus.APPROVED, "Documents check out")
    assert resolved.status == ClaimStatus.APPROVED
    assert resolved.dispute_resolution == ClaimStatus.APPROVED
    stored = facility_repo.facilities[facility.id]
    assert stored.claim_status == FacilityClaimStatus.CLAIMED
    assert stored.owner_id == "user-1"


async def test_dispute_rejected_releases_facility(claim_service, facility_repo, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data(email="a@riverside.com"))
    await claim_service.dispute_claim(claim.id, "user-2", "Not an employee")

    await claim_service.resolve_dispute(claim.id, "admin-1", ClaimStatus.REJECTED)

    stored = facility_repo.facilities[facility.id]
    assert stored.claim_status == FacilityClaimStatus.UNCLAIMED
    assert stored.owner_id is None
    assert stored.active_claim_id is None


async def test_disputed_claim_cannot_be_reviewed_again(claim_service, facility_repo, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data(email="a@riverside.com"))
    await claim_service.dispute_claim(claim.id, "user-2", "Not an employee")

    with pytest.raises(InvalidTransitionError):
        await claim_service.update_claim_status(claim.id, ClaimStatus.REJECTED, "admin-1")

    # The dispute stays open and can still be settled
    assert facility_repo.facilities[facility.id].claim_status == FacilityClaimStatus.DISPUTED
    await claim_service.resolve_dispute(claim.id, "admin-1", ClaimStatus.REJECTED)
    stored = facility_repo.facilities[facility.id]
    assert stored.claim_status == FacilityClaimStatus.UNCLAIMED
    assert stored.owner_id is None


async def test_approved_claim_cannot_be_reviewed_again(claim_service, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data(email="a@riverside.com"))
    with pytest.raises(InvalidTransitionError):
        await claim_service.update_claim_status(claim.id, ClaimStatus.REJECTED, "admin-1")


async def test_only_approved_claims_can_be_disputed(claim_service, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data())
    with pytest.raises(InvalidTransitionError):
        await claim_service.dispute_claim(claim.id, "user-2", "reason")


async def test_dispute_needs_reason(claim_service, make_facility):
    facility = make_facility()
    claim = await claim_service.create_claim(facility.id, "user-1", claim_data(email="a@riverside.com"))
    with pytest.raises(ValidationError):
        await claim_service.dispute_claim(claim.id, "user-2", "   ")


async def test_claim_stats(claim_service, make_facility):
    auto = make_facility()
    manual = make_facility()
    waiting = make_facility()
    rejected = make_facility()

    await claim_service.create_claim(auto.id, "u1", claim_data(email="x@riverside.com"))
    approved = await claim_service.create_claim(manual.id, "u2", claim_data())
    await claim_service.update_claim_status(approved.id, ClaimStatus.APPROVED, "admin")
    await claim_service.create_claim(waiting.id, "u3", claim_data())
    no = await claim_service.create_claim(rejected.id, "u4", claim_data())
    await claim_service.update_claim_status(no.id, ClaimStatus.REJECTED, "admin")

    stats = await claim_service.get_claim_stats()
    assert stats.total == 4
    assert (stats.pending, stats.approved, stats.rejected, stats.disputed) == (1, 2, 1, 0)
    assert (stats.auto_approved, stats.manually_approved) == (1, 1)


async def test_claim_listings(claim_service, make_facility):
    facility = make_facility()
    other = make_facility()
    await claim_service.create_claim(facility.id, "u1", claim_data())
    await claim_service.create_claim(other.id, "u2", claim_data())

    assert len(await claim_service.list_claims()) == 2
    assert len(await claim_service.list_claims(ClaimStatus.PENDING)) == 2
    assert [c.user_id for c in await claim_service.list_facility_claims(facility.id)] == ["u1"]
