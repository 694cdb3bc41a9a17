import pytest

from recovery_directory.modules.facility_claims.domain.models.claim import ClaimStatus, FacilityClaim
from recovery_directory.modules.facility_directory.domain.models.facility import (
    Facility,
    FacilityClaimStatus,
    ModerationStatus,
)
from recovery_directory.modules.subscriptions.domain.models.subscription import (
    CheckoutSession,
    map_stripe_status,
)
from recovery_directory.modules.facility_directory.domain.models.facility import SubscriptionStatus
from recovery_directory.shared.core.exceptions import BusinessRuleViolationError, InvalidTransitionError


def _claim(**overrides) -> FacilityClaim:
    fields = dict(
        facility_id="f1", user_id="u1", name="Jo", position="Director",
        website="https://riverside.com", email="jo@gmail.com", phone="555",
    )
    fields.update(overrides)
    return FacilityClaim(**fields)


@pytest.mark.parametrize("start, target", [
    (ModerationStatus.PENDING, ModerationStatus.APPROVED),
    (ModerationStatus.PENDING, ModerationStatus.REJECTED),
    (ModerationStatus.APPROVED, ModerationStatus.ARCHIVED),
    (ModerationStatus.APPROVED, ModerationStatus.PENDING),
    (ModerationStatus.REJECTED, ModerationStatus.PENDING),
    (ModerationStatus.ARCHIVED, ModerationStatus.PENDING),
])
def test_allowed_moderation_transitions(start, target):
    facility = Facility(name="A", moderation_status=start)
    facility.transition_to(target)
    assert facility.moderation_status == target


@pytest.mark.parametrize("start, target", [
    (ModerationStatus.PENDING, ModerationStatus.ARCHIVED),
    (ModerationStatus.REJECTED, ModerationStatus.APPROVED),
    (ModerationStatus.ARCHIVED, ModerationStatus.APPROVED),
])
def test_forbidden_moderation_transitions(start, target):
    facility = Facility(name="A", moderation_status=start)
    with pytest.raises(InvalidTransitionError):
        facility.transition_to(target)
    assert facility.moderation_status == start


def test_verify_approves_pending_and_unverify_returns_to_pending():
    facility = Facility(name="A")
    facility.verify()
    assert facility.is_verified
    assert facility.moderation_status == ModerationStatus.APPROVED

    facility.unverify()
    assert not facility.is_verified
    assert facility.moderation_status == ModerationStatus.PENDING


def test_verify_refuses_rejected_listing():
    facility = Facility(name="A", moderation_status=ModerationStatus.REJECTED)
    with pytest.raises(BusinessRuleViolationError):
        facility.verify()


def test_claim_assignment_and_release():
    facility = Facility(name="A")
    facility.assign_claim("u1", "c1")
    assert (facility.owner_id, facility.active_claim_id, facility.claim_status) == ("u1", "c1", FacilityClaimStatus.CLAIMED)
    facility.release_claim()
    assert facility.owner_id is None
    assert facility.active_claim_id is None
    assert facility.claim_status == FacilityClaimStatus.UNCLAIMED


def test_claim_lifecycle():
    claim = _claim()
    claim.review(ClaimStatus.APPROVED, "admin-1", "looks right")
    assert claim.reviewed_by == "admin-1"
    assert claim.admin_notes == "looks right"

    claim.dispute("u2", "I run this place")
    assert claim.status == ClaimStatus.DISPUTED
    assert claim.disputed_by == "u2"

    claim.resolve(ClaimStatus.REJECTED, "admin-2")
    assert claim.status == ClaimStatus.REJECTED
    assert claim.dispute_resolution == ClaimStatus.REJECTED
    assert claim.dispute_resolved_by == "admin-2"


def test_rejected_claim_is_final():
    claim = _claim()
    claim.review(ClaimStatus.REJECTED, "admin-1")
    with pytest.raises(InvalidTransitionError):
        claim.dispute("u2", "reason")


def test_pending_claim_cannot_be_resolved():
    with pytest.raises(InvalidTransitionError):
        _claim().resolve(ClaimStatus.APPROVED, "admin-1")


def test_stripe_status_mapping():
    assert map_stripe_status("trialing") == SubscriptionStatus.ACTIVE
    assert map_stripe_status("unpaid") == SubscriptionStatus.PAST_DUE
    assert map_stripe_status("canceled") == SubscriptionStatus.CANCELLED
    assert map_stripe_status("incomplete") is None
    assert map_stripe_status(None) is None


def test_checkout_session_paid_states():
    assert CheckoutSession(id="cs", payment_status="paid").is_paid
    assert CheckoutSession(id="cs", payment_status="no_payment_required").is_paid
    assert not CheckoutSession(id="cs", payment_status="unpaid").is_paid
