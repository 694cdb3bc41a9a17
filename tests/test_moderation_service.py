import pytest

from recovery_directory.modules.facility_directory.domain.models.facility import ModerationStatus
from recovery_directory.shared.core.exceptions import (
    BusinessRuleViolationError,
    InvalidTransitionError,
    NotFoundError,
)


async def test_approve_then_archive_then_restore(moderation_service, make_facility):
    facility = make_facility(moderation_status=ModerationStatus.PENDING)

    approved = await moderation_service.approve(facility.id)
    assert approved.moderation_status == ModerationStatus.APPROVED

    archived = await moderation_service.archive(facility.id)
    assert archived.moderation_status == ModerationStatus.ARCHIVED
    assert [f.id for f in await moderation_service.list_archived()] == [facility.id]

    restored = await moderation_service.restore(facility.id)
    assert restored.moderation_status == ModerationStatus.PENDING


async def test_reject_then_revert(moderation_service, make_facility):
    facility = make_facility(moderation_status=ModerationStatus.PENDING)
    await moderation_service.reject(facility.id)
    reverted = await moderation_service.revert(facility.id)
    assert reverted.moderation_status == ModerationStatus.PENDING


async def test_illegal_transitions_leave_listing_untouched(moderation_service, facility_repo, make_facility):
    facility = make_facility(moderation_status=ModerationStatus.PENDING)

    with pytest.raises(InvalidTransitionError):
        await moderation_service.archive(facility.id)
    with pytest.raises(InvalidTransitionError):
        await moderation_service.restore(facility.id)
    with pytest.raises(InvalidTransitionError):
        await moderation_service.revert(facility.id)

    assert facility_repo.facilities[facility.id].moderation_status == ModerationStatus.PENDING


async def test_verify_pending_listing_approves_it(moderation_service, make_facility):
    facility = make_facility(moderation_status=ModerationStatus.PENDING)
    verified = await moderation_service.verify(facility.id)
    assert verified.is_verified
    assert verified.moderation_status == ModerationStatus.APPROVED

    unverified = await moderation_service.unverify(facility.id)
    assert not unverified.is_verified
    assert unverified.moderation_status == ModerationStatus.PENDING


async def test_verify_archived_listing_is_refused(moderation_service, make_facility):
    facility = make_facility(moderation_status=ModerationStatus.ARCHIVED)
    with pytest.raises(BusinessRuleViolationError):
        await moderation_service.verify(facility.id)


async def test_feature_and_unfeature(moderation_service, make_facility):
    facility = make_facility()
    assert (await moderation_service.feature(facility.id)).is_featured
    assert not (await moderation_service.unfeature(facility.id)).is_featured


async def test_admin_listing_filters_by_status(moderation_service, make_facility):
    make_facility(moderation_status=ModerationStatus.PENDING)
    make_facility(moderation_status=ModerationStatus.REJECTED)
    make_facility()

    assert len(await moderation_service.list_all_for_admin()) == 3
    pending = await moderation_service.list_all_for_admin(ModerationStatus.PENDING)
    assert [f.moderation_status for f in pending] == [ModerationStatus.PENDING]


async def test_unknown_facility(moderation_service):
    with pytest.raises(NotFoundError):
        await moderation_service.approve("missing")
