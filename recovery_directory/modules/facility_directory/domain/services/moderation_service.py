# 📄 File: recovery_directory/modules/facility_directory/domain/services/moderation_service.py
# 🧭 Purpose (Layman Explanation):
# The admin review desk: approve or reject new listings, archive old ones, bring them
# back, mark trusted ones as verified, and pick which ones are featured.
# 🧪 Purpose (Technical Summary):
# Admin moderation over the Facility moderation state machine. Every mutation goes
# through Facility.transition_to / verify / unverify so illegal moves raise
# InvalidTransitionError or BusinessRuleViolationError.
# 🔗 Dependencies:
# FacilityRepository, Facility domain model, shared exceptions
# 🔄 Connected Modules / Calls From:
# admin_facilities router (get_current_admin_user guarded)

import logging
from typing import List, Optional

from fastapi import Depends

from recovery_directory.modules.facility_directory.domain.models.facility import Facility, ModerationStatus
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.shared.core.exceptions import InvalidTransitionError, NotFoundError

logger = logging.getLogger(__name__)


class ModerationService:
    """Admin moderation actions on listings."""

    def __init__(self, facility_repository: FacilityRepository = Depends()):
        self.facility_repository = facility_repository

    async def list_all_for_admin(self, status: Optional[ModerationStatus] = None) -> List[Facility]:
        return await self.facility_repository.list_by_status(status)

    async def list_archived(self) -> List[Facility]:
        return await self.facility_repository.list_by_status(ModerationStatus.ARCHIVED)

    async def approve(self, facility_id: str) -> Facility:
        return await self._transition(facility_id, ModerationStatus.APPROVED)

    async def reject(self, facility_id: str) -> Facility:
        return await self._transition(facility_id, ModerationStatus.REJECTED)

    async def archive(self, facility_id: str) -> Facility:
        return await self._transition(facility_id, ModerationStatus.ARCHIVED)

    async def restore(self, facility_id: str) -> Facility:
        """archived -> pending"""
        facility = await self._get(facility_id)
        if facility.moderation_status != ModerationStatus.ARCHIVED:
            raise InvalidTransitionError("facility", facility.moderation_status.value, ModerationStatus.PENDING.value)
        return await self._apply_transition(facility, ModerationStatus.PENDING)

    async def revert(self, facility_id: str) -> Facility:
        """approved or rejected -> pending"""
        facility = await self._get(facility_id)
        if facility.moderation_status not in (ModerationStatus.APPROVED, ModerationStatus.REJECTED):
            raise InvalidTransitionError("facility", facility.moderation_status.value, ModerationStatus.PENDING.value)
        return await self._apply_transition(facility, ModerationStatus.PENDING)

    async def verify(self, facility_id: str) -> Facility:
        facility = await self._get(facility_id)
        facility.verify()
        saved = await self.facility_repository.update(facility)
        logger.info(f"Facility {facility_id} verified")
        return saved

    async def unverify(self, facility_id: str) -> Facility:
        facility = await self._get(facility_id)
        facility.unverify()
        saved = await self.facility_repository.update(facility)
        logger.info(f"Facility {facility_id} unverified, now {saved.moderation_status.value}")
        return saved

    async def feature(self, facility_id: str) -> Facility:
        return await self._set_featured(facility_id, True)

    async def unfeature(self, facility_id: str) -> Facility:
        return await self._set_featured(facility_id, False)

    async def _set_featured(self, facility_id: str, featured: bool) -> Facility:
        facility = await self._get(facility_id)
        facility.set_featured(featured)
        saved = await self.facility_repository.update(facility)
        logger.info(f"Facility {facility_id} {'featured' if featured else 'unfeatured'}")
        return saved

    async def _transition(self, facility_id: str, target: ModerationStatus) -> Facility:
        facility = await self._get(facility_id)
        return await self._apply_transition(facility, target)

    async def _apply_transition(self, facility: Facility, target: ModerationStatus) -> Facility:
        previous = facility.moderation_status
        facility.transition_to(target)
        saved = await self.facility_repository.update(facility)
        logger.info(f"Facility {facility.id} moderation {previous.value} -> {target.value}")
        return saved

    async def _get(self, facility_id: str) -> Facility:
        facility = await self.facility_repository.get_by_id(facility_id)
        if not facility:
            raise NotFoundError("Facility not found", resource_type="facility", resource_id=facility_id)
        return facility
