# 📄 File: recovery_directory/modules/facility_directory/domain/services/facility_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for listings themselves: creating one (it waits for admin review), showing
# approved ones page by page, letting only the owner or an admin edit or delete, and
# tidying up photos that are no longer used.
# 🧪 Purpose (Technical Summary):
# Domain service for the Facility aggregate: validated creation with defaults and slug,
# cursor-paginated public listing, owner/admin-guarded partial update with slug
# regeneration and best-effort storage cleanup, deletion, featured and owner lists,
# and photo/logo upload.
# 🔗 Dependencies:
# FacilityRepository, FileManager, shared validators/helpers/exceptions, CurrentUser
# 🔄 Connected Modules / Calls From:
# facilities router

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends

from recovery_directory.modules.facility_directory.domain.models.facility import (
    Facility,
    FacilityClaimStatus,
    ModerationStatus,
)
from recovery_directory.modules.facility_directory.domain.models.search import Page
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.core.dependencies import CurrentUser
from recovery_directory.shared.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from recovery_directory.shared.infrastructure.storage.file_manager import (
    FileManager,
    ProgressCallback,
    UploadedImage,
    get_file_manager,
)
from recovery_directory.shared.utils.helpers import decode_cursor, encode_cursor, parse_city_state, utc_now
from recovery_directory.shared.utils.validators import validate_facility_data

logger = logging.getLogger(__name__)

FACILITY_STORAGE_PREFIX = "facilities/"

# Set by the system, never by an owner's edit
PROTECTED_FIELDS = {
    "id", "owner_id", "moderation_status", "is_verified", "is_featured",
    "rating", "review_count", "slug", "subscription_id", "subscription_status",
    "claim_status", "active_claim_id", "created_at", "updated_at",
}

# Fields that may be cleared with an explicit null
NULLABLE_FIELDS = {"address", "coordinates", "website", "logo"}


class FacilityService:
    """
    Domain service for facility listings.
    """

    def __init__(
        self,
        facility_repository: FacilityRepository = Depends(),
        file_manager: FileManager = Depends(get_file_manager),
    ):
        self.facility_repository = facility_repository
        self.file_manager = file_manager

    # =========================================================================
    # CREATE
    # =========================================================================

    async def create_facility(self, owner_id: Optional[str], data: Dict[str, Any]) -> Facility:
        """
        Create a pending, unclaimed listing.

        Raises:
            ValidationError: listing every missing or malformed field
        """
        data = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        self._fill_city_state(data)

        result = validate_facility_data(data)
        if not result.is_valid:
            raise ValidationError("Invalid facility data", errors=result.errors)

        now = utc_now()
        facility = Facility(
            **data,
            owner_id=owner_id,
            rating=0,
            review_count=0,
            moderation_status=ModerationStatus.PENDING,
            is_verified=False,
            is_featured=False,
            claim_status=FacilityClaimStatus.UNCLAIMED,
            created_at=now,
            updated_at=now,
        )
        facility.regenerate_slug()

        created = await self.facility_repository.create(facility)
        logger.info(f"Facility {created.id} created by {owner_id}, awaiting moderation")
        return created

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def list_facilities(self, cursor: Optional[str] = None, limit: Optional[int] = None) -> Page[Facility]:
        """Approved listings, newest first, one page at a time."""
        settings = get_settings()
        limit = max(1, min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE))
        after = decode_cursor(cursor) if cursor else None

        rows = await self.facility_repository.list_by_status(ModerationStatus.APPROVED, after=after, limit=limit + 1)
        has_more = len(rows) > limit
        items = rows[:limit]
        next_cursor = encode_cursor(items[-1].created_at, items[-1].id) if has_more and items else None
        return Page[Facility](items=items, next_cursor=next_cursor, has_more=has_more)

    async def get_facility(self, facility_id: str) -> Facility:
        facility = await self.facility_repository.get_by_id(facility_id)
        if not facility:
            raise NotFoundError("Facility not found", resource_type="facility", resource_id=facility_id)
        return facility

    async def get_facility_by_slug(self, slug: str) -> Facility:
        facility = await self.facility_repository.get_by_slug(slug)
        if not facility:
            raise NotFoundError("Facility not found", resource_type="facility", resource_id=slug)
        return facility

    async def list_featured(self) -> List[Facility]:
        return await self.facility_repository.list_featured()

    async def list_user_listings(self, owner_id: str) -> List[Facility]:
        """Every listing the user owns, whatever its moderation status."""
        return await self.facility_repository.list_by_owner(owner_id)

    # =========================================================================
    # UPDATE / DELETE
    # =========================================================================

    async def update_facility(self, facility_id: str, changes: Dict[str, Any], actor: CurrentUser) -> Facility:
        """
        Merge the provided fields into the listing.

        Images dropped from the list and a replaced or cleared logo are removed
        from storage after the save. The slug follows name and location.
        """
        facility = await self.get_facility(facility_id)
        self._ensure_can_manage(facility, actor)

        changes = {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}
        for field, value in list(changes.items()):
            if value is None and field not in NULLABLE_FIELDS:
                del changes[field]
        if "location" in changes and not ("city" in changes or "state" in changes):
            self._fill_city_state(changes, overwrite=True)

        merged = facility.model_dump()
        merged.update(changes)
        result = validate_facility_data(merged)
        if not result.is_valid:
            raise ValidationError("Invalid facility data", errors=result.errors)

        old_images = set(facility.images)
        old_logo = facility.logo
        rename = ("name" in changes and changes["name"] != facility.name) or (
            "location" in changes and changes["location"] != facility.location
        )

        updated = Facility(**merged)
        if rename:
            updated.regenerate_slug()
        updated.touch()
        saved = await self.facility_repository.update(updated)

        stale = [url for url in old_images if url not in set(saved.images)]
        if old_logo and old_logo != saved.logo:
            stale.append(old_logo)
        await self.file_manager.cleanup_urls(stale, FACILITY_STORAGE_PREFIX)

        logger.info(f"Facility {facility_id} updated by {actor.user_id}")
        return saved

    async def delete_facility(self, facility_id: str, actor: CurrentUser) -> None:
        facility = await self.get_facility(facility_id)
        self._ensure_can_manage(facility, actor)

        await self.file_manager.cleanup_urls([facility.logo, *facility.images], FACILITY_STORAGE_PREFIX)
        await self.facility_repository.delete(facility_id)
        logger.info(f"Facility {facility_id} deleted by {actor.user_id}")

    # =========================================================================
    # MEDIA
    # =========================================================================

    async def upload_photos(
        self,
        facility_id: str,
        uploads: List[UploadedImage],
        actor: CurrentUser,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[str]:
        """Store photos for a listing; the caller attaches the URLs with an update."""
        facility = await self.get_facility(facility_id)
        self._ensure_can_manage(facility, actor)
        return await self.file_manager.upload_facility_photos(facility_id, uploads, on_progress)

    async def upload_logo(self, facility_id: str, upload: UploadedImage, actor: CurrentUser) -> str:
        facility = await self.get_facility(facility_id)
        self._ensure_can_manage(facility, actor)
        return await self.file_manager.upload_facility_logo(facility_id, upload)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _ensure_can_manage(facility: Facility, actor: CurrentUser) -> None:
        if not actor.can_manage(facility.owner_id):
            raise AuthorizationError(
                "Only the owner or an admin can change this facility",
                resource_type="facility",
                resource_id=facility.id,
                user_id=actor.user_id,
            )

    @staticmethod
    def _fill_city_state(data: Dict[str, Any], overwrite: bool = False) -> None:
        """Derive city/state from a "City, State" location when they are missing."""
        city, state = parse_city_state(data.get("location"))
        if overwrite or not data.get("city"):
            data["city"] = city or data.get("city", "")
        if overwrite or not data.get("state"):
            data["state"] = state or data.get("state", "")
