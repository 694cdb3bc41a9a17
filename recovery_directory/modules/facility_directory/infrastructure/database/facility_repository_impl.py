# 📄 File: recovery_directory/modules/facility_directory/infrastructure/database/facility_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Does the actual saving, finding and paging of listings in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of FacilityRepository: domain/model mapping including
# JSON taxonomy references, keyset pagination on (created_at desc, id desc), and
# RepositoryError wrapping.
#
# 🔗 Dependencies:
# - facility_directory.domain (Facility, FacilityRepository)
# - infrastructure.database.models (FacilityModel)
# - SQLAlchemy async session (request scoped via get_db_session)
#
# 🔄 Connected Modules / Calls From:
# - main.py dependency_overrides[FacilityRepository]

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import and_, delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recovery_directory.modules.facility_directory.domain.models.facility import (
    TAXONOMY_FIELDS,
    Coordinates,
    Facility,
    FacilityClaimStatus,
    ModerationStatus,
    SubscriptionStatus,
    TaxonomyRef,
)
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.modules.facility_directory.infrastructure.database.models import FacilityModel
from recovery_directory.shared.core.exceptions import NotFoundError, RepositoryError
from recovery_directory.shared.infrastructure.database.session import get_db_session
from recovery_directory.shared.utils.helpers import ensure_aware

logger = logging.getLogger(__name__)

# Columns copied one-to-one between the domain model and the ORM row
_PLAIN_FIELDS = (
    "name", "description", "location", "city", "state", "address",
    "phone", "email", "website", "logo", "rating", "review_count",
    "is_verified", "is_featured", "owner_id", "slug",
    "subscription_id", "active_claim_id", "created_at", "updated_at",
)


class FacilityRepositoryImpl(FacilityRepository):
    """
    SQLAlchemy implementation of the FacilityRepository interface.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, facility: Facility) -> Facility:
        try:
            model = FacilityModel(id=facility.id)
            self._apply(model, facility)
            self._session.add(model)
            await self._session.flush()
            logger.info(f"Created facility with ID: {facility.id}")
            return self._model_to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error during facility creation: {str(e)}")
            raise RepositoryError(f"Failed to create facility: {str(e)}", repository="facilities", operation="create") from e

    async def get_by_id(self, facility_id: str) -> Optional[Facility]:
        try:
            model = await self._session.get(FacilityModel, facility_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving facility {facility_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve facility: {str(e)}", repository="facilities", operation="get") from e

    async def get_by_slug(self, slug: str) -> Optional[Facility]:
        try:
            stmt = (
                select(FacilityModel)
                .where(FacilityModel.slug == slug)
                .order_by(FacilityModel.created_at.desc(), FacilityModel.id.desc())
                .limit(1)
            )
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving facility by slug {slug}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve facility: {str(e)}", repository="facilities", operation="get_by_slug") from e

    async def get_by_subscription_id(self, subscription_id: str) -> Optional[Facility]:
        stmt = select(FacilityModel).where(FacilityModel.subscription_id == subscription_id)
        facilities = await self._fetch(stmt, "get_by_subscription_id")
        return facilities[0] if facilities else None

    async def update(self, facility: Facility) -> Facility:
        try:
            model = await self._session.get(FacilityModel, facility.id)
            if not model:
                raise NotFoundError("Facility not found", resource_type="facility", resource_id=facility.id)
            self._apply(model, facility)
            await self._session.flush()
            logger.info(f"Updated facility: {facility.id}")
            return self._model_to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error updating facility {facility.id}: {str(e)}")
            raise RepositoryError(f"Failed to update facility: {str(e)}", repository="facilities", operation="update") from e

    async def delete(self, facility_id: str) -> bool:
        try:
            result = await self._session.execute(delete(FacilityModel).where(FacilityModel.id == facility_id))
            await self._session.flush()
            deleted = result.rowcount > 0
            if deleted:
                logger.info(f"Deleted facility: {facility_id}")
            return deleted
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting facility {facility_id}: {str(e)}")
            raise RepositoryError(f"Failed to delete facility: {str(e)}", repository="facilities", operation="delete") from e

    async def list_by_status(
        self,
        status: Optional[ModerationStatus] = None,
        after: Optional[Tuple[datetime, str]] = None,
        limit: Optional[int] = None,
    ) -> List[Facility]:
        stmt = select(FacilityModel)
        if status is not None:
            stmt = stmt.where(FacilityModel.moderation_status == status.value)
        if after is not None:
            created_at, item_id = after
            stmt = stmt.where(
                or_(
                    FacilityModel.created_at < created_at,
                    and_(FacilityModel.created_at == created_at, FacilityModel.id < item_id),
                )
            )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._fetch(stmt, "list_by_status")

    async def list_featured(self) -> List[Facility]:
        stmt = select(FacilityModel).where(
            FacilityModel.moderation_status == ModerationStatus.APPROVED.value,
            FacilityModel.is_featured.is_(True),
        )
        return await self._fetch(stmt, "list_featured")

    async def list_by_owner(self, owner_id: str) -> List[Facility]:
        stmt = select(FacilityModel).where(FacilityModel.owner_id == owner_id)
        return await self._fetch(stmt, "list_by_owner")

    async def _fetch(self, stmt, operation: str) -> List[Facility]:
        try:
            stmt = stmt.order_by(FacilityModel.created_at.desc(), FacilityModel.id.desc())
            result = await self._session.execute(stmt)
            return [self._model_to_domain(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error in facilities.{operation}: {str(e)}")
            raise RepositoryError(f"Failed to list facilities: {str(e)}", repository="facilities", operation=operation) from e

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def _apply(self, model: FacilityModel, facility: Facility) -> None:
        for field in _PLAIN_FIELDS:
            setattr(model, field, getattr(facility, field))
        model.coordinates = facility.coordinates.model_dump() if facility.coordinates else None
        model.images = list(facility.images)
        model.highlights = list(facility.highlights)
        model.accreditation = list(facility.accreditation)
        for field in TAXONOMY_FIELDS:
            setattr(model, field, [ref.model_dump() for ref in getattr(facility, field)])
        model.moderation_status = facility.moderation_status.value
        model.subscription_status = facility.subscription_status.value
        model.claim_status = facility.claim_status.value

    def _model_to_domain(self, model: FacilityModel) -> Facility:
        data = {field: getattr(model, field) for field in _PLAIN_FIELDS}
        data["created_at"] = ensure_aware(model.created_at)
        data["updated_at"] = ensure_aware(model.updated_at)
        data["description"] = model.description or ""
        data["location"] = model.location or ""
        data["city"] = model.city or ""
        data["state"] = model.state or ""
        data["slug"] = model.slug or ""
        data["rating"] = model.rating or 0
        data["review_count"] = model.review_count or 0
        data["is_verified"] = bool(model.is_verified)
        data["is_featured"] = bool(model.is_featured)

        for field in TAXONOMY_FIELDS:
            data[field] = [TaxonomyRef(**ref) for ref in (getattr(model, field) or [])]

        return Facility(
            id=model.id,
            coordinates=Coordinates(**model.coordinates) if model.coordinates else None,
            images=list(model.images or []),
            highlights=list(model.highlights or []),
            accreditation=list(model.accreditation or []),
            moderation_status=ModerationStatus(model.moderation_status),
            subscription_status=SubscriptionStatus(model.subscription_status or "none"),
            claim_status=FacilityClaimStatus(model.claim_status or "unclaimed"),
            **data,
        )
