# 📄 File: recovery_directory/modules/facility_claims/infrastructure/database/claim_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Does the actual saving and finding of ownership claims in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of ClaimRepository with domain/model mapping and
# RepositoryError wrapping. Shares the request session with FacilityRepositoryImpl,
# so claim and facility writes commit together.
#
# 🔗 Dependencies:
# - facility_claims.domain (FacilityClaim, ClaimRepository)
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - main.py dependency_overrides[ClaimRepository]

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recovery_directory.modules.facility_claims.domain.models.claim import ClaimStatus, FacilityClaim
from recovery_directory.modules.facility_claims.domain.repositories.claim_repository import ClaimRepository
from recovery_directory.modules.facility_claims.infrastructure.database.models import FacilityClaimModel
from recovery_directory.shared.core.exceptions import NotFoundError, RepositoryError
from recovery_directory.shared.infrastructure.database.session import get_db_session
from recovery_directory.shared.utils.helpers import ensure_aware

logger = logging.getLogger(__name__)

_FIELDS = (
    "facility_id", "user_id", "name", "position", "website", "email", "phone",
    "email_verified", "email_matches_domain", "admin_notes", "reviewed_by", "reviewed_at",
    "dispute_reason", "disputed_by", "disputed_at", "dispute_resolved_by",
    "dispute_resolved_at", "created_at", "updated_at",
)
_TIMESTAMPS = ("reviewed_at", "disputed_at", "dispute_resolved_at", "created_at", "updated_at")


class ClaimRepositoryImpl(ClaimRepository):
    """
    SQLAlchemy implementation of the ClaimRepository interface.
    """

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def create(self, claim: FacilityClaim) -> FacilityClaim:
        try:
            model = FacilityClaimModel(id=claim.id)
            self._apply(model, claim)
            self._session.add(model)
            await self._session.flush()
            logger.info(f"Created claim {claim.id} for facility {claim.facility_id}")
            return self._model_to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error during claim creation: {str(e)}")
            raise RepositoryError(f"Failed to create claim: {str(e)}", repository="facility_claims", operation="create") from e

    async def get_by_id(self, claim_id: str) -> Optional[FacilityClaim]:
        try:
            model = await self._session.get(FacilityClaimModel, claim_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving claim {claim_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve claim: {str(e)}", repository="facility_claims", operation="get") from e

    async def update(self, claim: FacilityClaim) -> FacilityClaim:
        try:
            model = await self._session.get(FacilityClaimModel, claim.id)
            if not model:
                raise NotFoundError("Claim not found", resource_type="claim", resource_id=claim.id)
            self._apply(model, claim)
            await self._session.flush()
            logger.info(f"Updated claim {claim.id}: {claim.status.value}")
            return self._model_to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error updating claim {claim.id}: {str(e)}")
            raise RepositoryError(f"Failed to update claim: {str(e)}", repository="facility_claims", operation="update") from e

    async def list_claims(self, status: Optional[ClaimStatus] = None) -> List[FacilityClaim]:
        stmt = select(FacilityClaimModel)
        if status is not None:
            stmt = stmt.where(FacilityClaimModel.status == status.value)
        return await self._fetch(stmt, "list")

    async def list_by_facility(self, facility_id: str) -> List[FacilityClaim]:
        stmt = select(FacilityClaimModel).where(FacilityClaimModel.facility_id == facility_id)
        return await self._fetch(stmt, "list_by_facility")

    async def find_pending(self, facility_id: str, user_id: str) -> Optional[FacilityClaim]:
        stmt = select(FacilityClaimModel).where(
            FacilityClaimModel.facility_id == facility_id,
            FacilityClaimModel.user_id == user_id,
            FacilityClaimModel.status == ClaimStatus.PENDING.value,
        )
        claims = await self._fetch(stmt, "find_pending")
        return claims[0] if claims else None

    async def _fetch(self, stmt, operation: str) -> List[FacilityClaim]:
        try:
            stmt = stmt.order_by(FacilityClaimModel.created_at.desc(), FacilityClaimModel.id.desc())
            result = await self._session.execute(stmt)
            return [self._model_to_domain(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error in facility_claims.{operation}: {str(e)}")
            raise RepositoryError(f"Failed to list claims: {str(e)}", repository="facility_claims", operation=operation) from e

    def _apply(self, model: FacilityClaimModel, claim: FacilityClaim) -> None:
        for field in _FIELDS:
            setattr(model, field, getattr(claim, field))
        model.status = claim.status.value
        model.dispute_resolution = claim.dispute_resolution.value if claim.dispute_resolution else None

    def _model_to_domain(self, model: FacilityClaimModel) -> FacilityClaim:
        data = {field: getattr(model, field) for field in _FIELDS}
        for field in _TIMESTAMPS:
            data[field] = ensure_aware(data[field])
        data["email_verified"] = bool(model.email_verified)
        data["email_matches_domain"] = bool(model.email_matches_domain)
        return FacilityClaim(
            id=model.id,
            status=ClaimStatus(model.status),
            dispute_resolution=ClaimStatus(model.dispute_resolution) if model.dispute_resolution else None,
            **data,
        )
