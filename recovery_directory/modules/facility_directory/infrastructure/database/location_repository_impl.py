# 📄 File: recovery_directory/modules/facility_directory/infrastructure/database/location_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves and reads the homepage's featured cities in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of LocationRepository; the domain "order" field maps to
# the display_order column.
#
# 🔗 Dependencies:
# - facility_directory.domain (FeaturedLocation, LocationRepository)
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - main.py dependency_overrides[LocationRepository]

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recovery_directory.modules.facility_directory.domain.models.facility import Coordinates
from recovery_directory.modules.facility_directory.domain.models.location import FeaturedLocation
from recovery_directory.modules.facility_directory.domain.repositories.location_repository import LocationRepository
from recovery_directory.modules.facility_directory.infrastructure.database.models import FeaturedLocationModel
from recovery_directory.shared.core.exceptions import NotFoundError, RepositoryError
from recovery_directory.shared.infrastructure.database.session import get_db_session
from recovery_directory.shared.utils.helpers import ensure_aware

logger = logging.getLogger(__name__)


class LocationRepositoryImpl(LocationRepository):

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def list_all(self) -> List[FeaturedLocation]:
        try:
            stmt = select(FeaturedLocationModel).order_by(
                FeaturedLocationModel.display_order.asc(), FeaturedLocationModel.created_at.asc()
            )
            result = await self._session.execute(stmt)
            return [self._model_to_domain(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error listing featured locations: {str(e)}")
            raise RepositoryError(f"Failed to list locations: {str(e)}", repository="featured_locations", operation="list") from e

    async def get_by_id(self, location_id: str) -> Optional[FeaturedLocation]:
        try:
            model = await self._session.get(FeaturedLocationModel, location_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving location {location_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve location: {str(e)}", repository="featured_locations", operation="get") from e

    async def max_order(self) -> Optional[int]:
        try:
            result = await self._session.execute(select(func.max(FeaturedLocationModel.display_order)))
            return result.scalar()
        except SQLAlchemyError as e:
            logger.error(f"Database error reading max location order: {str(e)}")
            raise RepositoryError(f"Failed to read location order: {str(e)}", repository="featured_locations", operation="max_order") from e

    async def create(self, location: FeaturedLocation) -> FeaturedLocation:
        try:
            model = FeaturedLocationModel(id=location.id, created_at=location.created_at)
            self._apply(model, location)
            self._session.add(model)
            await self._session.flush()
            logger.info(f"Created featured location {location.city}, {location.state}")
            return self._model_to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error creating featured location: {str(e)}")
            raise RepositoryError(f"Failed to create location: {str(e)}", repository="featured_locations", operation="create") from e

    async def update(self, location: FeaturedLocation) -> FeaturedLocation:
        try:
            model = await self._session.get(FeaturedLocationModel, location.id)
            if not model:
                raise NotFoundError("Location not found", resource_type="location", resource_id=location.id)
            self._apply(model, location)
            await self._session.flush()
            return self._model_to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error updating location {location.id}: {str(e)}")
            raise RepositoryError(f"Failed to update location: {str(e)}", repository="featured_locations", operation="update") from e

    async def delete(self, location_id: str) -> bool:
        try:
            result = await self._session.execute(delete(FeaturedLocationModel).where(FeaturedLocationModel.id == location_id))
            await self._session.flush()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting location {location_id}: {str(e)}")
            raise RepositoryError(f"Failed to delete location: {str(e)}", repository="featured_locations", operation="delete") from e

    def _apply(self, model: FeaturedLocationModel, location: FeaturedLocation) -> None:
        model.city = location.city
        model.state = location.state
        model.image = location.image
        model.total_listings = location.total_listings
        model.coordinates = location.coordinates.model_dump() if location.coordinates else None
        model.is_featured = location.is_featured
        model.display_order = location.order
        model.updated_at = location.updated_at

    def _model_to_domain(self, model: FeaturedLocationModel) -> FeaturedLocation:
        return FeaturedLocation(
            id=model.id,
            city=model.city,
            state=model.state,
            image=model.image,
            total_listings=model.total_listings or 0,
            coordinates=Coordinates(**model.coordinates) if model.coordinates else None,
            is_featured=bool(model.is_featured),
            order=model.display_order or 0,
            created_at=ensure_aware(model.created_at),
            updated_at=ensure_aware(model.updated_at),
        )
