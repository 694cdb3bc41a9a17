# 📄 File: recovery_directory/modules/facility_directory/infrastructure/database/taxonomy_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves and reads the admin tag lists in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of TaxonomyRepository over the single taxonomy_terms table.
#
# 🔗 Dependencies:
# - facility_directory.domain (TaxonomyTerm, TaxonomyRepository)
# - SQLAlchemy async session
#
# 🔄 Connected Modules / Calls From:
# - main.py dependency_overrides[TaxonomyRepository]

import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recovery_directory.modules.facility_directory.domain.models.taxonomy import TaxonomyKind, TaxonomyTerm
from recovery_directory.modules.facility_directory.domain.repositories.taxonomy_repository import TaxonomyRepository
from recovery_directory.modules.facility_directory.infrastructure.database.models import TaxonomyTermModel
from recovery_directory.shared.core.exceptions import NotFoundError, RepositoryError
from recovery_directory.shared.infrastructure.database.session import get_db_session
from recovery_directory.shared.utils.helpers import ensure_aware

logger = logging.getLogger(__name__)


class TaxonomyRepositoryImpl(TaxonomyRepository):

    def __init__(self, session: AsyncSession = Depends(get_db_session)):
        self._session = session

    async def list_by_kind(self, kind: TaxonomyKind) -> List[TaxonomyTerm]:
        try:
            stmt = (
                select(TaxonomyTermModel)
                .where(TaxonomyTermModel.kind == kind.value)
                .order_by(TaxonomyTermModel.name.asc(), TaxonomyTermModel.id.asc())
            )
            result = await self._session.execute(stmt)
            return [self._model_to_domain(m) for m in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error listing {kind.value}: {str(e)}")
            raise RepositoryError(f"Failed to list {kind.value}: {str(e)}", repository="taxonomy_terms", operation="list") from e

    async def get_by_id(self, term_id: str) -> Optional[TaxonomyTerm]:
        try:
            model = await self._session.get(TaxonomyTermModel, term_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving taxonomy term {term_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve term: {str(e)}", repository="taxonomy_terms", operation="get") from e

    async def create(self, term: TaxonomyTerm) -> TaxonomyTerm:
        try:
            model = self._domain_to_model(term)
            self._session.add(model)
            await self._session.flush()
            logger.info(f"Created {term.kind.value} term {term.id}")
            return self._model_to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error creating taxonomy term: {str(e)}")
            raise RepositoryError(f"Failed to create term: {str(e)}", repository="taxonomy_terms", operation="create") from e

    async def update(self, term: TaxonomyTerm) -> TaxonomyTerm:
        try:
            model = await self._session.get(TaxonomyTermModel, term.id)
            if not model:
                raise NotFoundError("Taxonomy term not found", resource_type=term.kind.value, resource_id=term.id)
            model.name = term.name
            model.description = term.description
            model.logo = term.logo
            model.updated_at = term.updated_at
            await self._session.flush()
            return self._model_to_domain(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error updating taxonomy term {term.id}: {str(e)}")
            raise RepositoryError(f"Failed to update term: {str(e)}", repository="taxonomy_terms", operation="update") from e

    async def delete(self, term_id: str) -> bool:
        try:
            result = await self._session.execute(delete(TaxonomyTermModel).where(TaxonomyTermModel.id == term_id))
            await self._session.flush()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting taxonomy term {term_id}: {str(e)}")
            raise RepositoryError(f"Failed to delete term: {str(e)}", repository="taxonomy_terms", operation="delete") from e

    def _domain_to_model(self, term: TaxonomyTerm) -> TaxonomyTermModel:
        return TaxonomyTermModel(
            id=term.id,
            kind=term.kind.value,
            name=term.name,
            description=term.description,
            logo=term.logo,
            created_at=term.created_at,
            updated_at=term.updated_at,
        )

    def _model_to_domain(self, model: TaxonomyTermModel) -> TaxonomyTerm:
        return TaxonomyTerm(
            id=model.id,
            kind=TaxonomyKind(model.kind),
            name=model.name,
            description=model.description,
            logo=model.logo,
            created_at=ensure_aware(model.created_at),
            updated_at=ensure_aware(model.updated_at),
        )
