# 📄 File: recovery_directory/modules/facility_directory/domain/services/taxonomy_service.py
# 🧭 Purpose (Layman Explanation):
# Lets admins keep the tag lists (amenities, conditions, therapies and the rest) up to
# date, including each tag's little logo picture.
# 🧪 Purpose (Technical Summary):
# One generic CRUD service for all eight taxonomy kinds, with logo upload and
# best-effort removal of replaced logos stored under "{kind}/".
# 🔗 Dependencies:
# TaxonomyRepository, FileManager, shared exceptions/helpers
# 🔄 Connected Modules / Calls From:
# taxonomies router

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends

from recovery_directory.modules.facility_directory.domain.models.taxonomy import TaxonomyKind, TaxonomyTerm
from recovery_directory.modules.facility_directory.domain.repositories.taxonomy_repository import TaxonomyRepository
from recovery_directory.shared.core.exceptions import NotFoundError, ValidationError
from recovery_directory.shared.infrastructure.storage.file_manager import FileManager, UploadedImage, get_file_manager
from recovery_directory.shared.utils.helpers import utc_now

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "description", "logo")


class TaxonomyService:

    def __init__(
        self,
        taxonomy_repository: TaxonomyRepository = Depends(),
        file_manager: FileManager = Depends(get_file_manager),
    ):
        self.taxonomy_repository = taxonomy_repository
        self.file_manager = file_manager

    async def list_terms(self, kind: TaxonomyKind) -> List[TaxonomyTerm]:
        return await self.taxonomy_repository.list_by_kind(kind)

    async def get_term(self, kind: TaxonomyKind, term_id: str) -> TaxonomyTerm:
        term = await self.taxonomy_repository.get_by_id(term_id)
        if not term or term.kind != kind:
            raise NotFoundError(f"{kind.value} term not found", resource_type=kind.value, resource_id=term_id)
        return term

    async def create_term(
        self,
        kind: TaxonomyKind,
        name: str,
        description: Optional[str] = None,
        logo: Optional[str] = None,
    ) -> TaxonomyTerm:
        name = self._clean_name(name)
        now = utc_now()
        term = TaxonomyTerm(kind=kind, name=name, description=description, logo=logo, created_at=now, updated_at=now)
        created = await self.taxonomy_repository.create(term)
        logger.info(f"Created {kind.value} term '{name}'")
        return created

    async def update_term(self, kind: TaxonomyKind, term_id: str, changes: Dict[str, Any]) -> TaxonomyTerm:
        """Only keys present in changes are applied."""
        term = await self.get_term(kind, term_id)
        old_logo = term.logo

        for field in EDITABLE_FIELDS:
            if field in changes:
                value = changes[field]
                if field == "name":
                    value = self._clean_name(value)
                setattr(term, field, value)
        term.touch()
        saved = await self.taxonomy_repository.update(term)

        if old_logo and old_logo != saved.logo:
            await self.file_manager.cleanup_urls([old_logo], f"{kind.value}/")
        return saved

    async def delete_term(self, kind: TaxonomyKind, term_id: str) -> None:
        term = await self.get_term(kind, term_id)
        await self.taxonomy_repository.delete(term_id)
        if term.logo:
            await self.file_manager.cleanup_urls([term.logo], f"{kind.value}/")
        logger.info(f"Deleted {kind.value} term {term_id}")

    async def upload_logo(self, kind: TaxonomyKind, upload: UploadedImage) -> str:
        return await self.file_manager.upload_taxonomy_logo(kind.value, upload)

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        if name is None or not name.strip():
            raise ValidationError("Name is required", field="name")
        return name.strip()
