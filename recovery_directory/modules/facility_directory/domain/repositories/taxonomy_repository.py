# 📄 File: recovery_directory/modules/facility_directory/domain/repositories/taxonomy_repository.py
# 🧭 Purpose (Layman Explanation):
# What the app needs to do with the admin-maintained tag lists.
# 🧪 Purpose (Technical Summary):
# Repository interface for TaxonomyTerm rows, partitioned by TaxonomyKind.
# 🔗 Dependencies:
# Domain models (TaxonomyTerm, TaxonomyKind), abc
# 🔄 Connected Modules / Calls From:
# taxonomy_service, infrastructure implementation

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.taxonomy import TaxonomyKind, TaxonomyTerm


class TaxonomyRepository(ABC):

    @abstractmethod
    async def list_by_kind(self, kind: TaxonomyKind) -> List[TaxonomyTerm]:
        """Terms of one kind, name ascending."""
        pass

    @abstractmethod
    async def get_by_id(self, term_id: str) -> Optional[TaxonomyTerm]:
        pass

    @abstractmethod
    async def create(self, term: TaxonomyTerm) -> TaxonomyTerm:
        pass

    @abstractmethod
    async def update(self, term: TaxonomyTerm) -> TaxonomyTerm:
        pass

    @abstractmethod
    async def delete(self, term_id: str) -> bool:
        pass
