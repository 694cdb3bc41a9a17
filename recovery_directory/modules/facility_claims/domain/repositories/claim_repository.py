# 📄 File: recovery_directory/modules/facility_claims/domain/repositories/claim_repository.py
# 🧭 Purpose (Layman Explanation):
# What the app needs to do with stored ownership claims.
# 🧪 Purpose (Technical Summary):
# Repository interface for FacilityClaim; lists are newest first.
# 🔗 Dependencies:
# Domain models (FacilityClaim, ClaimStatus), abc
# 🔄 Connected Modules / Calls From:
# claim_service, infrastructure implementation

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.claim import ClaimStatus, FacilityClaim


class ClaimRepository(ABC):

    @abstractmethod
    async def create(self, claim: FacilityClaim) -> FacilityClaim:
        pass

    @abstractmethod
    async def get_by_id(self, claim_id: str) -> Optional[FacilityClaim]:
        pass

    @abstractmethod
    async def update(self, claim: FacilityClaim) -> FacilityClaim:
        pass

    @abstractmethod
    async def list_claims(self, status: Optional[ClaimStatus] = None) -> List[FacilityClaim]:
        pass

    @abstractmethod
    async def list_by_facility(self, facility_id: str) -> List[FacilityClaim]:
        pass

    @abstractmethod
    async def find_pending(self, facility_id: str, user_id: str) -> Optional[FacilityClaim]:
        """The user's pending claim on the facility, if any."""
        pass
