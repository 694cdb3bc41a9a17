# 📄 File: recovery_directory/modules/facility_directory/domain/models/taxonomy.py
# 🧭 Purpose (Layman Explanation):
# The tag lists admins maintain (amenities, conditions treated, substances, therapies,
# languages, insurance accepted, licenses, treatment types) that listings pick from.
# 🧪 Purpose (Technical Summary):
# TaxonomyKind discriminator and the TaxonomyTerm model shared by all eight lists.
# 🔗 Dependencies:
# pydantic, enum, shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# taxonomy_service, taxonomy_repository_impl, taxonomies router

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.shared.utils.helpers import generate_id, utc_now


class TaxonomyKind(str, Enum):
    AMENITIES = "amenities"
    CONDITIONS = "conditions"
    SUBSTANCES = "substances"
    THERAPIES = "therapies"
    LANGUAGES = "languages"
    INSURANCES = "insurances"
    LICENSES = "licenses"
    TREATMENT_TYPES = "treatment_types"


class TaxonomyTerm(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=generate_id)
    kind: TaxonomyKind
    name: str
    description: Optional[str] = None
    logo: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def touch(self) -> None:
        self.updated_at = utc_now()
