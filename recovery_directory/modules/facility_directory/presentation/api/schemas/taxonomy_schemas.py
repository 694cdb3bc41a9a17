# 📄 File: recovery_directory/modules/facility_directory/presentation/api/schemas/taxonomy_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the admin forms for tag lists and of the tags the site shows.
#
# 🧪 Purpose (Technical Summary):
# Pydantic schemas for /taxonomies/{kind} endpoints, shared by all eight kinds.
#
# 🔗 Dependencies:
# - pydantic, facility_directory.domain.models.taxonomy
#
# 🔄 Connected Modules / Calls From:
# - presentation/api/v1/taxonomies.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.modules.facility_directory.domain.models.taxonomy import TaxonomyKind


class TermCreateRequest(BaseModel):
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    logo: Optional[str] = None


class TermUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    logo: Optional[str] = None


class TermResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    kind: TaxonomyKind
    name: str
    description: Optional[str] = None
    logo: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class LogoUploadResponse(BaseModel):
    url: str
