# 📄 File: recovery_directory/modules/facility_directory/presentation/api/v1/taxonomies.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for the tag lists: anyone can read them, admins can add, change,
# remove and upload logos for tags.
# 🧪 Purpose (Technical Summary):
# /taxonomies/{kind} router shared by all eight taxonomy kinds; the kind path
# parameter is validated against TaxonomyKind.
# 🔗 Dependencies:
# FastAPI, TaxonomyService, taxonomy schemas, shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# recovery_directory.api.v1.router

import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile, status

from recovery_directory.modules.facility_directory.domain.models.taxonomy import TaxonomyKind
from recovery_directory.modules.facility_directory.domain.services.taxonomy_service import TaxonomyService
from recovery_directory.modules.facility_directory.presentation.api.schemas.taxonomy_schemas import (
    LogoUploadResponse,
    TermCreateRequest,
    TermResponse,
    TermUpdateRequest,
)
from recovery_directory.shared.core.dependencies import CurrentUser, get_current_admin_user
from recovery_directory.shared.infrastructure.storage.file_manager import read_upload

logger = logging.getLogger(__name__)

taxonomies_router = APIRouter()


@taxonomies_router.get("/{kind}", response_model=List[TermResponse], summary="List terms of a kind")
async def list_terms(kind: TaxonomyKind, taxonomy_service: TaxonomyService = Depends()) -> List[TermResponse]:
    return [TermResponse.model_validate(t) for t in await taxonomy_service.list_terms(kind)]


@taxonomies_router.get("/{kind}/{term_id}", response_model=TermResponse, summary="Get a term")
async def get_term(kind: TaxonomyKind, term_id: str, taxonomy_service: TaxonomyService = Depends()) -> TermResponse:
    return TermResponse.model_validate(await taxonomy_service.get_term(kind, term_id))


@taxonomies_router.post(
    "/{kind}",
    response_model=TermResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a term (admin)",
)
async def create_term(
    kind: TaxonomyKind,
    body: TermCreateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    taxonomy_service: TaxonomyService = Depends(),
) -> TermResponse:
    term = await taxonomy_service.create_term(kind, body.name, body.description, body.logo)
    return TermResponse.model_validate(term)


@taxonomies_router.patch("/{kind}/{term_id}", response_model=TermResponse, summary="Update a term (admin)")
async def update_term(
    kind: TaxonomyKind,
    term_id: str,
    body: TermUpdateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    taxonomy_service: TaxonomyService = Depends(),
) -> TermResponse:
    term = await taxonomy_service.update_term(kind, term_id, body.model_dump(exclude_unset=True))
    return TermResponse.model_validate(term)


@taxonomies_router.delete("/{kind}/{term_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a term (admin)")
async def delete_term(
    kind: TaxonomyKind,
    term_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    taxonomy_service: TaxonomyService = Depends(),
) -> None:
    await taxonomy_service.delete_term(kind, term_id)


@taxonomies_router.post("/{kind}/logo", response_model=LogoUploadResponse, summary="Upload a term logo (admin)")
async def upload_term_logo(
    kind: TaxonomyKind,
    file: UploadFile = File(...),
    admin: CurrentUser = Depends(get_current_admin_user),
    taxonomy_service: TaxonomyService = Depends(),
) -> LogoUploadResponse:
    url = await taxonomy_service.upload_logo(kind, await read_upload(file))
    return LogoUploadResponse(url=url)
