# 📄 File: recovery_directory/modules/facility_directory/domain/models/search.py
# 🧭 Purpose (Layman Explanation):
# The search form (words, places, filters, minimum rating) and a page of results.
# 🧪 Purpose (Technical Summary):
# SearchParams value object and the generic cursor Page returned by list operations.
# 🔗 Dependencies:
# pydantic, typing
# 🔄 Connected Modules / Calls From:
# search_service, facility_service, facility_repository, facilities router

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

SEARCH_TAXONOMY_FILTERS = (
    "treatment_types",
    "amenities",
    "insurances",
    "conditions",
    "substances",
    "therapies",
    "languages",
)


class Page(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    next_cursor: Optional[str] = None
    has_more: bool = False


class SearchParams(BaseModel):
    """
    Public search filters.

    Taxonomy filters hold term ids: any-of inside one filter, all-of across
    filters. Empty lists are ignored.
    """
    query: Optional[str] = None
    locations: List[str] = Field(default_factory=list)
    treatment_types: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    insurances: List[str] = Field(default_factory=list)
    conditions: List[str] = Field(default_factory=list)
    substances: List[str] = Field(default_factory=list)
    therapies: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    min_rating: Optional[float] = Field(default=None, ge=0, le=5)

    @property
    def normalized_query(self) -> str:
        return (self.query or "").strip().lower()
