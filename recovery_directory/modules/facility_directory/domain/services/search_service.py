# 📄 File: recovery_directory/modules/facility_directory/domain/services/search_service.py
# 🧭 Purpose (Layman Explanation):
# Finds approved listings matching what a visitor typed, the places they picked and the
# filters they ticked, then puts the best matches first.
# 🧪 Purpose (Technical Summary):
# In-process filter and rank over approved facilities: case-insensitive text match
# across contact, highlight and taxonomy names; "City, State" location match;
# any-of/all-of taxonomy id filters; minimum rating. Ranked by name hit, rating,
# verification, then name.
# 🔗 Dependencies:
# FacilityRepository, SearchParams, shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# facilities router (GET /facilities/search)

import logging
from typing import Iterable, List, Tuple

from fastapi import Depends

from recovery_directory.modules.facility_directory.domain.models.facility import (
    TAXONOMY_FIELDS,
    Facility,
    ModerationStatus,
)
from recovery_directory.modules.facility_directory.domain.models.search import SEARCH_TAXONOMY_FILTERS, SearchParams
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.shared.utils.helpers import parse_city_state

logger = logging.getLogger(__name__)


def _searchable_text(facility: Facility) -> Iterable[str]:
    yield facility.name
    yield facility.description
    yield facility.location
    yield facility.city
    yield facility.state
    yield facility.email or ""
    yield facility.phone or ""
    yield from facility.highlights
    for field in TAXONOMY_FIELDS:
        for ref in getattr(facility, field):
            yield ref.name


def matches_query(facility: Facility, query: str) -> bool:
    if not query:
        return True
    return any(query in text.lower() for text in _searchable_text(facility) if text)


def matches_locations(facility: Facility, locations: List[str]) -> bool:
    """
    Any entry matching is enough. "City, State" must match both parts;
    a bare word matches either the city or the state.
    """
    if not locations:
        return True
    city = facility.city.strip().lower()
    state = facility.state.strip().lower()
    if not city and not state:
        parsed_city, parsed_state = parse_city_state(facility.location)
        city, state = parsed_city.lower(), parsed_state.lower()

    for entry in locations:
        if "," in entry:
            want_city, want_state = (part.lower() for part in parse_city_state(entry))
            if want_city == city and want_state == state:
                return True
        else:
            word = entry.strip().lower()
            if word and word in (city, state):
                return True
    return False


def matches_taxonomies(facility: Facility, params: SearchParams) -> bool:
    for field in SEARCH_TAXONOMY_FILTERS:
        wanted = set(getattr(params, field))
        if wanted and not (wanted & facility.taxonomy_ids(field)):
            return False
    return True


def rank_key(facility: Facility, query: str) -> Tuple[int, float, int, str]:
    name = facility.name.lower()
    name_hit = bool(query) and query in name
    return (0 if name_hit else 1, -facility.rating, 0 if facility.is_verified else 1, name)


class SearchService:
    """Public search over approved listings."""

    def __init__(self, facility_repository: FacilityRepository = Depends()):
        self.facility_repository = facility_repository

    async def search_facilities(self, params: SearchParams) -> List[Facility]:
        query = params.normalized_query
        candidates = await self.facility_repository.list_by_status(ModerationStatus.APPROVED)

        results = [
            f for f in candidates
            if matches_query(f, query)
            and matches_locations(f, params.locations)
            and matches_taxonomies(f, params)
            and (params.min_rating is None or f.rating >= params.min_rating)
        ]
        results.sort(key=lambda f: rank_key(f, query))
        logger.debug(f"Search '{query}' matched {len(results)} of {len(candidates)} listings")
        return results
