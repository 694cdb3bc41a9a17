from recovery_directory.modules.facility_directory.domain.models.facility import (
    ModerationStatus,
    TaxonomyRef,
)
from recovery_directory.modules.facility_directory.domain.models.search import SearchParams

DETOX = TaxonomyRef(id="tt-detox", name="Detox")
RESIDENTIAL = TaxonomyRef(id="tt-res", name="Residential")
POOL = TaxonomyRef(id="am-pool", name="Swimming Pool")
AETNA = TaxonomyRef(id="ins-aetna", name="Aetna")


def _names(results):
    return [f.name for f in results]


async def test_only_approved_listings_are_searchable(search_service, make_facility):
    make_facility(name="Visible")
    make_facility(name="Hidden", moderation_status=ModerationStatus.PENDING)
    make_facility(name="Gone", moderation_status=ModerationStatus.ARCHIVED)

    assert _names(await search_service.search_facilities(SearchParams())) == ["Visible"]


async def test_text_query_matches_fields_and_term_names(search_service, make_facility):
    make_facility(name="Harbor House", description="ocean views")
    make_facility(name="Pine Lodge", amenities=[POOL])
    make_facility(name="Desert Springs", highlights=["Equine therapy"])

    assert _names(await search_service.search_facilities(SearchParams(query="OCEAN"))) == ["Harbor House"]
    assert _names(await search_service.search_facilities(SearchParams(query="pool"))) == ["Pine Lodge"]
    assert _names(await search_service.search_facilities(SearchParams(query="equine"))) == ["Desert Springs"]


async def test_name_matches_rank_first_then_rating(search_service, make_facility):
    make_facility(name="Calm Waters", description="recovery center", rating=4.9)
    make_facility(name="Recovery Ranch", rating=3.0)
    make_facility(name="Recovery Point", rating=4.5)

    results = await search_service.search_facilities(SearchParams(query="recovery"))
    assert _names(results) == ["Recovery Point", "Recovery Ranch", "Calm Waters"]


async def test_verified_breaks_rating_ties(search_service, make_facility):
    make_facility(name="B Center", rating=4.0)
    make_facility(name="A Center", rating=4.0, is_verified=True)
    make_facility(name="C Center", rating=4.0)

    assert _names(await search_service.search_facilities(SearchParams())) == ["A Center", "B Center", "C Center"]


async def test_location_filter(search_service, make_facility):
    make_facility(name="Austin One", location="Austin, TX", city="Austin", state="TX")
    make_facility(name="Portland Maine", location="Portland, ME", city="Portland", state="ME")
    make_facility(name="Portland Oregon", location="Portland, OR", city="Portland", state="OR")

    by_pair = await search_service.search_facilities(SearchParams(locations=["Portland, OR"]))
    assert _names(by_pair) == ["Portland Oregon"]

    by_state = await search_service.search_facilities(SearchParams(locations=["tx"]))
    assert _names(by_state) == ["Austin One"]

    either = await search_service.search_facilities(SearchParams(locations=["Austin, TX", "Portland, ME"]))
    assert sorted(_names(either)) == ["Austin One", "Portland Maine"]


async def test_taxonomy_filters_any_within_all_across(search_service, make_facility):
    make_facility(name="Both", treatment_types=[DETOX], insurances=[AETNA])
    make_facility(name="Detox Only", treatment_types=[DETOX])
    make_facility(name="Residential Aetna", treatment_types=[RESIDENTIAL], insurances=[AETNA])

    any_type = await search_service.search_facilities(
        SearchParams(treatment_types=[DETOX.id, RESIDENTIAL.id])
    )
    assert sorted(_names(any_type)) == ["Both", "Detox Only", "Residential Aetna"]

    combined = await search_service.search_facilities(
        SearchParams(treatment_types=[DETOX.id], insurances=[AETNA.id])
    )
    assert _names(combined) == ["Both"]


async def test_min_rating(search_service, make_facility):
    make_facility(name="Great", rating=4.8)
    make_facility(name="Okay", rating=3.2)
    assert _names(await search_service.search_facilities(SearchParams(min_rating=4))) == ["Great"]
