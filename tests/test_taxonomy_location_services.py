import pytest

from recovery_directory.modules.facility_directory.domain.models.facility import ModerationStatus
from recovery_directory.modules.facility_directory.domain.models.taxonomy import TaxonomyKind
from recovery_directory.shared.core.exceptions import NotFoundError, ValidationError

from tests.conftest import png_upload
from tests.fakes import STORAGE_BASE


# ── Taxonomies ────────────────────────────────────────────────────────────────


async def test_terms_are_listed_by_name_within_kind(taxonomy_service):
    await taxonomy_service.create_term(TaxonomyKind.AMENITIES, "  Yoga  ")
    await taxonomy_service.create_term(TaxonomyKind.AMENITIES, "Gym")
    await taxonomy_service.create_term(TaxonomyKind.LANGUAGES, "Spanish")

    terms = await taxonomy_service.list_terms(TaxonomyKind.AMENITIES)
    assert [t.name for t in terms] == ["Gym", "Yoga"]


async def test_term_name_is_required(taxonomy_service):
    with pytest.raises(ValidationError):
        await taxonomy_service.create_term(TaxonomyKind.THERAPIES, "   ")


async def test_term_lookup_checks_kind(taxonomy_service):
    term = await taxonomy_service.create_term(TaxonomyKind.CONDITIONS, "Anxiety")
    with pytest.raises(NotFoundError):
        await taxonomy_service.get_term(TaxonomyKind.SUBSTANCES, term.id)


async def test_update_term_replaces_logo_and_cleans_old_one(taxonomy_service, storage):
    old_logo = f"{STORAGE_BASE}insurances/old.png"
    term = await taxonomy_service.create_term(TaxonomyKind.INSURANCES, "Aetna", logo=old_logo)

    updated = await taxonomy_service.update_term(
        TaxonomyKind.INSURANCES, term.id, {"logo": f"{STORAGE_BASE}insurances/new.png", "description": "PPO"}
    )

    assert updated.name == "Aetna"
    assert updated.description == "PPO"
    assert storage.deleted == ["insurances/old.png"]


async def test_delete_term_removes_logo(taxonomy_service, taxonomy_repo, storage):
    term = await taxonomy_service.create_term(
        TaxonomyKind.LICENSES, "State License", logo=f"{STORAGE_BASE}licenses/a.png"
    )
    await taxonomy_service.delete_term(TaxonomyKind.LICENSES, term.id)
    assert term.id not in taxonomy_repo.terms
    assert storage.deleted == ["licenses/a.png"]


async def test_term_logo_upload_uses_kind_folder(taxonomy_service):
    url = await taxonomy_service.upload_logo(TaxonomyKind.TREATMENT_TYPES, png_upload())
    assert url.startswith(f"{STORAGE_BASE}treatment_types/")


# ── Featured locations ────────────────────────────────────────────────────────


async def test_new_locations_are_appended(location_service):
    first = await location_service.add_location({"city": "Austin", "state": "TX"})
    second = await location_service.add_location({"city": "Denver", "state": "CO", "total_listings": 12})

    assert first.order == 0
    assert second.order == 1
    assert second.total_listings == 12
    assert second.is_featured


async def test_location_requires_city_and_state(location_service):
    with pytest.raises(ValidationError):
        await location_service.add_location({"city": "Austin"})


async def test_reorder_locations(location_service):
    a = await location_service.add_location({"city": "Austin", "state": "TX"})
    b = await location_service.add_location({"city": "Boise", "state": "ID"})
    c = await location_service.add_location({"city": "Chicago", "state": "IL"})

    ordered = await location_service.reorder_locations([c.id, a.id, b.id])
    assert [loc.city for loc in ordered] == ["Chicago", "Austin", "Boise"]
    assert [loc.order for loc in ordered] == [0, 1, 2]


async def test_partial_reorder_keeps_positions_unique(location_service):
    a = await location_service.add_location({"city": "Austin", "state": "TX"})
    b = await location_service.add_location({"city": "Boise", "state": "ID"})
    c = await location_service.add_location({"city": "Chicago", "state": "IL"})

    ordered = await location_service.reorder_locations([c.id])

    assert [loc.id for loc in ordered] == [c.id, a.id, b.id]
    assert [loc.order for loc in ordered] == [0, 1, 2]


async def test_reorder_with_unknown_id_changes_nothing(location_service, location_repo):
    a = await location_service.add_location({"city": "Austin", "state": "TX"})
    b = await location_service.add_location({"city": "Boise", "state": "ID"})

    with pytest.raises(NotFoundError):
        await location_service.reorder_locations([b.id, "missing", a.id])
    assert location_repo.locations[a.id].order == 0
    assert location_repo.locations[b.id].order == 1


async def test_update_location_clears_image(location_service, storage):
    location = await location_service.add_location(
        {"city": "Austin", "state": "TX", "image": f"{STORAGE_BASE}locations/austin.png"}
    )
    updated = await location_service.update_location(location.id, {"image": None, "total_listings": 40})

    assert updated.image is None
    assert updated.total_listings == 40
    assert storage.deleted == ["locations/austin.png"]


async def test_delete_location(location_service, location_repo):
    location = await location_service.add_location({"city": "Austin", "state": "TX"})
    await location_service.delete_location(location.id)
    assert location_repo.locations == {}


async def test_city_counts_use_approved_listings(location_service, make_facility):
    make_facility(city="Austin", state="TX")
    make_facility(city="Austin", state="TX")
    make_facility(city="Denver", state="CO", location="Denver, CO")
    make_facility(city="Denver", state="CO", moderation_status=ModerationStatus.PENDING)
    make_facility(city="", state="", location="Reno, NV")

    cities = await location_service.list_cities()
    assert [(c.label, c.count) for c in cities] == [("Austin, TX", 2), ("Denver, CO", 1), ("Reno, NV", 1)]
