"""SQLAlchemy repositories against a throwaway SQLite database."""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from recovery_directory.modules.facility_claims.domain.models.claim import ClaimStatus, FacilityClaim
from recovery_directory.modules.facility_claims.infrastructure.database import models as claim_models  # noqa: F401
from recovery_directory.modules.facility_claims.infrastructure.database.claim_repository_impl import ClaimRepositoryImpl
from recovery_directory.modules.facility_directory.domain.models.facility import (
    Coordinates,
    Facility,
    ModerationStatus,
    TaxonomyRef,
)
from recovery_directory.modules.facility_directory.domain.models.location import FeaturedLocation
from recovery_directory.modules.facility_directory.domain.models.taxonomy import TaxonomyKind, TaxonomyTerm
from recovery_directory.modules.facility_directory.infrastructure.database.facility_repository_impl import (
    FacilityRepositoryImpl,
)
from recovery_directory.modules.facility_directory.infrastructure.database.location_repository_impl import (
    LocationRepositoryImpl,
)
from recovery_directory.modules.facility_directory.infrastructure.database.taxonomy_repository_impl import (
    TaxonomyRepositoryImpl,
)
from recovery_directory.modules.user_management.domain.models.user import User, UserRole
from recovery_directory.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from recovery_directory.shared.core.exceptions import NotFoundError
from recovery_directory.shared.infrastructure.database.connection import Base
from recovery_directory.shared.utils.helpers import utc_now


@pytest.fixture
async def session(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSession(engine, expire_on_commit=False) as db_session:
        yield db_session
    await engine.dispose()


def _facility(name: str, minutes_ago: int, **overrides) -> Facility:
    fields = dict(
        name=name,
        location="Austin, TX",
        city="Austin",
        state="TX",
        moderation_status=ModerationStatus.APPROVED,
        created_at=utc_now() - timedelta(minutes=minutes_ago),
    )
    fields.update(overrides)
    return Facility(**fields)


async def test_facility_round_trip_keeps_nested_fields(session):
    repo = FacilityRepositoryImpl(session)
    facility = _facility(
        "Harbor House", 5,
        coordinates=Coordinates(lat=30.2, lng=-97.7),
        amenities=[TaxonomyRef(id="am-1", name="Pool")],
        images=["https://cdn.test/a.png"],
    )
    facility.regenerate_slug()
    await repo.create(facility)

    loaded = await repo.get_by_id(facility.id)
    assert loaded.coordinates == Coordinates(lat=30.2, lng=-97.7)
    assert loaded.amenities == [TaxonomyRef(id="am-1", name="Pool")]
    assert loaded.images == ["https://cdn.test/a.png"]
    assert loaded.created_at.tzinfo is not None

    by_slug = await repo.get_by_slug("harbor-house-austin-tx")
    assert by_slug.id == facility.id


async def test_facility_keyset_listing(session):
    repo = FacilityRepositoryImpl(session)
    for i in range(4):
        await repo.create(_facility(f"F{i}", minutes_ago=10 - i))
    await repo.create(_facility("Pending", minutes_ago=1, moderation_status=ModerationStatus.PENDING))

    first = await repo.list_by_status(ModerationStatus.APPROVED, limit=2)
    assert [f.name for f in first] == ["F3", "F2"]

    rest = await repo.list_by_status(ModerationStatus.APPROVED, after=(first[-1].created_at, first[-1].id))
    assert [f.name for f in rest] == ["F1", "F0"]

    assert len(await repo.list_by_status()) == 5


async def test_facility_update_delete_and_lookups(session):
    repo = FacilityRepositoryImpl(session)
    facility = await repo.create(_facility("Pine Lodge", 3, owner_id="owner-1"))

    facility.is_featured = True
    facility.subscription_id = "sub_1"
    await repo.update(facility)

    assert [f.id for f in await repo.list_featured()] == [facility.id]
    assert [f.id for f in await repo.list_by_owner("owner-1")] == [facility.id]
    assert (await repo.get_by_subscription_id("sub_1")).id == facility.id

    assert await repo.delete(facility.id)
    session.expunge_all()
    assert await repo.get_by_id(facility.id) is None
    with pytest.raises(NotFoundError):
        await repo.update(facility)


async def test_user_repository_counters(session):
    repo = UserRepositoryImpl(session)
    now = utc_now()
    await repo.create(User(id="a", email="a@example.com", created_at=now - timedelta(days=40)))
    await repo.create(User(id="b", email="b@example.com", role=UserRole.ADMIN, last_login=now - timedelta(days=2)))

    assert await repo.count_all() == 2
    assert await repo.count_created_since(now - timedelta(days=10)) == 1
    assert await repo.count_logged_in_since(now - timedelta(days=7)) == 1
    assert (await repo.get_by_id("b")).role == UserRole.ADMIN
    assert await repo.latest_login() is not None


async def test_taxonomy_repository(session):
    repo = TaxonomyRepositoryImpl(session)
    await repo.create(TaxonomyTerm(kind=TaxonomyKind.LANGUAGES, name="Spanish"))
    await repo.create(TaxonomyTerm(kind=TaxonomyKind.LANGUAGES, name="English"))
    term = await repo.create(TaxonomyTerm(kind=TaxonomyKind.AMENITIES, name="Gym"))

    assert [t.name for t in await repo.list_by_kind(TaxonomyKind.LANGUAGES)] == ["English", "Spanish"]
    term.name = "Fitness Center"
    await repo.update(term)
    assert (await repo.get_by_id(term.id)).name == "Fitness Center"
    assert await repo.delete(term.id)


async def test_location_repository_order(session):
    repo = LocationRepositoryImpl(session)
    assert await repo.max_order() is None

    await repo.create(FeaturedLocation(city="Denver", state="CO", order=1))
    await repo.create(FeaturedLocation(city="Austin", state="TX", order=0, coordinates=Coordinates(lat=30, lng=-97)))

    locations = await repo.list_all()
    assert [loc.city for loc in locations] == ["Austin", "Denver"]
    assert locations[0].coordinates.lat == 30
    assert await repo.max_order() == 1


async def test_claim_repository(session):
    facilities = FacilityRepositoryImpl(session)
    facility = await facilities.create(_facility("Claimed", 1))
    repo = ClaimRepositoryImpl(session)
    claim = await repo.create(FacilityClaim(
        facility_id=facility.id, user_id="u1", name="Jo", position="Owner",
        website="https://a.com", email="jo@a.com", phone="555",
    ))

    assert (await repo.find_pending(facility.id, "u1")).id == claim.id
    assert await repo.find_pending(facility.id, "u2") is None

    claim.review(ClaimStatus.APPROVED, "admin-1")
    await repo.update(claim)

    assert await repo.find_pending(facility.id, "u1") is None
    assert [c.id for c in await repo.list_claims(ClaimStatus.APPROVED)] == [claim.id]
    assert [c.id for c in await repo.list_by_facility(facility.id)] == [claim.id]
    stored = await repo.get_by_id(claim.id)
    assert stored.reviewed_by == "admin-1"
    assert stored.reviewed_at is not None
