"""Shared pytest fixtures for the test suite.

Environment variables are set before any application import so that
Settings() validates without a .env file.

Fixture overview
----------------
facility_repo, user_repo, ...   in-memory repositories from tests/fakes.py
storage / file_manager          in-memory blob storage behind the real FileManager
make_facility                   factory for stored Facility objects
client                          TestClient over create_application() with every
                                port bound to its in-memory fake
auth_headers                    builds a signed bearer token for a stored user
"""

import io
import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_123")
os.environ.setdefault("STRIPE_PRICE_ID", "price_test_123")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test")
os.environ.setdefault("FRONTEND_URL", "https://directory.test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from PIL import Image

from recovery_directory.modules.facility_claims.domain.repositories.claim_repository import ClaimRepository
from recovery_directory.modules.facility_claims.domain.services.claim_service import ClaimService
from recovery_directory.modules.facility_directory.domain.models.facility import Facility, ModerationStatus
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.modules.facility_directory.domain.repositories.location_repository import LocationRepository
from recovery_directory.modules.facility_directory.domain.repositories.taxonomy_repository import TaxonomyRepository
from recovery_directory.modules.facility_directory.domain.services.facility_service import FacilityService
from recovery_directory.modules.facility_directory.domain.services.location_service import LocationService
from recovery_directory.modules.facility_directory.domain.services.moderation_service import ModerationService
from recovery_directory.modules.facility_directory.domain.services.search_service import SearchService
from recovery_directory.modules.facility_directory.domain.services.taxonomy_service import TaxonomyService
from recovery_directory.modules.subscriptions.domain.services.subscription_service import SubscriptionService
from recovery_directory.modules.subscriptions.infrastructure.external.stripe_gateway import StripeGateway
from recovery_directory.modules.user_management.domain.models.user import User, UserRole
from recovery_directory.modules.user_management.domain.repositories.user_repository import UserRepository
from recovery_directory.modules.user_management.domain.services.auth_service import AuthService
from recovery_directory.modules.user_management.domain.services.user_service import UserService
from recovery_directory.modules.user_management.infrastructure.external.supabase_auth import AuthProvider
from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.core.dependencies import CurrentUser
from recovery_directory.shared.core.rate_limiter import limiter
from recovery_directory.shared.infrastructure.storage.file_manager import FileManager, UploadedImage, get_file_storage
from recovery_directory.shared.utils.helpers import utc_now

from tests.fakes import (
    FakeAuthProvider,
    FakeStripeGateway,
    InMemoryClaimRepository,
    InMemoryFacilityRepository,
    InMemoryFileStorage,
    InMemoryLocationRepository,
    InMemoryTaxonomyRepository,
    InMemoryUserRepository,
)

limiter.enabled = False


# ── Ports ─────────────────────────────────────────────────────────────────────


@pytest.fixture
def facility_repo() -> InMemoryFacilityRepository:
    return InMemoryFacilityRepository()


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def taxonomy_repo() -> InMemoryTaxonomyRepository:
    return InMemoryTaxonomyRepository()


@pytest.fixture
def location_repo() -> InMemoryLocationRepository:
    return InMemoryLocationRepository()


@pytest.fixture
def claim_repo() -> InMemoryClaimRepository:
    return InMemoryClaimRepository()


@pytest.fixture
def storage() -> InMemoryFileStorage:
    return InMemoryFileStorage()


@pytest.fixture
def file_manager(storage) -> FileManager:
    return FileManager(storage)


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def gateway() -> FakeStripeGateway:
    return FakeStripeGateway()


# ── Services ──────────────────────────────────────────────────────────────────


@pytest.fixture
def facility_service(facility_repo, file_manager) -> FacilityService:
    return FacilityService(facility_repo, file_manager)


@pytest.fixture
def moderation_service(facility_repo) -> ModerationService:
    return ModerationService(facility_repo)


@pytest.fixture
def search_service(facility_repo) -> SearchService:
    return SearchService(facility_repo)


@pytest.fixture
def taxonomy_service(taxonomy_repo, file_manager) -> TaxonomyService:
    return TaxonomyService(taxonomy_repo, file_manager)


@pytest.fixture
def location_service(location_repo, facility_repo, file_manager) -> LocationService:
    return LocationService(location_repo, facility_repo, file_manager)


@pytest.fixture
def claim_service(claim_repo, facility_repo) -> ClaimService:
    return ClaimService(claim_repo, facility_repo)


@pytest.fixture
def user_service(user_repo, auth_provider) -> UserService:
    return UserService(user_repo, auth_provider)


@pytest.fixture
def auth_service(auth_provider, user_service) -> AuthService:
    return AuthService(auth_provider, user_service)


@pytest.fixture
def subscription_service(gateway, facility_repo) -> SubscriptionService:
    return SubscriptionService(gateway, facility_repo)


# ── Domain data ───────────────────────────────────────────────────────────────


def facility_payload(**overrides) -> dict:
    """A create payload that passes validation."""
    data = {
        "name": "Riverside Recovery",
        "description": "Residential treatment by the river",
        "location": "Austin, TX",
        "phone": "512-555-0100",
        "email": "info@riverside.com",
        "website": "https://www.riverside.com",
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_facility(facility_repo):
    """Store a facility directly, bypassing validation; returns the stored copy."""
    counter = {"n": 0}

    def _make(**overrides) -> Facility:
        counter["n"] += 1
        fields = {
            "name": f"Facility {counter['n']}",
            "description": "A place to recover",
            "location": "Austin, TX",
            "city": "Austin",
            "state": "TX",
            "phone": "512-555-0100",
            "email": "info@example.com",
            "moderation_status": ModerationStatus.APPROVED,
            "created_at": utc_now() - timedelta(minutes=100 - counter["n"]),
        }
        fields.update(overrides)
        facility = Facility(**fields)
        facility.regenerate_slug()
        return facility_repo.add(facility)

    return _make


def make_actor(user_id: str = "owner-1", role: UserRole = UserRole.USER, email: str = "owner@example.com") -> CurrentUser:
    return CurrentUser(user_id=user_id, email=email, role=role)


def png_bytes(size=(4, 4)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


def png_upload(name: str = "photo.png") -> UploadedImage:
    return UploadedImage(filename=name, content_type="image/png", data=png_bytes())


# ── API ───────────────────────────────────────────────────────────────────────


@pytest.fixture
def app(facility_repo, user_repo, taxonomy_repo, location_repo, claim_repo, storage, auth_provider, gateway):
    from recovery_directory.main import create_application

    application = create_application()
    application.dependency_overrides[FacilityRepository] = lambda: facility_repo
    application.dependency_overrides[UserRepository] = lambda: user_repo
    application.dependency_overrides[TaxonomyRepository] = lambda: taxonomy_repo
    application.dependency_overrides[LocationRepository] = lambda: location_repo
    application.dependency_overrides[ClaimRepository] = lambda: claim_repo
    application.dependency_overrides[AuthProvider] = lambda: auth_provider
    application.dependency_overrides[StripeGateway] = lambda: gateway
    application.dependency_overrides[get_file_storage] = lambda: storage
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def make_token(user_id: str, email: str = None, expires_in: int = 3600) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "email": email,
        "aud": settings.JWT_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
    }
    return jwt.encode(claims, settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def auth_headers(user_repo):
    """Store a user with the given role and return bearer headers for it."""

    def _headers(user_id: str = "user-1", role: UserRole = UserRole.USER, email: str = None,
                 suspended: bool = False) -> dict:
        email = email or f"{user_id}@example.com"
        user_repo.users[user_id] = User(id=user_id, email=email, role=role, is_suspended=suspended)
        return {"Authorization": f"Bearer {make_token(user_id, email)}"}

    return _headers
