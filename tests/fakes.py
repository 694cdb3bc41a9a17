"""In-memory stand-ins for the repository and adapter ports used by the tests."""

import json
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from recovery_directory.modules.facility_claims.domain.models.claim import ClaimStatus, FacilityClaim
from recovery_directory.modules.facility_claims.domain.repositories.claim_repository import ClaimRepository
from recovery_directory.modules.facility_directory.domain.models.facility import Facility, ModerationStatus
from recovery_directory.modules.facility_directory.domain.models.location import FeaturedLocation
from recovery_directory.modules.facility_directory.domain.models.taxonomy import TaxonomyKind, TaxonomyTerm
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.modules.facility_directory.domain.repositories.location_repository import LocationRepository
from recovery_directory.modules.facility_directory.domain.repositories.taxonomy_repository import TaxonomyRepository
from recovery_directory.modules.subscriptions.domain.models.subscription import (
    CheckoutSession,
    SubscriptionInfo,
    WebhookEvent,
)
from recovery_directory.modules.subscriptions.infrastructure.external.stripe_gateway import StripeGateway
from recovery_directory.modules.user_management.domain.models.user import User
from recovery_directory.modules.user_management.domain.repositories.user_repository import UserRepository
from recovery_directory.modules.user_management.infrastructure.external.supabase_auth import (
    AuthProvider,
    AuthSession,
)
from recovery_directory.shared.core.exceptions import AuthenticationError, NotFoundError, WebhookSignatureError
from recovery_directory.shared.infrastructure.storage.supabase_storage import FileStorage

STORAGE_BASE = "https://storage.test/directory-media/"


def _newest_first(items):
    return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self.users: Dict[str, User] = {}

    async def create(self, user: User) -> User:
        self.users[user.id] = user.model_copy(deep=True)
        return user.model_copy(deep=True)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def update(self, user: User) -> User:
        if user.id not in self.users:
            raise NotFoundError("User not found", resource_type="user", resource_id=user.id)
        self.users[user.id] = user.model_copy(deep=True)
        return user.model_copy(deep=True)

    async def list_all(self) -> List[User]:
        return [u.model_copy(deep=True) for u in _newest_first(self.users.values())]

    async def count_all(self) -> int:
        return len(self.users)

    async def count_created_since(self, since: datetime) -> int:
        return sum(1 for u in self.users.values() if u.created_at >= since)

    async def count_logged_in_since(self, since: datetime) -> int:
        return sum(1 for u in self.users.values() if u.last_login and u.last_login >= since)

    async def latest_login(self) -> Optional[datetime]:
        logins = [u.last_login for u in self.users.values() if u.last_login]
        return max(logins) if logins else None


class InMemoryFacilityRepository(FacilityRepository):
    def __init__(self):
        self.facilities: Dict[str, Facility] = {}

    def add(self, facility: Facility) -> Facility:
        self.facilities[facility.id] = facility.model_copy(deep=True)
        return facility

    async def create(self, facility: Facility) -> Facility:
        return self.add(facility).model_copy(deep=True)

    async def get_by_id(self, facility_id: str) -> Optional[Facility]:
        facility = self.facilities.get(facility_id)
        return facility.model_copy(deep=True) if facility else None

    async def get_by_slug(self, slug: str) -> Optional[Facility]:
        matches = [f for f in _newest_first(self.facilities.values()) if f.slug == slug]
        return matches[0].model_copy(deep=True) if matches else None

    async def update(self, facility: Facility) -> Facility:
        if facility.id not in self.facilities:
            raise NotFoundError("Facility not found", resource_type="facility", resource_id=facility.id)
        self.facilities[facility.id] = facility.model_copy(deep=True)
        return facility.model_copy(deep=True)

    async def delete(self, facility_id: str) -> bool:
        return self.facilities.pop(facility_id, None) is not None

    async def list_by_status(
        self,
        status: Optional[ModerationStatus] = None,
        after: Optional[Tuple[datetime, str]] = None,
        limit: Optional[int] = None,
    ) -> List[Facility]:
        rows = _newest_first(self.facilities.values())
        if status is not None:
            rows = [f for f in rows if f.moderation_status == status]
        if after is not None:
            rows = [f for f in rows if (f.created_at, f.id) < after]
        if limit is not None:
            rows = rows[:limit]
        return [f.model_copy(deep=True) for f in rows]

    async def list_featured(self) -> List[Facility]:
        return [
            f.model_copy(deep=True)
            for f in _newest_first(self.facilities.values())
            if f.is_featured and f.moderation_status == ModerationStatus.APPROVED
        ]

    async def list_by_owner(self, owner_id: str) -> List[Facility]:
        return [f.model_copy(deep=True) for f in _newest_first(self.facilities.values()) if f.owner_id == owner_id]

    async def get_by_subscription_id(self, subscription_id: str) -> Optional[Facility]:
        for facility in self.facilities.values():
            if facility.subscription_id == subscription_id:
                return facility.model_copy(deep=True)
        return None


class InMemoryTaxonomyRepository(TaxonomyRepository):
    def __init__(self):
        self.terms: Dict[str, TaxonomyTerm] = {}

    async def list_by_kind(self, kind: TaxonomyKind) -> List[TaxonomyTerm]:
        terms = [t for t in self.terms.values() if t.kind == kind]
        return [t.model_copy(deep=True) for t in sorted(terms, key=lambda t: t.name.lower())]

    async def get_by_id(self, term_id: str) -> Optional[TaxonomyTerm]:
        term = self.terms.get(term_id)
        return term.model_copy(deep=True) if term else None

    async def create(self, term: TaxonomyTerm) -> TaxonomyTerm:
        self.terms[term.id] = term.model_copy(deep=True)
        return term.model_copy(deep=True)

    async def update(self, term: TaxonomyTerm) -> TaxonomyTerm:
        self.terms[term.id] = term.model_copy(deep=True)
        return term.model_copy(deep=True)

    async def delete(self, term_id: str) -> bool:
        return self.terms.pop(term_id, None) is not None


class InMemoryLocationRepository(LocationRepository):
    def __init__(self):
        self.locations: Dict[str, FeaturedLocation] = {}

    async def list_all(self) -> List[FeaturedLocation]:
        rows = sorted(self.locations.values(), key=lambda loc: (loc.order, loc.created_at))
        return [loc.model_copy(deep=True) for loc in rows]

    async def get_by_id(self, location_id: str) -> Optional[FeaturedLocation]:
        location = self.locations.get(location_id)
        return location.model_copy(deep=True) if location else None

    async def max_order(self) -> Optional[int]:
        if not self.locations:
            return None
        return max(loc.order for loc in self.locations.values())

    async def create(self, location: FeaturedLocation) -> FeaturedLocation:
        self.locations[location.id] = location.model_copy(deep=True)
        return location.model_copy(deep=True)

    async def update(self, location: FeaturedLocation) -> FeaturedLocation:
        self.locations[location.id] = location.model_copy(deep=True)
        return location.model_copy(deep=True)

    async def delete(self, location_id: str) -> bool:
        return self.locations.pop(location_id, None) is not None


class InMemoryClaimRepository(ClaimRepository):
    def __init__(self):
        self.claims: Dict[str, FacilityClaim] = {}

    async def create(self, claim: FacilityClaim) -> FacilityClaim:
        self.claims[claim.id] = claim.model_copy(deep=True)
        return claim.model_copy(deep=True)

    async def get_by_id(self, claim_id: str) -> Optional[FacilityClaim]:
        claim = self.claims.get(claim_id)
        return claim.model_copy(deep=True) if claim else None

    async def update(self, claim: FacilityClaim) -> FacilityClaim:
        self.claims[claim.id] = claim.model_copy(deep=True)
        return claim.model_copy(deep=True)

    async def list_claims(self, status: Optional[ClaimStatus] = None) -> List[FacilityClaim]:
        rows = _newest_first(self.claims.values())
        if status is not None:
            rows = [c for c in rows if c.status == status]
        return [c.model_copy(deep=True) for c in rows]

    async def list_by_facility(self, facility_id: str) -> List[FacilityClaim]:
        return [c.model_copy(deep=True) for c in _newest_first(self.claims.values()) if c.facility_id == facility_id]

    async def find_pending(self, facility_id: str, user_id: str) -> Optional[FacilityClaim]:
        for claim in self.claims.values():
            if claim.facility_id == facility_id and claim.user_id == user_id and claim.status == ClaimStatus.PENDING:
                return claim.model_copy(deep=True)
        return None


class InMemoryFileStorage(FileStorage):
    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.deleted: List[str] = []

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        self.objects[path] = data
        return f"{STORAGE_BASE}{path}"

    async def delete(self, paths: List[str]) -> None:
        for path in paths:
            self.objects.pop(path, None)
            self.deleted.append(path)

    def path_from_url(self, url: str) -> Optional[str]:
        if url and url.startswith(STORAGE_BASE):
            return url[len(STORAGE_BASE):]
        return None


class FakeAuthProvider(AuthProvider):
    """Accounts are registered with register(); every session gets predictable tokens."""

    def __init__(self):
        self.accounts: Dict[str, Tuple[str, str]] = {}
        self.signed_out: List[str] = []
        self.reset_requests: List[str] = []

    def register(self, email: str, password: str, user_id: str) -> None:
        self.accounts[email.lower()] = (password, user_id)

    def _session(self, email: str, user_id: str) -> AuthSession:
        return AuthSession(
            user_id=user_id,
            email=email,
            access_token=f"access-{user_id}",
            refresh_token=f"refresh-{user_id}",
            expires_in=3600,
        )

    async def sign_in(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email.lower())
        if not account or account[0] != password:
            raise AuthenticationError("Invalid email or password")
        return self._session(email.lower(), account[1])

    async def sign_up(self, email: str, password: str) -> AuthSession:
        user_id = f"user-{len(self.accounts) + 1}"
        self.register(email, password, user_id)
        return self._session(email.lower(), user_id)

    async def refresh(self, refresh_token: str) -> AuthSession:
        for email, (_, user_id) in self.accounts.items():
            if refresh_token == f"refresh-{user_id}":
                return self._session(email, user_id)
        raise AuthenticationError("Invalid refresh token")

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)

    async def send_password_reset(self, email: str) -> None:
        self.reset_requests.append(email)


class FakeStripeGateway(StripeGateway):
    """
    Records checkout sessions and subscriptions in memory.

    Webhook payloads are plain JSON events; only the signature "valid" is accepted.
    """

    VALID_SIGNATURE = "valid"

    def __init__(self):
        self.sessions: Dict[str, CheckoutSession] = {}
        self.subscriptions: Dict[str, SubscriptionInfo] = {}
        self.cancelled: List[str] = []
        self.last_checkout: Optional[dict] = None

    async def create_checkout_session(self, price_id, customer_email, success_url, cancel_url, metadata):
        session = CheckoutSession(
            id=f"cs_test_{len(self.sessions) + 1}",
            url=f"https://checkout.stripe.test/{len(self.sessions) + 1}",
            payment_status="unpaid",
            metadata=dict(metadata),
        )
        self.sessions[session.id] = session
        self.last_checkout = {
            "price_id": price_id,
            "customer_email": customer_email,
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": dict(metadata),
        }
        return session

    def complete(self, session_id: str, subscription_id: str) -> None:
        session = self.sessions[session_id]
        session.payment_status = "paid"
        session.subscription_id = subscription_id
        self.subscriptions[subscription_id] = SubscriptionInfo(
            id=subscription_id, status="active", metadata=dict(session.metadata)
        )

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        return self.sessions[session_id]

    async def retrieve_subscription(self, subscription_id: str) -> SubscriptionInfo:
        return self.subscriptions[subscription_id]

    async def cancel_subscription(self, subscription_id: str) -> SubscriptionInfo:
        info = self.subscriptions.get(subscription_id) or SubscriptionInfo(id=subscription_id, status="active")
        info.status = "canceled"
        self.subscriptions[subscription_id] = info
        self.cancelled.append(subscription_id)
        return info

    def construct_event(self, payload: bytes, signature: str) -> WebhookEvent:
        if signature != self.VALID_SIGNATURE:
            raise WebhookSignatureError()
        body = json.loads(payload)
        return WebhookEvent(id=body["id"], type=body["type"], data=body["data"]["object"])
