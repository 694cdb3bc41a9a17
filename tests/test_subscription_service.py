import json

import pytest

from recovery_directory.modules.facility_directory.domain.models.facility import SubscriptionStatus
from recovery_directory.modules.user_management.domain.models.user import UserRole
from recovery_directory.shared.core.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    PaymentError,
    ValidationError,
    WebhookSignatureError,
)

from tests.conftest import make_actor


def event(event_type: str, obj: dict, event_id: str = "evt_1") -> bytes:
    return json.dumps({"id": event_id, "type": event_type, "data": {"object": obj}}).encode()


async def test_checkout_session_carries_facility_metadata(subscription_service, gateway, make_facility):
    facility = make_facility(name="Hope House", owner_id="owner-1")

    session = await subscription_service.create_checkout_session(facility.id, make_actor("owner-1"))

    assert session.url.startswith("https://checkout.stripe.test/")
    assert gateway.last_checkout["metadata"] == {
        "facility_id": facility.id,
        "user_id": "owner-1",
        "facility_name": "Hope House",
    }
    assert gateway.last_checkout["price_id"] == "price_test_123"
    assert gateway.last_checkout["success_url"] == (
        "https://directory.test/payment/success?session_id={CHECKOUT_SESSION_ID}"
    )
    assert gateway.last_checkout["cancel_url"] == "https://directory.test/payment/cancel"


async def test_checkout_requires_configuration_and_email(subscription_service, make_facility):
    facility = make_facility()

    with pytest.raises(ValidationError):
        await subscription_service.create_checkout_session(facility.id, make_actor("owner-1", email=None))

    subscription_service.settings = subscription_service.settings.model_copy(update={"STRIPE_SECRET_KEY": ""})
    with pytest.raises(PaymentError):
        await subscription_service.create_checkout_session(facility.id, make_actor("owner-1"))


async def test_confirm_paid_checkout_activates_listing(subscription_service, gateway, facility_repo, make_facility):
    facility = make_facility(owner_id="owner-1")
    session = await subscription_service.create_checkout_session(facility.id, make_actor("owner-1"))
    gateway.complete(session.id, "sub_123")

    result = await subscription_service.confirm_checkout(session.id)

    assert result.paid
    assert result.subscription_status == SubscriptionStatus.ACTIVE
    stored = facility_repo.facilities[facility.id]
    assert stored.subscription_id == "sub_123"
    assert stored.subscription_status == SubscriptionStatus.ACTIVE


async def test_confirm_unpaid_checkout_changes_nothing(subscription_service, facility_repo, make_facility):
    facility = make_facility(owner_id="owner-1")
    session = await subscription_service.create_checkout_session(facility.id, make_actor("owner-1"))

    result = await subscription_service.confirm_checkout(session.id)

    assert not result.paid
    assert facility_repo.facilities[facility.id].subscription_status == SubscriptionStatus.NONE


async def test_webhook_rejects_bad_signature(subscription_service):
    with pytest.raises(WebhookSignatureError):
        await subscription_service.handle_webhook(event("checkout.session.completed", {}), "forged")


async def test_webhook_lifecycle(subscription_service, facility_repo, make_facility):
    facility = make_facility()
    metadata = {"facility_id": facility.id}

    await subscription_service.handle_webhook(
        event("checkout.session.completed", {"metadata": metadata, "subscription": "sub_9"}), "valid"
    )
    assert facility_repo.facilities[facility.id].subscription_status == SubscriptionStatus.ACTIVE

    # Invoice objects carry no facility metadata; the subscription id is enough.
    await subscription_service.handle_webhook(
        event("invoice.payment_failed", {"subscription": "sub_9"}), "valid"
    )
    assert facility_repo.facilities[facility.id].subscription_status == SubscriptionStatus.PAST_DUE

    await subscription_service.handle_webhook(
        event("customer.subscription.updated", {"id": "sub_9", "status": "active", "metadata": metadata}), "valid"
    )
    assert facility_repo.facilities[facility.id].subscription_status == SubscriptionStatus.ACTIVE

    await subscription_service.handle_webhook(
        event("customer.subscription.updated", {"id": "sub_9", "status": "incomplete"}), "valid"
    )
    assert facility_repo.facilities[facility.id].subscription_status == SubscriptionStatus.ACTIVE

    await subscription_service.handle_webhook(
        event("customer.subscription.deleted", {"id": "sub_9", "metadata": metadata}), "valid"
    )
    assert facility_repo.facilities[facility.id].subscription_status == SubscriptionStatus.CANCELLED


async def test_unknown_webhook_events_are_ignored(subscription_service, facility_repo, make_facility):
    facility = make_facility()
    handled = await subscription_service.handle_webhook(event("customer.created", {"id": "cus_1"}), "valid")
    assert handled.type == "customer.created"
    assert facility_repo.facilities[facility.id].subscription_status == SubscriptionStatus.NONE


async def test_get_subscription_syncs_from_stripe(subscription_service, gateway, make_facility):
    facility = make_facility(subscription_id="sub_1", subscription_status=SubscriptionStatus.ACTIVE)
    await gateway.cancel_subscription("sub_1")

    refreshed = await subscription_service.get_subscription(facility.id)
    assert refreshed.subscription_status == SubscriptionStatus.CANCELLED


async def test_cancel_subscription_permissions(subscription_service, gateway, make_facility):
    facility = make_facility(owner_id="owner-1", subscription_id="sub_1", subscription_status=SubscriptionStatus.ACTIVE)
    bare = make_facility(owner_id="owner-1")

    with pytest.raises(AuthorizationError):
        await subscription_service.cancel_subscription(facility.id, make_actor("stranger"))
    with pytest.raises(BusinessRuleViolationError):
        await subscription_service.cancel_subscription(bare.id, make_actor("owner-1"))

    cancelled = await subscription_service.cancel_subscription(facility.id, make_actor("admin", UserRole.ADMIN))
    assert cancelled.subscription_status == SubscriptionStatus.CANCELLED
    assert gateway.cancelled == ["sub_1"]
