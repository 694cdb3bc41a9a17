# 📄 File: recovery_directory/modules/subscriptions/domain/models/subscription.py
# 🧭 Purpose (Layman Explanation):
# Describes a payment checkout, a subscription's state, and a payment notification
# from Stripe, and translates Stripe's status words into the directory's own.
# 🧪 Purpose (Technical Summary):
# Value objects exchanged with the StripeGateway port and the Stripe -> directory
# subscription status mapping.
# 🔗 Dependencies:
# dataclasses, facility_directory SubscriptionStatus
# 🔄 Connected Modules / Calls From:
# stripe_gateway.py, subscription_service.py, payments router

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from recovery_directory.modules.facility_directory.domain.models.facility import SubscriptionStatus

# Stripe subscription.status -> listing subscription_status
STRIPE_STATUS_MAP = {
    "active": SubscriptionStatus.ACTIVE,
    "trialing": SubscriptionStatus.ACTIVE,
    "past_due": SubscriptionStatus.PAST_DUE,
    "unpaid": SubscriptionStatus.PAST_DUE,
    "canceled": SubscriptionStatus.CANCELLED,
    "incomplete_expired": SubscriptionStatus.CANCELLED,
}


def map_stripe_status(stripe_status: Optional[str]) -> Optional[SubscriptionStatus]:
    """None for statuses with no directory equivalent (e.g. "incomplete")."""
    return STRIPE_STATUS_MAP.get(stripe_status or "")


@dataclass
class CheckoutSession:
    id: str
    url: Optional[str] = None
    payment_status: Optional[str] = None
    subscription_id: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status in ("paid", "no_payment_required")


@dataclass
class SubscriptionInfo:
    id: str
    status: str
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass
class WebhookEvent:
    """A verified Stripe event; data is event.data.object."""
    id: str
    type: str
    data: Dict[str, Any]


@dataclass
class ConfirmationResult:
    facility_id: str
    paid: bool
    subscription_status: SubscriptionStatus
