# 📄 File: recovery_directory/modules/subscriptions/infrastructure/external/stripe_gateway.py
# 🧭 Purpose (Layman Explanation):
# Talks to Stripe, the card payment company: opens a checkout page, checks whether a
# payment went through, reads and cancels subscriptions, and checks that payment
# notifications really came from Stripe.
# 🧪 Purpose (Technical Summary):
# StripeGateway port and its stripe-python implementation. SDK calls are blocking and
# run in a worker thread; StripeError becomes PaymentError and a bad webhook
# signature becomes WebhookSignatureError.
# 🔗 Dependencies:
# stripe, asyncio, shared.config.settings, subscription value objects
# 🔄 Connected Modules / Calls From:
# subscription_service.py, main.py dependency_overrides[StripeGateway]

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Dict

import stripe

from recovery_directory.modules.subscriptions.domain.models.subscription import (
    CheckoutSession,
    SubscriptionInfo,
    WebhookEvent,
)
from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.core.exceptions import PaymentError, WebhookSignatureError

logger = logging.getLogger(__name__)


class StripeGateway(ABC):
    """Port for the payment provider."""

    @abstractmethod
    async def create_checkout_session(
        self,
        price_id: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> CheckoutSession:
        pass

    @abstractmethod
    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        pass

    @abstractmethod
    async def retrieve_subscription(self, subscription_id: str) -> SubscriptionInfo:
        pass

    @abstractmethod
    async def cancel_subscription(self, subscription_id: str) -> SubscriptionInfo:
        pass

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> WebhookEvent:
        """
        Raises:
            WebhookSignatureError: payload or signature is invalid
        """
        pass


def _to_checkout(session) -> CheckoutSession:
    return CheckoutSession(
        id=session["id"],
        url=session.get("url"),
        payment_status=session.get("payment_status"),
        subscription_id=session.get("subscription"),
        metadata=dict(session.get("metadata") or {}),
    )


def _to_subscription(subscription) -> SubscriptionInfo:
    return SubscriptionInfo(
        id=subscription["id"],
        status=subscription["status"],
        metadata=dict(subscription.get("metadata") or {}),
    )


class StripePaymentGateway(StripeGateway):
    """
    stripe-python adapter.

    The API key is set per call from settings so tests and reloads pick up
    the current value.
    """

    def __init__(self):
        self.settings = get_settings()

    async def _call(self, operation: str, fn, *args, **kwargs):
        stripe.api_key = self.settings.STRIPE_SECRET_KEY
        try:
            return await asyncio.to_thread(fn, *args, **kwargs)
        except stripe.StripeError as e:
            logger.error(f"Stripe {operation} failed: {e}")
            raise PaymentError(f"Stripe {operation} failed", service_response=str(e.user_message or e)) from e

    async def create_checkout_session(
        self,
        price_id: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> CheckoutSession:
        session = await self._call(
            "checkout",
            stripe.checkout.Session.create,
            mode="subscription",
            payment_method_types=["card"],
            line_items=[{"price": price_id, "quantity": 1}],
            success_url=success_url,
            cancel_url=cancel_url,
            customer_email=customer_email,
            metadata=metadata,
            subscription_data={"metadata": metadata},
        )
        return _to_checkout(session)

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        return _to_checkout(await self._call("session lookup", stripe.checkout.Session.retrieve, session_id))

    async def retrieve_subscription(self, subscription_id: str) -> SubscriptionInfo:
        return _to_subscription(await self._call("subscription lookup", stripe.Subscription.retrieve, subscription_id))

    async def cancel_subscription(self, subscription_id: str) -> SubscriptionInfo:
        return _to_subscription(await self._call("cancellation", stripe.Subscription.cancel, subscription_id))

    def construct_event(self, payload: bytes, signature: str) -> WebhookEvent:
        try:
            event = stripe.Webhook.construct_event(payload, signature, self.settings.STRIPE_WEBHOOK_SECRET)
        except ValueError as e:
            raise WebhookSignatureError("Invalid webhook payload") from e
        except stripe.SignatureVerificationError as e:
            raise WebhookSignatureError() from e
        return WebhookEvent(id=event["id"], type=event["type"], data=event["data"]["object"])
