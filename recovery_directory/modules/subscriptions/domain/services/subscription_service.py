# 📄 File: recovery_directory/modules/subscriptions/domain/services/subscription_service.py
# 🧭 Purpose (Layman Explanation):
# Handles paying for a listing: sends the owner to Stripe's checkout page, records the
# subscription when payment succeeds, follows Stripe's later notices (renewed, failed,
# cancelled), and lets the owner cancel.
# 🧪 Purpose (Technical Summary):
# Subscription workflows over StripeGateway and FacilityRepository. Subscription state
# lives on the facility row (subscription_id, subscription_status).
# 🔗 Dependencies:
# StripeGateway, FacilityRepository, subscription value objects, shared settings/exceptions
# 🔄 Connected Modules / Calls From:
# payments router

import logging
from typing import Optional

from fastapi import Depends

from recovery_directory.modules.facility_directory.domain.models.facility import Facility, SubscriptionStatus
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.modules.subscriptions.domain.models.subscription import (
    CheckoutSession,
    ConfirmationResult,
    SubscriptionInfo,
    WebhookEvent,
    map_stripe_status,
)
from recovery_directory.modules.subscriptions.infrastructure.external.stripe_gateway import StripeGateway
from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.core.dependencies import CurrentUser
from recovery_directory.shared.core.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    NotFoundError,
    PaymentError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Stripe subscription lifecycle for listings."""

    def __init__(
        self,
        gateway: StripeGateway = Depends(),
        facility_repository: FacilityRepository = Depends(),
    ):
        self.gateway = gateway
        self.facility_repository = facility_repository
        self.settings = get_settings()

    # =========================================================================
    # CHECKOUT
    # =========================================================================

    async def create_checkout_session(self, facility_id: str, user: CurrentUser) -> CheckoutSession:
        if not self.settings.stripe_enabled:
            raise PaymentError("Payments are not configured")
        if not user.email:
            raise ValidationError("An email address is required to subscribe", field="email")

        facility = await self._get_facility(facility_id)
        frontend = self.settings.FRONTEND_URL.rstrip("/")

        session = await self.gateway.create_checkout_session(
            price_id=self.settings.STRIPE_PRICE_ID,
            customer_email=user.email,
            success_url=f"{frontend}/payment/success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{frontend}/payment/cancel",
            metadata={
                "facility_id": facility.id,
                "user_id": user.user_id,
                "facility_name": facility.name,
            },
        )
        logger.info(f"Checkout session {session.id} created for facility {facility_id} by {user.user_id}")
        return session

    async def confirm_checkout(self, session_id: str) -> ConfirmationResult:
        """Check a session after the browser returns from Stripe and record a paid subscription."""
        session = await self.gateway.retrieve_checkout_session(session_id)
        facility_id = session.metadata.get("facility_id")
        if not facility_id:
            raise ValidationError("Checkout session is not linked to a facility", field="session_id", value=session_id)

        facility = await self._get_facility(facility_id)
        if session.is_paid:
            facility = await self._activate(facility, session.subscription_id)
        return ConfirmationResult(
            facility_id=facility.id,
            paid=session.is_paid,
            subscription_status=facility.subscription_status,
        )

    # =========================================================================
    # WEBHOOK
    # =========================================================================

    async def handle_webhook(self, payload: bytes, signature: Optional[str]) -> WebhookEvent:
        """
        Apply a verified Stripe event. Unknown event types are acknowledged and ignored.

        Raises:
            WebhookSignatureError: the event could not be verified
        """
        event = self.gateway.construct_event(payload, signature or "")
        obj = event.data

        if event.type == "checkout.session.completed":
            facility = await self._facility_from_metadata(obj.get("metadata"))
            if facility:
                await self._activate(facility, obj.get("subscription"))

        elif event.type == "customer.subscription.updated":
            facility = await self._facility_for_subscription(obj.get("id"), obj.get("metadata"))
            status = map_stripe_status(obj.get("status"))
            if facility and status:
                await self._set_status(facility, status, obj.get("id"))
            elif facility:
                logger.info(f"Stripe status '{obj.get('status')}' leaves facility {facility.id} unchanged")

        elif event.type == "customer.subscription.deleted":
            facility = await self._facility_for_subscription(obj.get("id"), obj.get("metadata"))
            if facility:
                await self._set_status(facility, SubscriptionStatus.CANCELLED, obj.get("id"))

        elif event.type == "invoice.payment_failed":
            facility = await self._facility_for_subscription(obj.get("subscription"), None)
            if facility:
                await self._set_status(facility, SubscriptionStatus.PAST_DUE, obj.get("subscription"))

        else:
            logger.debug(f"Ignoring Stripe event {event.type}")
            return event

        logger.info(f"Processed Stripe event {event.id} ({event.type})")
        return event

    # =========================================================================
    # SUBSCRIPTION MANAGEMENT
    # =========================================================================

    async def get_subscription(self, facility_id: str) -> Facility:
        """
        Current subscription state of a listing, refreshed from Stripe when
        the listing has a subscription.
        """
        facility = await self._get_facility(facility_id)
        if not facility.subscription_id:
            return facility

        info = await self.gateway.retrieve_subscription(facility.subscription_id)
        status = map_stripe_status(info.status)
        if status and status != facility.subscription_status:
            facility = await self._set_status(facility, status, info.id)
        return facility

    async def cancel_subscription(self, facility_id: str, actor: CurrentUser) -> Facility:
        facility = await self._get_facility(facility_id)
        if not actor.can_manage(facility.owner_id):
            raise AuthorizationError(
                "Only the owner or an admin can cancel this subscription",
                resource_type="facility",
                resource_id=facility_id,
                user_id=actor.user_id,
            )
        if not facility.subscription_id:
            raise BusinessRuleViolationError(
                "Facility has no subscription",
                rule="subscription_required",
                context={"facility_id": facility_id},
            )

        info: SubscriptionInfo = await self.gateway.cancel_subscription(facility.subscription_id)
        logger.info(f"Subscription {info.id} for facility {facility_id} cancelled by {actor.user_id}")
        return await self._set_status(facility, SubscriptionStatus.CANCELLED, info.id)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _activate(self, facility: Facility, subscription_id: Optional[str]) -> Facility:
        return await self._set_status(facility, SubscriptionStatus.ACTIVE, subscription_id or facility.subscription_id)

    async def _set_status(
        self,
        facility: Facility,
        status: SubscriptionStatus,
        subscription_id: Optional[str],
    ) -> Facility:
        facility.subscription_status = status
        if subscription_id:
            facility.subscription_id = subscription_id
        facility.touch()
        saved = await self.facility_repository.update(facility)
        logger.info(f"Facility {facility.id} subscription now {status.value}")
        return saved

    async def _facility_from_metadata(self, metadata) -> Optional[Facility]:
        facility_id = (metadata or {}).get("facility_id")
        if not facility_id:
            return None
        facility = await self.facility_repository.get_by_id(facility_id)
        if not facility:
            logger.warning(f"Stripe event references unknown facility {facility_id}")
        return facility

    async def _facility_for_subscription(self, subscription_id: Optional[str], metadata) -> Optional[Facility]:
        facility = await self._facility_from_metadata(metadata)
        if facility is None and subscription_id:
            facility = await self.facility_repository.get_by_subscription_id(subscription_id)
        if facility is None:
            logger.warning(f"No facility found for Stripe subscription {subscription_id}")
        return facility

    async def _get_facility(self, facility_id: str) -> Facility:
        facility = await self.facility_repository.get_by_id(facility_id)
        if not facility:
            raise NotFoundError("Facility not found", resource_type="facility", resource_id=facility_id)
        return facility
