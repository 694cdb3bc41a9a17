# 📄 File: recovery_directory/modules/subscriptions/presentation/api/v1/payments.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for paying for a listing, checking a payment after returning from
# Stripe, receiving Stripe's notices, and viewing or cancelling a subscription.
# 🧪 Purpose (Technical Summary):
# /payments router over SubscriptionService. The webhook reads the raw body for
# signature verification and is excluded from authentication middleware.
# 🔗 Dependencies:
# FastAPI, SubscriptionService, payment schemas, shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# recovery_directory.api.v1.router

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from recovery_directory.modules.facility_directory.domain.models.facility import Facility
from recovery_directory.modules.subscriptions.domain.services.subscription_service import SubscriptionService
from recovery_directory.modules.subscriptions.presentation.api.schemas.payment_schemas import (
    CheckoutRequest,
    CheckoutResponse,
    ConfirmCheckoutRequest,
    ConfirmCheckoutResponse,
    SubscriptionResponse,
    WebhookResponse,
)
from recovery_directory.shared.core.dependencies import CurrentUser, get_current_active_user

logger = logging.getLogger(__name__)

payments_router = APIRouter()


def _subscription_response(facility: Facility) -> SubscriptionResponse:
    return SubscriptionResponse(
        facility_id=facility.id,
        subscription_id=facility.subscription_id,
        subscription_status=facility.subscription_status,
    )


@payments_router.post("/checkout", response_model=CheckoutResponse, summary="Start a Stripe checkout")
async def create_checkout_session(
    body: CheckoutRequest,
    current_user: CurrentUser = Depends(get_current_active_user),
    subscription_service: SubscriptionService = Depends(),
) -> CheckoutResponse:
    session = await subscription_service.create_checkout_session(body.facility_id, current_user)
    return CheckoutResponse(session_id=session.id, url=session.url)


@payments_router.post("/confirm", response_model=ConfirmCheckoutResponse, summary="Confirm a completed checkout")
async def confirm_checkout(
    body: ConfirmCheckoutRequest,
    current_user: CurrentUser = Depends(get_current_active_user),
    subscription_service: SubscriptionService = Depends(),
) -> ConfirmCheckoutResponse:
    result = await subscription_service.confirm_checkout(body.session_id)
    return ConfirmCheckoutResponse.model_validate(result)


@payments_router.post("/webhook", response_model=WebhookResponse, summary="Stripe webhook receiver")
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
    subscription_service: SubscriptionService = Depends(),
) -> WebhookResponse:
    payload = await request.body()
    event = await subscription_service.handle_webhook(payload, stripe_signature)
    return WebhookResponse(received=True, type=event.type)


@payments_router.get(
    "/subscription/{facility_id}",
    response_model=SubscriptionResponse,
    summary="Subscription status of a listing",
)
async def get_subscription(
    facility_id: str,
    current_user: CurrentUser = Depends(get_current_active_user),
    subscription_service: SubscriptionService = Depends(),
) -> SubscriptionResponse:
    return _subscription_response(await subscription_service.get_subscription(facility_id))


@payments_router.post(
    "/subscription/{facility_id}/cancel",
    response_model=SubscriptionResponse,
    summary="Cancel a listing's subscription",
)
async def cancel_subscription(
    facility_id: str,
    current_user: CurrentUser = Depends(get_current_active_user),
    subscription_service: SubscriptionService = Depends(),
) -> SubscriptionResponse:
    return _subscription_response(await subscription_service.cancel_subscription(facility_id, current_user))
