# 📄 File: recovery_directory/modules/subscriptions/presentation/api/schemas/payment_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the payment requests and answers: where to send the owner to pay,
# whether a payment went through, and a listing's subscription state.
#
# 🧪 Purpose (Technical Summary):
# Pydantic schemas for /payments endpoints.
#
# 🔗 Dependencies:
# - pydantic, facility_directory SubscriptionStatus
#
# 🔄 Connected Modules / Calls From:
# - presentation/api/v1/payments.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from recovery_directory.modules.facility_directory.domain.models.facility import SubscriptionStatus


class CheckoutRequest(BaseModel):
    facility_id: str = Field(..., description="Listing to subscribe")


class CheckoutResponse(BaseModel):
    session_id: str
    url: Optional[str] = None


class ConfirmCheckoutRequest(BaseModel):
    session_id: str = Field(..., min_length=1)


class ConfirmCheckoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    facility_id: str
    paid: bool
    subscription_status: SubscriptionStatus


class SubscriptionResponse(BaseModel):
    facility_id: str
    subscription_id: Optional[str] = None
    subscription_status: SubscriptionStatus


class WebhookResponse(BaseModel):
    received: bool = True
    type: Optional[str] = None
