# 📄 File: recovery_directory/modules/user_management/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the login, sign-up, logout and password-reset forms and of the answers
# the API sends back for them.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the /auth endpoints, with EmailStr validation
# and conversion from the SignedInUser service result.
#
# 🔗 Dependencies:
# - pydantic (EmailStr requires email-validator)
# - user_management.domain.services.auth_service (SignedInUser)
#
# 🔄 Connected Modules / Calls From:
# - presentation/api/v1/auth.py

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from recovery_directory.modules.user_management.domain.models.user import UserRole
from recovery_directory.modules.user_management.domain.services.auth_service import SignedInUser
from recovery_directory.modules.user_management.presentation.api.schemas.user_schemas import UserResponse


class SignInRequest(BaseModel):
    """Email/password credentials."""
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")


class SignUpRequest(BaseModel):
    email: EmailStr = Field(..., description="Email address for the new account")
    password: str = Field(..., min_length=6, max_length=128, description="Password (6+ characters)")


class TokenRefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token from a previous sign-in")


class PasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., description="Address to send the reset link to")


class AuthResponse(BaseModel):
    """
    Session tokens plus the local account record.

    access_token is None when sign-up requires email confirmation first.
    """
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: UserResponse

    @classmethod
    def from_signed_in(cls, result: SignedInUser) -> "AuthResponse":
        return cls(
            access_token=result.session.access_token,
            refresh_token=result.session.refresh_token,
            expires_in=result.session.expires_in,
            user=UserResponse.model_validate(result.user),
        )


class MessageResponse(BaseModel):
    message: str


class MeResponse(BaseModel):
    """Identity of the caller as the API sees it."""
    id: str
    email: Optional[str] = None
    role: UserRole
    is_suspended: bool
    is_admin: bool
