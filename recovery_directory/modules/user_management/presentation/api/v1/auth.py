# 📄 File: recovery_directory/modules/user_management/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for logging in, creating an account, logging out, staying logged in
# and asking for a password reset email.
# 🧪 Purpose (Technical Summary):
# /auth router: Supabase-backed session endpoints with slowapi rate limiting on the
# credential routes and a /me endpoint resolving the caller's stored role.
# 🔗 Dependencies:
# FastAPI, slowapi (shared limiter), AuthService, auth schemas, shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# recovery_directory.api.v1.router

"""
Authentication API Endpoints

- POST /sign-in: Email/password sign-in
- POST /sign-up: Create an account
- POST /sign-out: Revoke the caller's session
- POST /refresh: Exchange a refresh token for a new token pair
- POST /password-reset: Send a password reset email
- GET  /me: Current caller's account
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from recovery_directory.modules.user_management.domain.services.auth_service import AuthService
from recovery_directory.modules.user_management.presentation.api.schemas.auth_schemas import (
    AuthResponse,
    MeResponse,
    MessageResponse,
    PasswordResetRequest,
    SignInRequest,
    SignUpRequest,
    TokenRefreshRequest,
)
from recovery_directory.shared.core.dependencies import CurrentUser, get_current_user
from recovery_directory.shared.core.exceptions import AuthenticationError
from recovery_directory.shared.core.rate_limiter import auth_rate_limit, limiter

logger = logging.getLogger(__name__)

auth_router = APIRouter()


@auth_router.post(
    "/sign-in",
    response_model=AuthResponse,
    summary="Sign in with email and password",
    responses={
        401: {"description": "Invalid credentials"},
        403: {"description": "Account suspended"},
        429: {"description": "Too many sign-in attempts"},
    },
)
@limiter.limit(auth_rate_limit)
async def sign_in(
    request: Request,
    credentials: SignInRequest,
    auth_service: AuthService = Depends(),
) -> AuthResponse:
    result = await auth_service.sign_in(credentials.email, credentials.password)
    return AuthResponse.from_signed_in(result)


@auth_router.post(
    "/sign-up",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new account",
)
@limiter.limit(auth_rate_limit)
async def sign_up(
    request: Request,
    registration: SignUpRequest,
    auth_service: AuthService = Depends(),
) -> AuthResponse:
    result = await auth_service.sign_up(registration.email, registration.password)
    return AuthResponse.from_signed_in(result)


@auth_router.post("/sign-out", response_model=MessageResponse, summary="Sign out everywhere")
async def sign_out(
    current_user: CurrentUser = Depends(get_current_user),
    auth_service: AuthService = Depends(),
) -> MessageResponse:
    if not current_user.access_token:
        raise AuthenticationError("No active session")
    await auth_service.sign_out(current_user.access_token)
    logger.info(f"User {current_user.user_id} signed out")
    return MessageResponse(message="Signed out")


@auth_router.post("/refresh", response_model=AuthResponse, summary="Refresh the session tokens")
async def refresh(
    body: TokenRefreshRequest,
    auth_service: AuthService = Depends(),
) -> AuthResponse:
    result = await auth_service.refresh(body.refresh_token)
    return AuthResponse.from_signed_in(result)


@auth_router.post("/password-reset", response_model=MessageResponse, summary="Send a password reset email")
@limiter.limit(auth_rate_limit)
async def request_password_reset(
    request: Request,
    body: PasswordResetRequest,
    auth_service: AuthService = Depends(),
) -> MessageResponse:
    await auth_service.request_password_reset(body.email)
    # Same answer whether or not the address has an account
    return MessageResponse(message="If an account exists for that email, a reset link has been sent")


@auth_router.get("/me", response_model=MeResponse, summary="Current account")
async def me(current_user: CurrentUser = Depends(get_current_user)) -> MeResponse:
    return MeResponse(
        id=current_user.user_id,
        email=current_user.email,
        role=current_user.role,
        is_suspended=current_user.is_suspended,
        is_admin=current_user.is_admin(),
    )
