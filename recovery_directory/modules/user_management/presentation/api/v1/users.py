# 📄 File: recovery_directory/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# The admin screens for people: see everyone who has an account, change their role,
# suspend troublemakers and send password reset emails.
# 🧪 Purpose (Technical Summary):
# Admin-only /users router over UserService. Every route depends on
# get_current_admin_user so the role check happens server side.
# 🔗 Dependencies:
# FastAPI, UserService, user schemas, shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# recovery_directory.api.v1.router

import logging
from typing import List

from fastapi import APIRouter, Depends

from recovery_directory.modules.user_management.domain.services.user_service import UserService
from recovery_directory.modules.user_management.presentation.api.schemas.auth_schemas import MessageResponse
from recovery_directory.modules.user_management.presentation.api.schemas.user_schemas import (
    UserResponse,
    UserRoleRequest,
    UserStatsResponse,
    UserUpdateRequest,
)
from recovery_directory.shared.core.dependencies import CurrentUser, get_current_admin_user
from recovery_directory.shared.core.exceptions import BusinessRuleViolationError

logger = logging.getLogger(__name__)

users_router = APIRouter()


@users_router.get("/", response_model=List[UserResponse], summary="List all users (admin)")
async def list_users(
    admin: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> List[UserResponse]:
    users = await user_service.list_users()
    return [UserResponse.model_validate(u) for u in users]


@users_router.get("/stats", response_model=UserStatsResponse, summary="User statistics (admin)")
async def get_user_stats(
    admin: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> UserStatsResponse:
    return UserStatsResponse.model_validate(await user_service.get_user_stats())


@users_router.get("/{user_id}", response_model=UserResponse, summary="Get a user (admin)")
async def get_user(
    user_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> UserResponse:
    return UserResponse.model_validate(await user_service.get_user(user_id))


@users_router.patch("/{user_id}", response_model=UserResponse, summary="Update a user (admin)")
async def update_user(
    user_id: str,
    changes: UserUpdateRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> UserResponse:
    user = await user_service.update_user(user_id, email=changes.email, role=changes.role)
    return UserResponse.model_validate(user)


@users_router.put("/{user_id}/role", response_model=UserResponse, summary="Change a user's role (admin)")
async def update_user_role(
    user_id: str,
    body: UserRoleRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> UserResponse:
    return UserResponse.model_validate(await user_service.update_user_role(user_id, body.role))


@users_router.post("/{user_id}/suspend", response_model=UserResponse, summary="Suspend a user (admin)")
async def suspend_user(
    user_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> UserResponse:
    if user_id == admin.user_id:
        raise BusinessRuleViolationError("Admins cannot suspend themselves", rule="self_suspension")
    return UserResponse.model_validate(await user_service.suspend_user(user_id))


@users_router.post("/{user_id}/unsuspend", response_model=UserResponse, summary="Lift a suspension (admin)")
async def unsuspend_user(
    user_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> UserResponse:
    return UserResponse.model_validate(await user_service.unsuspend_user(user_id))


@users_router.post(
    "/{user_id}/reset-password",
    response_model=MessageResponse,
    summary="Send a password reset email to a user (admin)",
)
async def reset_user_password(
    user_id: str,
    admin: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> MessageResponse:
    await user_service.reset_user_password(user_id)
    logger.info(f"Admin {admin.user_id} sent a password reset to user {user_id}")
    return MessageResponse(message="Password reset email sent")
