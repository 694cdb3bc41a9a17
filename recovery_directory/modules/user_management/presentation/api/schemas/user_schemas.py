# 📄 File: recovery_directory/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# What account information the admin screens see, and the forms admins use to
# change someone's email or role.
#
# 🧪 Purpose (Technical Summary):
# Pydantic schemas for the admin /users endpoints: account view, partial update,
# role change and dashboard statistics.
#
# 🔗 Dependencies:
# - pydantic (EmailStr)
# - user_management.domain.models.user
#
# 🔄 Connected Modules / Calls From:
# - presentation/api/v1/users.py, presentation/api/schemas/auth_schemas.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from recovery_directory.modules.user_management.domain.models.user import UserRole


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: Optional[str] = None
    role: UserRole
    is_suspended: bool
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None


class UserUpdateRequest(BaseModel):
    """Partial update; omitted fields are left unchanged."""
    email: Optional[EmailStr] = Field(None, description="New email address")
    role: Optional[UserRole] = Field(None, description="New role")


class UserRoleRequest(BaseModel):
    role: UserRole = Field(..., description="user | owner | admin")


class UserStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_users: int
    new_users_this_month: int
    active_users: int
    last_login: Optional[datetime] = None
