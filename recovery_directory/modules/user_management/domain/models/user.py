# 📄 File: recovery_directory/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Describes a person with an account on the directory: their email, whether they are a
# regular visitor, a facility owner or an admin, and whether their account is suspended.
# 🧪 Purpose (Technical Summary):
# User domain model with role enumeration, suspension flag, login tracking and the
# aggregate statistics value object used by the admin dashboard.
# 🔗 Dependencies:
# pydantic, datetime, enum, shared.utils.helpers
# 🔄 Connected Modules / Calls From:
# user_service.py, auth_service.py, user_repository.py, shared.core.dependencies

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recovery_directory.shared.utils.helpers import utc_now


class UserRole(str, Enum):
    """Account roles; admins moderate, owners manage their listings"""
    USER = "user"
    OWNER = "owner"
    ADMIN = "admin"


class User(BaseModel):
    """
    A directory account.

    The id is the auth platform's user id (the JWT "sub"), so records are
    created lazily the first time a signed-in user reaches the API.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    email: Optional[str] = None
    role: UserRole = UserRole.USER
    is_suspended: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    last_login: Optional[datetime] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v else v

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def touch(self) -> None:
        self.updated_at = utc_now()


class UserStats(BaseModel):
    """Dashboard counters for the admin user screen"""
    total_users: int = 0
    new_users_this_month: int = 0
    active_users: int = 0
    last_login: Optional[datetime] = None
