# 📄 File: recovery_directory/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how account records are laid out in the database table.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the users table, keyed by the auth platform's user id.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - shared.infrastructure.database.connection (Base)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py (CRUD operations)
# - migrations (schema generation)

from sqlalchemy import Boolean, Column, DateTime, Index, String, func

from recovery_directory.shared.infrastructure.database.connection import Base


class UserModel(Base):
    """SQLAlchemy model for directory accounts."""
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, comment="Auth platform user id (JWT sub)")
    email = Column(String(255), nullable=True, index=True, comment="Lowercased email address")
    role = Column(String(20), nullable=False, default="user", comment="user | owner | admin")
    is_suspended = Column(Boolean, nullable=False, default=False, comment="Suspended accounts are refused by the API")

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    last_login = Column(DateTime(timezone=True), nullable=True, comment="Most recent sign-in")

    __table_args__ = (
        Index("ix_users_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, role={self.role})>"
