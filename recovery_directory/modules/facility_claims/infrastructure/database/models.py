# 📄 File: recovery_directory/modules/facility_claims/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how ownership claims are laid out in the database table.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for facility_claims, with a cascading foreign key to facilities.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - shared.infrastructure.database.connection (Base)
#
# 🔄 Connected Modules / Calls From:
# - claim_repository_impl.py, migrations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, func

from recovery_directory.shared.infrastructure.database.connection import Base


class FacilityClaimModel(Base):
    __tablename__ = "facility_claims"

    id = Column(String(36), primary_key=True)
    facility_id = Column(String(36), ForeignKey("facilities.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending", index=True)

    name = Column(String(255), nullable=False)
    position = Column(String(255), nullable=False)
    website = Column(String(500), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)

    email_verified = Column(Boolean, nullable=False, default=False)
    email_matches_domain = Column(Boolean, nullable=False, default=False)

    admin_notes = Column(Text, nullable=True)
    reviewed_by = Column(String(64), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)

    dispute_reason = Column(Text, nullable=True)
    disputed_by = Column(String(64), nullable=True)
    disputed_at = Column(DateTime(timezone=True), nullable=True)
    dispute_resolution = Column(String(20), nullable=True)
    dispute_resolved_by = Column(String(64), nullable=True)
    dispute_resolved_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_facility_claims_facility_user_status", "facility_id", "user_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<FacilityClaimModel(id={self.id}, facility_id={self.facility_id}, status={self.status})>"
