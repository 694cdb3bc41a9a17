# 📄 File: recovery_directory/modules/facility_directory/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how listings, tag lists and featured cities are laid out in database tables.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for facilities, taxonomy_terms and featured_locations.
# Lists and taxonomy references are JSON columns so the same schema works on
# PostgreSQL and on SQLite in tests.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - shared.infrastructure.database.connection (Base)
#
# 🔄 Connected Modules / Calls From:
# - facility_repository_impl.py, taxonomy_repository_impl.py, location_repository_impl.py
# - migrations (schema generation)

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Index, Integer, String, Text, func

from recovery_directory.shared.infrastructure.database.connection import Base


class FacilityModel(Base):
    """SQLAlchemy model for facility listings."""
    __tablename__ = "facilities"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    location = Column(String(255), nullable=False, default="", comment="Display string 'City, State'")
    city = Column(String(120), nullable=False, default="")
    state = Column(String(120), nullable=False, default="")
    address = Column(String(500), nullable=True)
    coordinates = Column(JSON, nullable=True, comment="{lat, lng}")

    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(500), nullable=True)
    logo = Column(String(1000), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    highlights = Column(JSON, nullable=False, default=list)
    accreditation = Column(JSON, nullable=False, default=list)

    # Taxonomy references: [{id, name}, ...]
    treatment_types = Column(JSON, nullable=False, default=list)
    amenities = Column(JSON, nullable=False, default=list)
    conditions = Column(JSON, nullable=False, default=list)
    substances = Column(JSON, nullable=False, default=list)
    therapies = Column(JSON, nullable=False, default=list)
    languages = Column(JSON, nullable=False, default=list)
    insurances = Column(JSON, nullable=False, default=list)
    licenses = Column(JSON, nullable=False, default=list)

    rating = Column(Float, nullable=False, default=0)
    review_count = Column(Integer, nullable=False, default=0)

    moderation_status = Column(String(20), nullable=False, default="pending", index=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)

    owner_id = Column(String(64), nullable=True, index=True)
    slug = Column(String(160), nullable=False, default="", index=True)

    subscription_id = Column(String(255), nullable=True)
    subscription_status = Column(String(20), nullable=False, default="none")

    claim_status = Column(String(20), nullable=False, default="unclaimed")
    active_claim_id = Column(String(36), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_facilities_status_created", "moderation_status", "created_at", "id"),
    )

    def __repr__(self) -> str:
        return f"<FacilityModel(id={self.id}, name={self.name}, status={self.moderation_status})>"


class TaxonomyTermModel(Base):
    """One row per term; kind says which of the eight lists it belongs to."""
    __tablename__ = "taxonomy_terms"

    id = Column(String(36), primary_key=True)
    kind = Column(String(32), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    logo = Column(String(1000), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self) -> str:
        return f"<TaxonomyTermModel(kind={self.kind}, name={self.name})>"


class FeaturedLocationModel(Base):
    __tablename__ = "featured_locations"

    id = Column(String(36), primary_key=True)
    city = Column(String(120), nullable=False)
    state = Column(String(120), nullable=False)
    image = Column(String(1000), nullable=True)
    total_listings = Column(Integer, nullable=False, default=0)
    coordinates = Column(JSON, nullable=True)
    is_featured = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self) -> str:
        return f"<FeaturedLocationModel(city={self.city}, state={self.state}, order={self.display_order})>"
