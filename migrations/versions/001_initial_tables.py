"""Create directory tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create directory tables"""

    # 1. Create users table
    op.create_table('users',
        sa.Column('id', sa.String(64), nullable=False, comment='Auth platform user id (JWT sub)'),
        sa.Column('email', sa.String(255), nullable=True, comment='Lowercased email address'),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('is_suspended', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),

        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.CheckConstraint("role IN ('user', 'owner', 'admin')", name='ck_users_role'),
    )

    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    # 2. Create facilities table
    op.create_table('facilities',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('location', sa.String(255), nullable=False, server_default=''),
        sa.Column('city', sa.String(120), nullable=False, server_default=''),
        sa.Column('state', sa.String(120), nullable=False, server_default=''),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('coordinates', sa.JSON(), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('website', sa.String(500), nullable=True),
        sa.Column('logo', sa.String(1000), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('highlights', sa.JSON(), nullable=False),
        sa.Column('accreditation', sa.JSON(), nullable=False),
        sa.Column('treatment_types', sa.JSON(), nullable=False),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('conditions', sa.JSON(), nullable=False),
        sa.Column('substances', sa.JSON(), nullable=False),
        sa.Column('therapies', sa.JSON(), nullable=False),
        sa.Column('languages', sa.JSON(), nullable=False),
        sa.Column('insurances', sa.JSON(), nullable=False),
        sa.Column('licenses', sa.JSON(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('review_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('moderation_status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('owner_id', sa.String(64), nullable=True),
        sa.Column('slug', sa.String(160), nullable=False, server_default=''),
        sa.Column('subscription_id', sa.String(255), nullable=True),
        sa.Column('subscription_status', sa.String(20), nullable=False, server_default='none'),
        sa.Column('claim_status', sa.String(20), nullable=False, server_default='unclaimed'),
        sa.Column('active_claim_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_facilities'),
        sa.CheckConstraint(
            "moderation_status IN ('pending', 'approved', 'rejected', 'archived')",
            name='ck_facilities_moderation_status'
        ),
        sa.CheckConstraint(
            "claim_status IN ('unclaimed', 'claimed', 'disputed')",
            name='ck_facilities_claim_status'
        ),
        sa.CheckConstraint(
            "subscription_status IN ('none', 'active', 'past_due', 'cancelled')",
            name='ck_facilities_subscription_status'
        ),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='ck_facilities_rating'),
    )

    op.create_index('ix_facilities_moderation_status', 'facilities', ['moderation_status'])
    op.create_index('ix_facilities_owner_id', 'facilities', ['owner_id'])
    op.create_index('ix_facilities_slug', 'facilities', ['slug'])
    op.create_index('ix_facilities_status_created', 'facilities', ['moderation_status', 'created_at', 'id'])

    # 3. Create taxonomy_terms table
    op.create_table('taxonomy_terms',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('kind', sa.String(32), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('logo', sa.String(1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_taxonomy_terms'),
    )

    op.create_index('ix_taxonomy_terms_kind', 'taxonomy_terms', ['kind'])

    # 4. Create featured_locations table
    op.create_table('featured_locations',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('city', sa.String(120), nullable=False),
        sa.Column('state', sa.String(120), nullable=False),
        sa.Column('image', sa.String(1000), nullable=True),
        sa.Column('total_listings', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('coordinates', sa.JSON(), nullable=True),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_featured_locations'),
    )

    op.create_index('ix_featured_locations_display_order', 'featured_locations', ['display_order'])

    # 5. Create facility_claims table
    op.create_table('facility_claims',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('facility_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('position', sa.String(255), nullable=False),
        sa.Column('website', sa.String(500), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_matches_domain', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('reviewed_by', sa.String(64), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('dispute_reason', sa.Text(), nullable=True),
        sa.Column('disputed_by', sa.String(64), nullable=True),
        sa.Column('disputed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('dispute_resolution', sa.String(20), nullable=True),
        sa.Column('dispute_resolved_by', sa.String(64), nullable=True),
        sa.Column('dispute_resolved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_facility_claims'),
        sa.ForeignKeyConstraint(
            ['facility_id'], ['facilities.id'],
            name='fk_facility_claims_facility_id_facilities',
            ondelete='CASCADE'
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'disputed')",
            name='ck_facility_claims_status'
        ),
    )

    op.create_index('ix_facility_claims_facility_id', 'facility_claims', ['facility_id'])
    op.create_index('ix_facility_claims_user_id', 'facility_claims', ['user_id'])
    op.create_index('ix_facility_claims_status', 'facility_claims', ['status'])
    op.create_index(
        'ix_facility_claims_facility_user_status',
        'facility_claims',
        ['facility_id', 'user_id', 'status']
    )


def downgrade() -> None:
    """Drop directory tables"""
    op.drop_table('facility_claims')
    op.drop_table('featured_locations')
    op.drop_table('taxonomy_terms')
    op.drop_table('facilities')
    op.drop_table('users')
