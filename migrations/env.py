# 📄 File: migrations/env.py
# 🧭 Purpose (Layman Explanation):
# Configuration file that tells Alembic how to connect to the database and
# create or update the directory tables safely in each environment.
# 🧪 Purpose (Technical Summary):
# Alembic environment for the Recovery Directory: async (asyncpg) online migrations,
# offline SQL rendering, model imports for autogenerate, and filtering of the
# Supabase-managed schemas.
# 🔗 Dependencies:
# - alembic (migration tool)
# - SQLAlchemy (ORM, async engine)
# - asyncpg (PostgreSQL async driver)
# - python-dotenv (environment variables)
# 🔄 Connected Modules / Calls From:
# - alembic CLI commands (upgrade, downgrade, revision)
# - Development and production deployment

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

# Load environment variables
load_dotenv()

from recovery_directory.shared.infrastructure.database.connection import Base  # noqa: E402

# Import all module models to ensure they're included in autogenerate
from recovery_directory.modules.user_management.infrastructure.database.models import UserModel  # noqa: E402,F401
from recovery_directory.modules.facility_directory.infrastructure.database.models import (  # noqa: E402,F401
    FacilityModel,
    FeaturedLocationModel,
    TaxonomyTermModel,
)
from recovery_directory.modules.facility_claims.infrastructure.database.models import (  # noqa: E402,F401
    FacilityClaimModel,
)

# This is the Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set the target metadata for 'autogenerate' support
target_metadata = Base.metadata

SUPABASE_SCHEMAS = ('auth', 'storage', 'realtime', 'vault', 'extensions')


def get_database_url() -> str:
    """
    Get the async database URL from environment variables.

    Returns:
        str: Database connection URL
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        if database_url.startswith("postgresql://"):
            database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return database_url

    db_host = os.getenv("DB_HOST", "localhost")
    db_port = os.getenv("DB_PORT", "5432")
    db_user = os.getenv("DB_USER", "postgres")
    db_password = os.getenv("DB_PASSWORD", "")
    db_name = os.getenv("DB_NAME", "recovery_directory")

    return f"postgresql+asyncpg://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def include_object(object, name, type_, reflected, compare_to):
    """Skip objects that live in Supabase-managed schemas."""
    if getattr(object, 'schema', None) in SUPABASE_SCHEMAS:
        return False
    return True


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Calls to context.execute() here emit the given string to the script output.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations through an async engine."""
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


# Determine which mode to run migrations in
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
