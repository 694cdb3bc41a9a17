# 📄 File: recovery_directory/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and hands them to the rest of the Recovery Directory in one organized place.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for database, Supabase, Stripe, and API parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - pydantic Field / field_validator for validation
#
# 🔄 Connected Modules / Calls From:
# - recovery_directory.main (application startup)
# - Database connection and storage modules
# - Stripe gateway, auth dependencies, rate limiter

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Settings are read from the process environment with fallback to a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Recovery Directory API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Directory of addiction treatment and recovery facilities",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="text", description="Log output format: text or json")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=True, description="Auto-reload on changes")

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DATABASE_URL: Optional[str] = Field(None, description="Async SQLAlchemy connection URL")
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")
    DB_NAME: str = Field(default="recovery_directory", description="Database name")
    DB_USER: str = Field(default="postgres", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")

    # Connection Pool Settings
    DB_POOL_SIZE: int = Field(default=10, description="Database pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Database pool overflow")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Database pool timeout")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database pool recycle time")

    # =========================================================================
    # SUPABASE (AUTH + STORAGE)
    # =========================================================================

    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_ANON_KEY: str = Field(..., description="Supabase anonymous key")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")
    SUPABASE_JWT_SECRET: str = Field(..., description="Secret used to sign Supabase access tokens")
    SUPABASE_STORAGE_BUCKET: str = Field(default="directory-media", description="Storage bucket name")

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_AUDIENCE: str = Field(default="authenticated", description="Expected JWT audience")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="CORS allow credentials")

    # =========================================================================
    # PAYMENTS
    # =========================================================================

    STRIPE_SECRET_KEY: str = Field(default="", description="Stripe secret key")
    STRIPE_WEBHOOK_SECRET: str = Field(default="", description="Stripe webhook signing secret")
    STRIPE_PRICE_ID: str = Field(default="", description="Stripe price for the listing subscription")
    FRONTEND_URL: str = Field(default="http://localhost:5173", description="Public site URL for redirects")

    # =========================================================================
    # DIRECTORY SETTINGS
    # =========================================================================

    MAX_IMAGE_SIZE: int = Field(default=5 * 1024 * 1024, description="Maximum upload size in bytes")
    DEFAULT_PAGE_SIZE: int = Field(default=10, description="Default listing page size")
    MAX_PAGE_SIZE: int = Field(default=50, description="Largest page size a client may request")
    ACTIVE_USER_WINDOW_DAYS: int = Field(default=30, description="Window for counting active users")

    # =========================================================================
    # RATE LIMITING
    # =========================================================================

    GLOBAL_RATE_LIMIT: str = Field(default="1000/minute", description="Global rate limit in '<limit>/<period>' format")
    CLAIM_RATE_LIMIT: str = Field(default="5/minute", description="Claim submission rate limit")
    AUTH_RATE_LIMIT: str = Field(default="10/minute", description="Sign-in rate limit")

    # =========================================================================
    # DEVELOPMENT TOOLS
    # =========================================================================

    ENABLE_SWAGGER_UI: bool = Field(default=True, description="Enable Swagger UI")
    ENABLE_REDOC: bool = Field(default=True, description="Enable ReDoc")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v.lower()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Validate JWT algorithm."""
        allowed_algorithms = ["HS256", "HS384", "HS512"]
        if v not in allowed_algorithms:
            raise ValueError(f"JWT algorithm must be one of {allowed_algorithms}")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        for origin in v.split(","):
            origin = origin.strip()
            if origin and origin != "*" and not origin.startswith(("http://", "https://")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def database_url(self) -> str:
        """Get the async database URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "test"

    @property
    def stripe_enabled(self) -> bool:
        """Stripe is usable only when both the key and the price are configured."""
        return bool(self.STRIPE_SECRET_KEY and self.STRIPE_PRICE_ID)


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache so settings are loaded once per process.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
