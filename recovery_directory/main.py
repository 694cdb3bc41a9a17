# 📄 File: recovery_directory/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the Recovery Directory service, plugs all the
# parts together (listings, claims, accounts, payments) and gets them ready to
# answer requests from the website and the admin dashboard.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: lifespan (logging, database, Supabase
# cleanup), middleware stack, repository and adapter bindings through
# dependency_overrides, exception handlers, and router registration.
#
# 🔗 Dependencies:
# - FastAPI, uvicorn, slowapi
# - recovery_directory.shared.config.settings
# - recovery_directory.shared.infrastructure.database
# - All module routers through api.v1.router
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - Docker container entry point
# - tests (create_application)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from recovery_directory.api.middleware.authentication import AuthenticationMiddleware
from recovery_directory.api.middleware.error_handling import ErrorHandlingMiddleware, create_error_response
from recovery_directory.api.v1.health import health_router
from recovery_directory.api.v1.router import api_v1_router
from recovery_directory.modules.facility_claims.domain.repositories.claim_repository import ClaimRepository
from recovery_directory.modules.facility_claims.infrastructure.database.claim_repository_impl import ClaimRepositoryImpl
from recovery_directory.modules.facility_directory.domain.repositories.facility_repository import FacilityRepository
from recovery_directory.modules.facility_directory.domain.repositories.location_repository import LocationRepository
from recovery_directory.modules.facility_directory.domain.repositories.taxonomy_repository import TaxonomyRepository
from recovery_directory.modules.facility_directory.infrastructure.database.facility_repository_impl import (
    FacilityRepositoryImpl,
)
from recovery_directory.modules.facility_directory.infrastructure.database.location_repository_impl import (
    LocationRepositoryImpl,
)
from recovery_directory.modules.facility_directory.infrastructure.database.taxonomy_repository_impl import (
    TaxonomyRepositoryImpl,
)
from recovery_directory.modules.subscriptions.infrastructure.external.stripe_gateway import (
    StripeGateway,
    StripePaymentGateway,
)
from recovery_directory.modules.user_management.domain.repositories.user_repository import UserRepository
from recovery_directory.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from recovery_directory.modules.user_management.infrastructure.external.supabase_auth import (
    AuthProvider,
    SupabaseAuthProvider,
)
from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.config.supabase import cleanup_supabase
from recovery_directory.shared.core.exceptions import RateLimitError, RecoveryDirectoryException
from recovery_directory.shared.core.rate_limiter import limiter
from recovery_directory.shared.infrastructure.database.connection import close_database, init_database
from recovery_directory.shared.infrastructure.database.session import initialize_sessions
from recovery_directory.shared.utils.logging import setup_logging

# Get application settings
settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database pool and session factory on startup, and releases
    database and Supabase clients on shutdown.
    """
    setup_logging()
    logger.info("🧭 Recovery Directory API starting up...")

    try:
        await init_database()
        logger.info("✅ Database connection initialized")

        initialize_sessions()
        logger.info("✅ Session manager initialized")

        if not settings.stripe_enabled:
            logger.warning("⚠️ Stripe is not configured; checkout endpoints will refuse requests")

        logger.info("✅ Recovery Directory API startup complete")

        yield  # Application is running

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    finally:
        logger.info("🔄 Recovery Directory API shutting down...")

        try:
            await close_database()
            logger.info("✅ Database connections closed")

            await cleanup_supabase()
            logger.info("✅ Supabase clients released")

            logger.info("✅ Recovery Directory API shutdown complete")

        except Exception as e:
            logger.error(f"❌ Shutdown error: {e}")


def create_application() -> FastAPI:
    """
    Application factory function.

    Creates and configures the FastAPI application with middleware,
    adapter bindings, exception handlers and routers.

    Returns:
        FastAPI: Configured FastAPI application instance
    """

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.ENABLE_SWAGGER_UI else None,
        redoc_url="/redoc" if settings.ENABLE_REDOC else None,
        openapi_url="/openapi.json" if (settings.ENABLE_SWAGGER_UI or settings.ENABLE_REDOC) else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    # Global rate limit; per-route limits are declared with @limiter.limit
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    # Authentication middleware (optional token verification)
    app.add_middleware(AuthenticationMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # GZip compression middleware
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Error handling middleware (added last so it wraps everything)
    app.add_middleware(ErrorHandlingMiddleware)

    # Bind each port to its production adapter.
    app.dependency_overrides[UserRepository] = UserRepositoryImpl
    app.dependency_overrides[FacilityRepository] = FacilityRepositoryImpl
    app.dependency_overrides[TaxonomyRepository] = TaxonomyRepositoryImpl
    app.dependency_overrides[LocationRepository] = LocationRepositoryImpl
    app.dependency_overrides[ClaimRepository] = ClaimRepositoryImpl
    app.dependency_overrides[AuthProvider] = SupabaseAuthProvider
    app.dependency_overrides[StripeGateway] = StripePaymentGateway

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    # Health check routes (no prefix) for load balancers
    app.include_router(health_router, tags=["Health Check"], include_in_schema=False)

    app.include_router(api_v1_router, prefix="/api/v1")

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(RecoveryDirectoryException)
    async def recovery_directory_exception_handler(
        request: Request,
        exc: RecoveryDirectoryException
    ) -> JSONResponse:
        """Render domain exceptions in the standard error envelope."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
        return create_error_response(
            exc.status_code,
            exc.error_code,
            exc.message,
            exc.details,
            getattr(request.state, "request_id", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        return create_error_response(
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            {"errors": jsonable_encoder(exc.errors())},
            getattr(request.state, "request_id", None),
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        error = RateLimitError("Too many requests, please slow down", limit=str(exc.detail))
        logger.warning(f"Rate limit hit on {request.url.path}: {exc.detail}")
        return create_error_response(
            error.status_code,
            error.error_code,
            error.message,
            error.details,
            getattr(request.state, "request_id", None),
        )

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.ENABLE_SWAGGER_UI else None,
            "health_check": "/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


# Create the FastAPI application
app = create_application()


def main():
    """Run the application with uvicorn for local development."""
    uvicorn.run(
        "recovery_directory.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
