# 📄 File: recovery_directory/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The switchboard for version 1 of the API: sends each request to the part of the
# directory that handles it (listings, claims, accounts, payments and so on).
# 🧪 Purpose (Technical Summary):
# Aggregates every module router under its prefix and tag, and exposes a small
# API info endpoint listing the mounted modules.
# 🔗 Dependencies:
# FastAPI, all module presentation routers, api.v1.health
# 🔄 Connected Modules / Calls From:
# recovery_directory.main (mounted at /api/v1)

import logging

from fastapi import APIRouter

from recovery_directory.api.v1.health import health_router
from recovery_directory.modules.facility_claims.presentation.api.v1.claims import claims_router
from recovery_directory.modules.facility_directory.presentation.api.v1.admin_facilities import admin_facilities_router
from recovery_directory.modules.facility_directory.presentation.api.v1.facilities import facilities_router
from recovery_directory.modules.facility_directory.presentation.api.v1.locations import locations_router
from recovery_directory.modules.facility_directory.presentation.api.v1.taxonomies import taxonomies_router
from recovery_directory.modules.subscriptions.presentation.api.v1.payments import payments_router
from recovery_directory.modules.user_management.presentation.api.v1.auth import auth_router
from recovery_directory.modules.user_management.presentation.api.v1.users import users_router
from recovery_directory.shared.config.settings import get_settings

logger = logging.getLogger(__name__)

ROUTE_PREFIXES = {
    "auth": "/auth",
    "users": "/users",
    "facilities": "/facilities",
    "admin_facilities": "/admin/facilities",
    "taxonomies": "/taxonomies",
    "locations": "/locations",
    "claims": "/claims",
    "payments": "/payments",
}

API_TAGS = [
    {"name": "Authentication", "description": "Sign-in, sign-up and session management"},
    {"name": "Users", "description": "Admin account management"},
    {"name": "Facilities", "description": "Public listings and owner listing management"},
    {"name": "Admin Facilities", "description": "Listing moderation"},
    {"name": "Taxonomies", "description": "Amenities, conditions, therapies and other term lists"},
    {"name": "Locations", "description": "Featured homepage locations"},
    {"name": "Claims", "description": "Facility ownership claims and disputes"},
    {"name": "Payments", "description": "Stripe listing subscriptions"},
    {"name": "Health Check", "description": "Liveness and readiness"},
]

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["Health Check"])
api_v1_router.include_router(auth_router, prefix=ROUTE_PREFIXES["auth"], tags=["Authentication"])
api_v1_router.include_router(users_router, prefix=ROUTE_PREFIXES["users"], tags=["Users"])
api_v1_router.include_router(facilities_router, prefix=ROUTE_PREFIXES["facilities"], tags=["Facilities"])
api_v1_router.include_router(
    admin_facilities_router, prefix=ROUTE_PREFIXES["admin_facilities"], tags=["Admin Facilities"]
)
api_v1_router.include_router(taxonomies_router, prefix=ROUTE_PREFIXES["taxonomies"], tags=["Taxonomies"])
api_v1_router.include_router(locations_router, prefix=ROUTE_PREFIXES["locations"], tags=["Locations"])
api_v1_router.include_router(claims_router, prefix=ROUTE_PREFIXES["claims"], tags=["Claims"])
api_v1_router.include_router(payments_router, prefix=ROUTE_PREFIXES["payments"], tags=["Payments"])


@api_v1_router.get("/", summary="API v1 Information", tags=["API Info"])
async def api_v1_info() -> dict:
    settings = get_settings()
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "api_version": "v1",
        "modules": ROUTE_PREFIXES,
        "payments_enabled": settings.stripe_enabled,
    }
