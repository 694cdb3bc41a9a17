# 📄 File: recovery_directory/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick checkup for the directory service: is it running, can it reach its database,
# and is the machine it runs on under strain.
# 🧪 Purpose (Technical Summary):
# Health, liveness and readiness endpoints for load balancers and orchestration, with
# a detailed report covering database connectivity and host resource usage.
# 🔗 Dependencies:
# FastAPI, psutil, shared.infrastructure.database.connection, shared.config.settings
# 🔄 Connected Modules / Calls From:
# recovery_directory.main (mounted at / and /api/v1)

import logging
from datetime import datetime, timezone
from typing import Any, Dict

import psutil
from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from recovery_directory.shared.config.settings import get_settings
from recovery_directory.shared.infrastructure.database.connection import database_health_check
from recovery_directory.shared.utils.logging import SERVICE_NAME

logger = logging.getLogger(__name__)

health_router = APIRouter()

_app_start_time = datetime.now(timezone.utc)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _get_system_metrics() -> Dict[str, Any]:
    memory = psutil.virtual_memory()
    disk = psutil.disk_usage("/")
    return {
        "status": "ok",
        "cpu_percent": psutil.cpu_percent(interval=None),
        "memory_percent": memory.percent,
        "disk_percent": disk.percent,
        "timestamp": _now(),
    }


@health_router.get("/health", summary="Basic Health Check", tags=["Health Check"])
async def health_check() -> JSONResponse:
    """Cheap OK for load balancers."""
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": _now(),
            "service": SERVICE_NAME,
            "version": get_settings().APP_VERSION,
        },
    )


@health_router.get("/health/detailed", summary="Detailed Health Check", tags=["Health Check"])
async def detailed_health_check() -> JSONResponse:
    """
    Database connectivity plus host metrics.

    "degraded" still answers 200; only an unreachable database gives 503.
    """
    started = datetime.now(timezone.utc)
    overall_status = "healthy"
    components: Dict[str, Any] = {}

    db_health = await database_health_check()
    components["database"] = db_health
    if db_health.get("status") != "healthy":
        overall_status = "unhealthy"

    try:
        metrics = _get_system_metrics()
        components["system"] = metrics
        if metrics["cpu_percent"] > 90 or metrics["memory_percent"] > 90 or metrics["disk_percent"] > 95:
            if overall_status == "healthy":
                overall_status = "degraded"
    except (OSError, psutil.Error) as e:
        components["system"] = {"status": "error", "error": str(e), "timestamp": _now()}
        if overall_status == "healthy":
            overall_status = "degraded"

    now = datetime.now(timezone.utc)
    return JSONResponse(
        status_code=503 if overall_status == "unhealthy" else 200,
        content={
            "status": overall_status,
            "timestamp": now.isoformat(),
            "service": SERVICE_NAME,
            "version": get_settings().APP_VERSION,
            "uptime_seconds": (now - _app_start_time).total_seconds(),
            "response_time_seconds": (now - started).total_seconds(),
            "components": components,
        },
    )


@health_router.get("/health/live", summary="Liveness Probe", tags=["Health Check"])
async def liveness_probe() -> Response:
    return Response(status_code=200, content="OK")


@health_router.get("/health/ready", summary="Readiness Probe", tags=["Health Check"])
async def readiness_probe() -> JSONResponse:
    """Ready only when the database answers."""
    db_health = await database_health_check()
    if db_health.get("status") == "healthy":
        return JSONResponse(status_code=200, content={"status": "ready", "timestamp": _now()})
    logger.warning(f"Readiness check failed: {db_health}")
    return JSONResponse(status_code=503, content={"status": "not_ready", "timestamp": _now(), "database": db_health})
