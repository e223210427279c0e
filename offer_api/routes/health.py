# offer_api/routes/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

import psutil
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from offer_api import __version__
from offer_api.core.config import settings
from offer_api.core.logging import get_structlog_logger
from offer_api.services.offer_store import OfferStore, get_offer_store

logger = get_structlog_logger(__name__)

router = APIRouter(tags=["health"])


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    environment: str
    version: str
    timestamp: str
    uptime: float
    checks: Dict[str, Dict[str, str]]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_offer_store(store: OfferStore) -> Dict[str, str]:
    """Check the in-memory offer store answers under its lock."""
    start_time = time.perf_counter()
    count = len(store)
    response_time = (time.perf_counter() - start_time) * 1000
    return {
        "status": "healthy",
        "response_time_ms": f"{response_time:.2f}",
        "offers": str(count),
    }


@router.get("/health", response_model=HealthCheckResponse, status_code=status.HTTP_200_OK)
def health_check(store: OfferStore = Depends(get_offer_store)):
    """Health check with offer store status."""
    checks = {"offer_store": check_offer_store(store)}
    overall_status = "healthy" if all(c["status"] == "healthy" for c in checks.values()) else "unhealthy"

    process = psutil.Process()
    uptime_seconds = time.time() - process.create_time()

    response = HealthCheckResponse(
        status=overall_status,
        service="offer_api",
        environment=settings.environment,
        version=__version__,
        timestamp=_timestamp(),
        uptime=uptime_seconds,
        checks=checks,
    )

    logger.info("health.check", status=overall_status, checks=checks)

    return response


@router.get("/health/live", status_code=status.HTTP_200_OK)
def liveness_probe():
    """Simple liveness probe for containers."""
    return {
        "status": "alive",
        "timestamp": _timestamp(),
    }
