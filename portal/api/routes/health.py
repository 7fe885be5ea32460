from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from fastapi import APIRouter
from portal.core.config import get_settings

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


def check_timezone(name: str) -> dict:
    """Schedules are read in this zone; a missing tz database silently shifts them."""
    try:
        ZoneInfo(name)
    except ZoneInfoNotFoundError:
        return {"status": "error", "message": f"Unknown timezone {name}"}
    return {"status": "ok", "timezone": name}


@router.get("/health", summary="Service health probe")
async def health_check() -> dict:
    """Return basic service status information."""
    settings = get_settings()

    timezone_status = check_timezone(settings.schedule_timezone)
    overall_status = "ok" if timezone_status["status"] == "ok" else "degraded"

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "environment": settings.environment,
        "status": overall_status,
        "timestamp": datetime.now(UTC).isoformat(),
        "checks": {"schedule_timezone": timezone_status},
    }
    logger.info("health_probe", **payload)
    return payload
