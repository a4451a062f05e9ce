# app/api/health.py
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.database import get_database
from app.core.exceptions import StoreError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Health"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
def health_check(request: Request):
    database = get_database(request)
    try:
        database.ping()
    except StoreError as e:
        logger.error(f"🏥 Health check failed: {e.details or e.error}")
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "error": e.details or e.error, "timestamp": _now_iso()},
        )

    return {
        "status": "healthy",
        "timestamp": _now_iso(),
        "database": "connected",
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": request.app.state.settings.environment,
    }
