"""
Health Check Routes - Liveness and readiness endpoints.

/health only proves the process answers; /health/ready also reads one
row from the earmarks table.
"""
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src import __version__
from src.core.logging_config import get_logger
from src.database.repository import get_earmark_repository
from src.models.api import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get("", response_model=HealthResponse, summary="Health check endpoint")
async def health_check() -> HealthResponse:
    logger.debug("Health check requested")
    return HealthResponse(status="healthy", version=__version__, timestamp=datetime.utcnow())


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    description="Returns 200 when the earmark database is reachable, 503 otherwise.",
)
def readiness_check():
    logger.debug("Readiness check requested")

    if not get_earmark_repository().check():
        logger.warning("Readiness check failed: database unreachable")
        return JSONResponse(
            status_code=503,
            content=HealthResponse(status="unavailable", version=__version__).model_dump(mode="json"),
        )

    return HealthResponse(status="ready", version=__version__, timestamp=datetime.utcnow())
