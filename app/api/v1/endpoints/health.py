"""Health check endpoints, used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.domain.exceptions import SqlNotConfiguredException
from app.infrastructure.persistence.database import get_session_factory
from app.schemas.health import HealthResponse, ReadinessResponse
from app.shared.telemetry.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database not reachable", "model": ReadinessResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers; 503 when it is not configured or unreachable."""
    try:
        session_factory = get_session_factory()
    except SqlNotConfiguredException:
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="not_ready", database="not_configured").model_dump(),
        )
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Readiness check failed: %s", type(e).__name__)
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="not_ready", database="unavailable").model_dump(),
        )
    return ReadinessResponse()
