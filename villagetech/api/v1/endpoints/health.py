"""Health check endpoints: liveness and database readiness."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from villagetech.api.v1.dependencies import SessionFactory, get_session_factory
from villagetech.core.config import get_settings
from villagetech.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    settings = get_settings()
    return HealthResponse(app=settings.app_name, version=settings.app_version)


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable"}},
)
async def readiness_check(
    session_factory: Annotated[SessionFactory, Depends(get_session_factory)],
) -> HealthResponse | JSONResponse:
    """Return 200 when the database answers a trivial query, else 503."""
    settings = get_settings()
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "app": settings.app_name, "version": settings.app_version},
        )
    return HealthResponse(app=settings.app_name, version=settings.app_version)
