# app/api/routes/health.py
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.core.config import get_settings

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """
    Response schema for the health check endpoint.
    """

    status: str = Field(..., description="Overall service status.", example="ok")
    app_name: str = Field(..., description="Name of the running application.", example="Attendance Recap")
    environment: str = Field(..., description="Deployment environment.", example="local")
    default_rate_mode: str = Field(
        ...,
        description="Org-wide rate formula applied when a request does not choose one.",
        example="CENSUS",
    )
    timestamp_utc: datetime = Field(
        ...,
        description="Server time (UTC) when the check ran.",
        example="2025-11-01T10:30:00Z",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check for the Attendance Recap service",
    description=(
        "Liveness probe. Does not touch the database, so it keeps answering "
        "while storage is degraded."
    ),
)
async def health_check() -> HealthResponse:
    settings = get_settings()
    return HealthResponse(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        default_rate_mode=settings.RECAP_RATE_MODE.value,
        timestamp_utc=datetime.now(tz=timezone.utc),
    )
