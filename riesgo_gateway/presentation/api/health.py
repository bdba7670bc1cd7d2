"""Health check endpoint for service monitoring."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from riesgo_gateway import __version__
from riesgo_gateway.core.config import settings

health_router = APIRouter()


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    version: str
    ts: str


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        service=settings.app_name,
        version=__version__,
        ts=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
