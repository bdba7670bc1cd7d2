"""Dependency injection for FastAPI."""

from typing import Annotated, Any

import structlog
from fastapi import Depends

from riesgo_gateway.application.services import ConsultaService
from riesgo_gateway.core.config import settings
from riesgo_gateway.domain.interfaces import BureauAPIClient
from riesgo_gateway.infrastructure.clients import HttpBureauAPIClient


# External client dependencies
def get_bureau_client() -> BureauAPIClient:
    """Get a BureauAPIClient instance."""
    return HttpBureauAPIClient()


def get_situation5_logger() -> Any:
    """Get the Situación 5 trace logger, or None when tracing is disabled."""
    if settings.debug_situacion5:
        return structlog.get_logger("riesgo_gateway.situacion5")
    return None


# Service dependencies
def get_consulta_service(
    bureau_client: Annotated[BureauAPIClient, Depends(get_bureau_client)],
    situation5_logger: Annotated[Any, Depends(get_situation5_logger)],
) -> ConsultaService:
    """Get a ConsultaService instance with all dependencies."""
    return ConsultaService(
        bureau_client=bureau_client,
        situation5_logger=situation5_logger,
    )
