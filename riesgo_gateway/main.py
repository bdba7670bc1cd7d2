"""
Riesgo Gateway - Main Application Entry Point

A credit-risk classification service that queries the InfoExperto bureau
and classifies each report into a risk tier, with an internal evaluation
for medium-risk subjects and the Situación 5 loan offer.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from riesgo_gateway import __version__
from riesgo_gateway.core.config import settings
from riesgo_gateway.core.logging import setup_logging
from riesgo_gateway.core.metrics import get_metrics, get_metrics_content_type
from riesgo_gateway.presentation.api import api_router
from riesgo_gateway.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Sets up logging and warns when the bureau API key is missing.
    """
    setup_logging(settings)

    logger = structlog.get_logger(__name__)
    logger.info("application_started", version=__version__)
    if not settings.infoexperto_api_key:
        logger.warning("bureau_api_key_missing")

    yield

    logger.info("application_stopped")


app = FastAPI(
    title="Riesgo Gateway",
    description="Credit-bureau risk classification service",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirect to API documentation."""

    return RedirectResponse(url="/docs")


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(
        "riesgo_gateway.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
