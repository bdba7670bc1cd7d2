"""Error handling middleware and exception handlers."""

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from riesgo_gateway.domain.exceptions import (
    DomainException,
    InvalidDocumentException,
    ReportUnavailableException,
    BureauAPIException,
    BureauAPITimeoutException,
    BureauConfigurationException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_content(exc: DomainException, message: str | None = None) -> Dict[str, Any]:
    content: Dict[str, Any] = {
        "error": exc.code,
        "message": message or exc.message,
    }
    if exc.codigo:
        content["codigo"] = exc.codigo
    content["request_id"] = get_request_id()
    return content


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(InvalidDocumentException)
    async def invalid_document_handler(
        request: Request,
        exc: InvalidDocumentException,
    ) -> JSONResponse:
        """Handle document validation errors."""
        return JSONResponse(status_code=400, content=_error_content(exc))

    @app.exception_handler(ReportUnavailableException)
    async def report_unavailable_handler(
        request: Request,
        exc: ReportUnavailableException,
    ) -> JSONResponse:
        """Handle bureau answers without a report."""
        logger.warning(
            "report_unavailable",
            codigo=exc.codigo,
        )
        return JSONResponse(status_code=400, content=_error_content(exc))

    @app.exception_handler(BureauAPITimeoutException)
    async def bureau_timeout_handler(
        request: Request,
        exc: BureauAPITimeoutException,
    ) -> JSONResponse:
        """Handle bureau API timeout errors."""
        logger.error("bureau_api_timeout", path=request.url.path)
        return JSONResponse(
            status_code=503,
            content=_error_content(
                exc,
                "Servicio temporalmente no disponible. Intente nuevamente.",
            ),
        )

    @app.exception_handler(BureauAPIException)
    async def bureau_error_handler(
        request: Request,
        exc: BureauAPIException,
    ) -> JSONResponse:
        """Handle bureau API errors."""
        logger.error(
            "bureau_api_error",
            message=exc.message,
            status_code=exc.status_code,
            codigo=exc.codigo,
        )
        return JSONResponse(status_code=503, content=_error_content(exc))

    @app.exception_handler(BureauConfigurationException)
    async def bureau_configuration_handler(
        request: Request,
        exc: BureauConfigurationException,
    ) -> JSONResponse:
        """Handle a bureau client without credentials."""
        logger.error("bureau_not_configured")
        return JSONResponse(status_code=500, content=_error_content(exc))

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            code=exc.code,
            message=exc.message,
        )
        return JSONResponse(status_code=400, content=_error_content(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "Error interno del servidor",
                "request_id": get_request_id(),
            },
        )
