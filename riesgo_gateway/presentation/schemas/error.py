"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["INVALID_DOCUMENT"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Error interno, código 13 (CUIT/CUIL o DNI inválido). Consulte a un administrador."],
    )
    codigo: int | None = Field(
        None,
        description="InfoExperto error code (11-20), when one applies",
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "INVALID_DOCUMENT",
                    "message": "Error interno, código 13 (CUIT/CUIL o DNI inválido). Consulte a un administrador.",
                    "codigo": 13,
                    "request_id": "abc123",
                }
            ]
        }
    }
