"""Pydantic schemas for API request/response validation."""

from .consulta import (
    ConsultaRequestSchema,
    ConsultaResponseSchema,
    ConsultaMultipleRequestSchema,
    ConsultaMultipleResponseSchema,
    ConsultaItemSchema,
    MediumRiskSchema,
    Situation5Schema,
)
from .error import ErrorResponseSchema

__all__ = [
    "ConsultaRequestSchema",
    "ConsultaResponseSchema",
    "ConsultaMultipleRequestSchema",
    "ConsultaMultipleResponseSchema",
    "ConsultaItemSchema",
    "MediumRiskSchema",
    "Situation5Schema",
    "ErrorResponseSchema",
]
