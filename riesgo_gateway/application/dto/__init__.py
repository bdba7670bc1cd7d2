"""Data Transfer Objects for application layer."""

from .consulta import (
    ConsultaItemResult,
    ConsultaMultipleResponse,
    ConsultaResponse,
    MediumRiskDTO,
    MediumRiskMetricsDTO,
    Situation5DebugDTO,
    Situation5DTO,
)

__all__ = [
    "ConsultaItemResult",
    "ConsultaMultipleResponse",
    "ConsultaResponse",
    "MediumRiskDTO",
    "MediumRiskMetricsDTO",
    "Situation5DebugDTO",
    "Situation5DTO",
]
