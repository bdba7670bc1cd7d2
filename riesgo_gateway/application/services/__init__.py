"""Application services (use cases)."""

from .consulta_service import ConsultaService

__all__ = [
    "ConsultaService",
]
