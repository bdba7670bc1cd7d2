"""Bureau API-related domain exceptions."""

from typing import Optional

from .base import DomainException

BUREAU_ERROR_DESCRIPTIONS = {
    11: "Api_key inválida",
    12: "Faltan datos necesarios",
    13: "CUIT/CUIL o DNI inválido",
    14: "Corte del servicio",
    15: "Error al obtener el informe",
    16: "No se encontró información",
    17: "No se pudo generar el PDF",
    18: "No tiene acceso a ese recurso",
    19: "Dominio inválido",
    20: "Se encontró DNI con homónimos",
}


def describe_bureau_error(codigo: Optional[int], mensaje_api: Optional[str] = None) -> Optional[str]:
    """
    Build the user-facing message for an InfoExperto error code.

    Args:
        codigo: Numeric error code reported by the bureau
        mensaje_api: Bureau message, appended as the reason for code 14

    Returns:
        The message, or None when there is no code
    """
    if not codigo:
        return None

    description = BUREAU_ERROR_DESCRIPTIONS.get(codigo)
    if description is None:
        return f"Error interno, código {codigo}. Consulte a un administrador."

    if codigo == 14 and mensaje_api:
        description = f"{description}, motivo: {mensaje_api}"
    return f"Error interno, código {codigo} ({description}). Consulte a un administrador."


class BureauAPIException(DomainException):
    """Raised when the bureau API returns an error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        codigo: Optional[int] = None,
    ):
        super().__init__(
            message=message,
            code="BUREAU_API_ERROR",
            codigo=codigo,
        )
        self.status_code = status_code


class BureauAPITimeoutException(BureauAPIException):
    """Raised when the bureau API times out."""

    def __init__(self):
        super().__init__(
            message="Bureau API request timed out",
            status_code=None,
        )
        self.code = "BUREAU_API_TIMEOUT"


class BureauConfigurationException(DomainException):
    """Raised when the bureau client is missing its credentials."""

    def __init__(self, message: str = "Falta INFOEXPERTO_API_KEY en la configuración del servicio."):
        super().__init__(
            message=message,
            code="BUREAU_NOT_CONFIGURED",
        )


class ReportUnavailableException(DomainException):
    """Raised when the bureau answers without a report."""

    def __init__(self, message: str = "No se pudo obtener el informe", codigo: Optional[int] = None):
        super().__init__(
            message=message,
            code="REPORT_UNAVAILABLE",
            codigo=codigo,
        )
