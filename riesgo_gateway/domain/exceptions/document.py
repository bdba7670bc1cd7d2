"""Document-related domain exceptions."""

from .base import DomainException
from .bureau import describe_bureau_error


class InvalidDocumentException(DomainException):
    """
    Raised when a document type or number fails validation.

    The bureau error code (12 missing data, 13 invalid number) is kept so the
    response matches what the bureau itself would report.
    """

    def __init__(self, detail: str, codigo: int):
        super().__init__(
            message=describe_bureau_error(codigo) or detail,
            code="INVALID_DOCUMENT",
            codigo=codigo,
        )
        self.detail = detail


class InvalidConsultaRequestException(DomainException):
    """Raised when a query request is malformed beyond a single document."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_REQUEST",
        )
