"""Base domain exception."""

from typing import Optional


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Attributes:
        message: Human-readable message, safe to return to API callers
        code: Stable error identifier (e.g. "INVALID_DOCUMENT")
        codigo: Numeric InfoExperto error code, when one applies
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR", codigo: Optional[int] = None):
        self.message = message
        self.code = code
        self.codigo = codigo
        super().__init__(self.message)
