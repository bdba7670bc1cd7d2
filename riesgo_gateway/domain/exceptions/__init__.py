"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .document import InvalidConsultaRequestException, InvalidDocumentException
from .bureau import (
    BUREAU_ERROR_DESCRIPTIONS,
    BureauAPIException,
    BureauAPITimeoutException,
    BureauConfigurationException,
    ReportUnavailableException,
    describe_bureau_error,
)

__all__ = [
    "DomainException",
    "InvalidDocumentException",
    "InvalidConsultaRequestException",
    "BUREAU_ERROR_DESCRIPTIONS",
    "BureauAPIException",
    "BureauAPITimeoutException",
    "BureauConfigurationException",
    "ReportUnavailableException",
    "describe_bureau_error",
]
