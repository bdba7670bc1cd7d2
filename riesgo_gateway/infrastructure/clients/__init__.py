"""External API client implementations."""

from .bureau_client import HttpBureauAPIClient, extract_error_info, parse_error_code

__all__ = [
    "HttpBureauAPIClient",
    "extract_error_info",
    "parse_error_code",
]
