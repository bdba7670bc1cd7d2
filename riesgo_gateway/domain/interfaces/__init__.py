"""
Domain Interfaces (Ports)
"""

from .clients import BureauAPIClient

__all__ = [
    "BureauAPIClient",
]
