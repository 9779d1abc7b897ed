"""
Matchcentre: read API over a football statistics catalog.
"""

from .clock import Clock, FixedClock, SystemClock
from .config import CatalogSettings
from .exceptions import (
    AuthenticationError,
    CatalogError,
    NotFoundError,
    QueryValidationError,
    StoreUnavailableError,
)

__all__ = [
    "CatalogSettings",
    "Clock",
    "FixedClock",
    "SystemClock",
    "AuthenticationError",
    "CatalogError",
    "NotFoundError",
    "QueryValidationError",
    "StoreUnavailableError",
]
