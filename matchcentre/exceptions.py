"""
Custom exceptions for the catalog read API.
"""
from __future__ import annotations


class CatalogError(RuntimeError):
    """
    Generic catalog error.
    """

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(CatalogError):
    """
    Raised when a requested entity id has no matching row.
    """

    status_code = 404


class QueryValidationError(CatalogError):
    """
    Raised when a query parameter is missing or malformed.
    """

    status_code = 400


class AuthenticationError(CatalogError):
    """
    Raised when a request fails the signature gate.
    """

    status_code = 401


class StoreUnavailableError(CatalogError):
    """
    Raised when the relational store is unreachable or a query fails.
    """

    status_code = 500
