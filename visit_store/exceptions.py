"""
Custom exceptions for the visit store.

This module defines the error taxonomy surfaced by the store, its
persistence backends and the catalog-facing ownership service.
"""
from typing import Optional


class VisitStoreError(Exception):
    """Base exception for the visit store package."""
    pass


class StorageError(VisitStoreError):
    """
    Raised when a persistence backend fails to read or write visits.

    The store never retries; the error reaches the caller unchanged.
    """
    pass


class DynamoDBError(StorageError):
    """Exception raised for DynamoDB operation failures."""
    pass


class QuerySpecError(VisitStoreError):
    """
    Raised when a query references an unknown field or uses an operator
    or value that does not fit the field's type.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        """
        Initialize query spec error.

        Args:
            message: Error message
            field: Field name that the query referenced
        """
        super().__init__(message)
        self.field = field
        self.message = message


class CatalogApiError(VisitStoreError):
    """Raised when a catalog API request fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        """
        Initialize catalog API error.

        Args:
            message: Error message
            status_code: HTTP status code, if a response was received
        """
        super().__init__(message)
        self.status_code = status_code
