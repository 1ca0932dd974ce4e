"""
Custom exceptions for the Lalamove client library.
"""

from typing import Optional


class LalamoveClientError(Exception):
    """Base exception for Lalamove client errors."""
    pass


class InvalidInputError(LalamoveClientError):
    """Raised when a request cannot be signed because its method or path is invalid."""
    pass


class ConfigurationError(LalamoveClientError):
    """Raised when client configuration is invalid."""
    pass


class PayloadError(LalamoveClientError):
    """Raised when a request payload is missing required fields or breaks a limit."""
    pass


class HTTPError(LalamoveClientError):
    """Raised when HTTP request fails."""
    pass


class APIResponseError(LalamoveClientError):
    """Raised when the API returns a response the client cannot use."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(APIResponseError):
    """Raised when a requested entity is absent from an API listing."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)
