"""
Domain interfaces for the Esendex sent messages client.

This module defines the abstractions the service depends on (transport,
rest client, serialiser) and the exception hierarchy shared by every layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type, TypeVar

from esendex.domain.models import RestResource, RestResponse

T = TypeVar("T")


# ============================================================================
# Custom Exceptions
# ============================================================================


class EsendexError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidResourceError(EsendexError, ValueError):
    """Raised when a resource cannot be built from the given arguments."""
    pass


class TransportError(EsendexError):
    """Raised when the HTTP request cannot be completed (connection, timeout)."""
    pass


class ProtocolError(EsendexError):
    """Raised when the API answers with a non-success status code."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize protocol error with HTTP details.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            response_body: Raw response body
            details: Optional additional context
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        return f"[HTTP {self.status_code}] {super().__str__()}"


class SerialisationError(EsendexError):
    """Raised when a response body cannot be converted to the requested type."""
    pass


class ConfigurationError(EsendexError):
    """Raised when required configuration is missing or invalid."""
    pass


# ============================================================================
# Collaborator Interfaces
# ============================================================================


class IHttpClient(ABC):
    """
    Interface for the authenticated HTTP transport.

    Implementations own connection handling, headers and authentication.
    """

    @abstractmethod
    def submit(self, method: str, path: str) -> RestResponse:
        """
        Send one request and return the raw response.

        Non-success status codes are returned, not raised.

        Args:
            method: HTTP verb
            path: Path relative to the API base URL

        Returns:
            RestResponse with status code and body

        Raises:
            TransportError: If the request could not be completed
        """
        pass


class IRestClient(ABC):
    """Interface for issuing requests against resolved API resources."""

    @abstractmethod
    def get(self, resource: RestResource) -> RestResponse:
        """
        Perform one authenticated GET.

        Args:
            resource: Resource to fetch

        Returns:
            RestResponse with status code and body

        Raises:
            TransportError: If the request could not be completed
        """
        pass


class ISerialiser(ABC):
    """Interface for converting between wire-format bodies and domain objects."""

    @abstractmethod
    def deserialise(self, result_type: Type[T], content: str) -> T:
        """
        Convert a response body into an instance of ``result_type``.

        Args:
            result_type: Domain type to build
            content: Response body

        Returns:
            Instance of result_type

        Raises:
            SerialisationError: If the body is malformed or the type unsupported
        """
        pass

    @abstractmethod
    def serialise(self, value: Any) -> str:
        """
        Convert a domain object into a request body.

        Args:
            value: Domain object

        Returns:
            Wire-format body

        Raises:
            SerialisationError: If the type is unsupported
        """
        pass
