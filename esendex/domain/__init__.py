"""
Esendex Domain Layer.

Models, collaborator interfaces and exceptions. This layer has no
dependency on the HTTP stack or the wire format.
"""

from esendex.domain.models import (
    Credentials,
    FailureReason,
    SentMessage,
    SentMessageCollection,
    RestResource,
    RestResponse,
)
from esendex.domain.interfaces import (
    IHttpClient,
    IRestClient,
    ISerialiser,
    # Exceptions
    EsendexError,
    InvalidResourceError,
    TransportError,
    ProtocolError,
    SerialisationError,
    ConfigurationError,
)

__all__ = [
    # Models
    "Credentials",
    "FailureReason",
    "SentMessage",
    "SentMessageCollection",
    "RestResource",
    "RestResponse",
    # Interfaces
    "IHttpClient",
    "IRestClient",
    "ISerialiser",
    # Exceptions
    "EsendexError",
    "InvalidResourceError",
    "TransportError",
    "ProtocolError",
    "SerialisationError",
    "ConfigurationError",
]
