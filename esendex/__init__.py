"""
Esendex sent messages client.

Typed, read-only access to the Esendex REST API for messages that have
already been sent: single message headers, paged listings (optionally
scoped to an account reference) and the messages of a batch send.

Main components:
- Domain: Models, interfaces and exceptions
- Resources: Pure mapping from requests to API resources
- Adapters: HTTP transport, rest client, XML serialiser
- Services: SentService façade

Usage:
    from esendex import Credentials, SentServiceFactory, setup_logging

    # the client logs nothing until logging is enabled
    setup_logging("DEBUG")

    service = SentServiceFactory.create_default(
        Credentials("user@example.com", "secret")
    )

    message = service.get_message("3fa1c4de-5b7a-4f0e-9a59-0d6c1b2e8f10")
    if message.has_failed:
        print(message.failure_reason)

    page = service.get_messages(1, 15, account_reference="EX0123456")
    for message in page:
        print(message)
"""

__version__ = "1.0.0"

from esendex.domain.models import (
    Credentials,
    FailureReason,
    SentMessage,
    SentMessageCollection,
    RestResource,
    RestResponse,
)
from esendex.domain.interfaces import (
    EsendexError,
    InvalidResourceError,
    TransportError,
    ProtocolError,
    SerialisationError,
    ConfigurationError,
)
from esendex.services.sent_service import SentService, SentServiceFactory
from esendex.utils.logging import disable_logging, setup_logging

__all__ = [
    "Credentials",
    "FailureReason",
    "SentMessage",
    "SentMessageCollection",
    "RestResource",
    "RestResponse",
    "EsendexError",
    "InvalidResourceError",
    "TransportError",
    "ProtocolError",
    "SerialisationError",
    "ConfigurationError",
    "SentService",
    "SentServiceFactory",
    "setup_logging",
]

disable_logging()

