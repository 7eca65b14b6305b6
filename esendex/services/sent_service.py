"""
Sent Service.

Public entry point for retrieving sent messages. Each operation resolves a
resource, performs exactly one GET through the injected rest client, checks
the status code and hands the body to the injected serialiser.

This module follows the Dependency Injection pattern:
- SentService takes its collaborators through the constructor
- SentServiceFactory wires the production collaborators
"""

from typing import Optional, Type, TypeVar

from loguru import logger

from esendex import resources
from esendex.adapters.http_client import HttpClient
from esendex.adapters.rest_client import RestClient
from esendex.adapters.xml_serialiser import XmlSerialiser
from esendex.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, EsendexSettings
from esendex.domain.interfaces import IRestClient, ISerialiser, ProtocolError
from esendex.domain.models import (
    Credentials,
    RestResource,
    SentMessage,
    SentMessageCollection,
)
from esendex.resources import Identifier
from esendex.utils.logging import setup_logging

T = TypeVar("T")


class SentService:
    """
    Read-only access to sent messages.

    Holds no per-call state, so one instance can be shared between callers.

    Attributes:
        rest_client: Client used to fetch resources
        serialiser: Serialiser used to read response bodies
    """

    def __init__(self, rest_client: IRestClient, serialiser: ISerialiser):
        """
        Initialize sent service.

        Args:
            rest_client: Client used to fetch resources
            serialiser: Serialiser used to read response bodies
        """
        self.rest_client = rest_client
        self.serialiser = serialiser

    def get_message(self, message_id: Identifier) -> SentMessage:
        """
        Get one sent message.

        Args:
            message_id: Unique message identifier

        Returns:
            SentMessage, including its failure reason when delivery failed

        Raises:
            InvalidResourceError: If message_id is blank
            TransportError: If the request could not be completed
            ProtocolError: If the API answers with a non-success status
            SerialisationError: If the body cannot be read
        """
        resource = resources.message_header_resource(message_id)
        return self._fetch(resource, SentMessage)

    def get_batch_messages(self, batch_id: Identifier) -> SentMessageCollection:
        """
        Get the messages of one batch send.

        Args:
            batch_id: Unique batch identifier

        Returns:
            SentMessageCollection for the batch

        Raises:
            InvalidResourceError: If batch_id is blank
            TransportError: If the request could not be completed
            ProtocolError: If the API answers with a non-success status
            SerialisationError: If the body cannot be read
        """
        resource = resources.message_batch_resource(batch_id)
        return self._fetch(resource, SentMessageCollection)

    def get_messages(
        self,
        page_number: int,
        page_size: int,
        account_reference: Optional[str] = None,
    ) -> SentMessageCollection:
        """
        Get one page of sent messages, optionally for a single account.

        The returned paging values are the ones reported by the API.

        Args:
            page_number: 1-based page number
            page_size: Number of messages per page
            account_reference: Optional account reference to scope the listing

        Returns:
            SentMessageCollection for the page

        Raises:
            InvalidResourceError: If paging values or account reference are invalid
            TransportError: If the request could not be completed
            ProtocolError: If the API answers with a non-success status
            SerialisationError: If the body cannot be read
        """
        resource = resources.message_headers_resource(
            page_number, page_size, account_reference=account_reference
        )
        return self._fetch(resource, SentMessageCollection)

    def _fetch(self, resource: RestResource, result_type: Type[T]) -> T:
        response = self.rest_client.get(resource)

        if not response.is_success:
            logger.warning(
                f"Esendex returned {response.status_code} for {resource}"
            )
            raise ProtocolError(
                f"Unexpected status {response.status_code} for {resource}",
                status_code=response.status_code,
                response_body=response.content,
            )

        result = self.serialiser.deserialise(result_type, response.content)
        logger.debug(f"Fetched {result_type.__name__} from {resource.path}")
        return result

    def __repr__(self) -> str:
        return f"SentService(rest_client={self.rest_client!r}, serialiser={self.serialiser!r})"


class SentServiceFactory:
    """
    Factory for creating SentService instances.

    Provides convenient methods for production setup.
    """

    @staticmethod
    def create_default(
        credentials: Credentials,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> SentService:
        """
        Create a service backed by the Esendex HTTP API and the XML serialiser.

        Args:
            credentials: Account credentials
            base_url: API base URL (default: https://api.esendex.com)
            timeout: Request timeout in seconds

        Returns:
            Configured SentService
        """
        http_client = HttpClient(
            credentials,
            base_url=base_url or DEFAULT_BASE_URL,
            timeout=timeout or DEFAULT_TIMEOUT,
        )
        return SentService(RestClient(http_client), XmlSerialiser())

    @staticmethod
    def create_from_env(configure_logging: bool = False) -> SentService:
        """
        Create a service configured from ESENDEX_* environment variables.

        Args:
            configure_logging: Enable client logging at ESENDEX_LOG_LEVEL

        Returns:
            Configured SentService

        Raises:
            ConfigurationError: If required variables are missing
        """
        settings = EsendexSettings.from_env()
        if configure_logging:
            setup_logging(level=settings.log_level)

        logger.info(f"Creating SentService for {settings.username} at {settings.base_url}")
        return SentServiceFactory.create_default(
            settings.credentials,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )
