"""
Esendex REST client.

Implements IRestClient on top of an IHttpClient transport. One call to
``get`` is exactly one request; retries are left to the transport.
"""

from loguru import logger

from esendex.domain.interfaces import IHttpClient, IRestClient
from esendex.domain.models import RestResource, RestResponse


class RestClient(IRestClient):
    """
    Issues requests for resolved RestResources.

    Attributes:
        http_client: Transport used for every request
    """

    def __init__(self, http_client: IHttpClient):
        self.http_client = http_client

    def get(self, resource: RestResource) -> RestResponse:
        """
        Perform one GET against the resource.

        Args:
            resource: Resource to fetch

        Returns:
            RestResponse from the transport

        Raises:
            TransportError: If the transport could not complete the request
        """
        logger.debug(f"Fetching {resource.path}")
        return self.http_client.submit("GET", resource.path)

    def __repr__(self) -> str:
        return f"RestClient(http_client={self.http_client!r})"
