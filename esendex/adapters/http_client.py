"""
Esendex HTTP transport.

Implements IHttpClient with a requests Session authenticated by HTTP Basic
Auth. Connection and timeout failures are raised as TransportError; any
status code the API returns is handed back to the caller untouched.
"""

from typing import Optional

import requests
from loguru import logger
from requests.auth import HTTPBasicAuth

from esendex import __version__
from esendex.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from esendex.domain.interfaces import IHttpClient, TransportError
from esendex.domain.models import Credentials, RestResponse

USER_AGENT = f"esendex-sent-python/{__version__}"


class HttpClient(IHttpClient):
    """
    HTTP client for the Esendex REST API.

    Attributes:
        credentials: Account credentials used for every request
        base_url: API base URL
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            credentials: Account credentials
            base_url: API base URL
            timeout: Request timeout in seconds
            session: Optional preconfigured session (default: new Session)
        """
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._auth = HTTPBasicAuth(credentials.username, credentials.password)
        self._headers = {
            "Accept": "application/xml",
            "User-Agent": USER_AGENT,
        }

        logger.debug(f"HttpClient initialized for {self.base_url} as {credentials.username}")

    def build_url(self, path: str) -> str:
        """Join a resource path onto the base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def submit(self, method: str, path: str) -> RestResponse:
        """
        Send one authenticated request.

        Args:
            method: HTTP verb
            path: Resource path relative to the base URL

        Returns:
            RestResponse with status code and body text

        Raises:
            TransportError: If the request could not be completed
        """
        url = self.build_url(path)
        logger.debug(f"{method} {url}")

        try:
            response = self._session.request(
                method=method,
                url=url,
                auth=self._auth,
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"Esendex request timed out after {self.timeout}s: {method} {url}")
            raise TransportError(
                f"Request timed out: {method} {url}",
                details={"timeout": self.timeout},
            ) from e
        except requests.RequestException as e:
            logger.error(f"Esendex request failed: {method} {url}: {e}")
            raise TransportError(f"Request failed: {method} {url}: {e}") from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return RestResponse(status_code=response.status_code, content=response.text)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"HttpClient(url={self.base_url}, username={self.credentials.username})"
