"""
Domain models for the Esendex sent messages client.

This module defines the entities returned by the sent messages API and the
transient request/response values passed between the service and the
transport. Entities are frozen dataclasses so a result cannot be altered
after it leaves the serialiser.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional


@dataclass(frozen=True)
class Credentials:
    """
    Esendex account credentials.

    Used by the HTTP transport to authenticate every request with
    HTTP Basic Auth. Never mutated after construction.

    Attributes:
        username: Esendex login (usually an email address)
        password: Esendex password or API token
    """
    username: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        """Validate model after initialization."""
        if not self.username:
            raise ValueError("username cannot be empty")
        if not self.password:
            raise ValueError("password cannot be empty")


@dataclass(frozen=True)
class FailureReason:
    """
    Why a sent message was not delivered.

    Attributes:
        code: Esendex failure code
        description: Human-readable failure description
        permanent_failure: True if retrying the message cannot succeed
    """
    code: int
    description: str
    permanent_failure: bool = False


@dataclass(frozen=True)
class SentMessage:
    """
    A message header for one sent (or attempted) message.

    Only ``id`` is guaranteed. ``failure_reason`` is present only when
    delivery did not succeed.

    Attributes:
        id: Unique message identifier
        uri: Canonical API URI of the message header
        reference: Account reference the message was sent from
        status: Delivery status (Submitted, Sent, Delivered, Failed, ...)
        last_status_at: When the status last changed
        submitted_at: When the message was submitted
        sent_at: When the message was sent to the network
        delivered_at: When the message was delivered
        type: Message type (SMS, Voice)
        to: Recipient phone number
        from_: Originator
        summary: Start of the message body
        body_uri: API URI of the full message body
        direction: Outbound or Inbound
        parts: Number of message parts
        username: User that sent the message
        failure_reason: Failure metadata, if delivery failed
    """
    id: str
    uri: Optional[str] = None
    reference: Optional[str] = None
    status: Optional[str] = None
    last_status_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    type: Optional[str] = None
    to: Optional[str] = None
    from_: Optional[str] = None
    summary: Optional[str] = None
    body_uri: Optional[str] = None
    direction: Optional[str] = None
    parts: Optional[int] = None
    username: Optional[str] = None
    failure_reason: Optional[FailureReason] = None

    @property
    def has_failed(self) -> bool:
        """Check if the message carries a failure reason."""
        return self.failure_reason is not None

    def __str__(self) -> str:
        return f"SentMessage(id={self.id}, status={self.status}, to={self.to})"


@dataclass
class SentMessageCollection:
    """
    One page of sent messages.

    Paging values are whatever the server reported. They are expected to
    match the request that produced the page but are not checked against it
    or against ``len(messages)``.

    Attributes:
        page_number: 1-based page number
        page_size: Requested page length
        total_count: Total messages across all pages, if reported
        messages: Messages on this page, in server order
    """
    page_number: int = 1
    page_size: int = 0
    total_count: Optional[int] = None
    messages: List[SentMessage] = field(default_factory=list)

    @property
    def total_pages(self) -> Optional[int]:
        """Number of pages implied by total_count and page_size."""
        if self.total_count is None or self.page_size <= 0:
            return None
        return -(-self.total_count // self.page_size)

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[SentMessage]:
        return iter(self.messages)

    def __str__(self) -> str:
        return (
            f"SentMessageCollection(page={self.page_number}, size={self.page_size}, "
            f"total={self.total_count}, messages={len(self.messages)})"
        )


@dataclass(frozen=True)
class RestResource:
    """
    An addressable API resource.

    Attributes:
        path: Path relative to the API base URL, including any query string
        method: HTTP verb
    """
    path: str
    method: str = "GET"

    def __str__(self) -> str:
        return f"{self.method} {self.path}"


@dataclass(frozen=True)
class RestResponse:
    """
    Raw response returned by the transport.

    Attributes:
        status_code: HTTP status code
        content: Response body as text
    """
    status_code: int
    content: str = ""

    @property
    def is_success(self) -> bool:
        """Check if the status code is in the 2xx class."""
        return 200 <= self.status_code < 300
