"""
Esendex API resources.

Pure functions mapping a logical request (message id, batch id, or a page
optionally scoped to an account) to a RestResource. Nothing here performs
I/O; invalid arguments fail before any request is made.
"""

import uuid
from enum import Enum
from typing import Optional, Union
from urllib.parse import quote, urlencode

from loguru import logger

from esendex.domain.interfaces import InvalidResourceError
from esendex.domain.models import RestResource

Identifier = Union[str, uuid.UUID]


class EsendexEndpoint(Enum):
    """Esendex API endpoint definitions."""

    MESSAGE_HEADERS = "v1.0/messageheaders"
    MESSAGE_BATCHES = "v1.1/messagebatches"


def _encode_identifier(value: Identifier, name: str) -> str:
    """
    Validate an identifier and encode it as a single path segment.

    Surrounding whitespace is kept and encoded, so " a" and "a" stay distinct.

    Args:
        value: Identifier as string or UUID
        name: Argument name used in error messages

    Returns:
        Percent-encoded path segment

    Raises:
        InvalidResourceError: If the identifier is missing or blank
    """
    if value is None:
        raise InvalidResourceError(f"{name} is required")
    if not isinstance(value, (str, uuid.UUID)):
        raise InvalidResourceError(
            f"{name} must be a string or UUID",
            details={name: repr(value)},
        )

    token = str(value)
    if not token.strip():
        raise InvalidResourceError(f"{name} cannot be empty")

    return quote(token, safe="")


def _check_page_value(value: int, name: str) -> int:
    # bool is an int subclass, True would otherwise pass as 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidResourceError(
            f"{name} must be an integer",
            details={name: repr(value)},
        )
    if value < 1:
        raise InvalidResourceError(
            f"{name} must be greater than or equal to 1",
            details={name: value},
        )
    return value


def message_header_resource(message_id: Identifier) -> RestResource:
    """
    Resource for a single sent message.

    Args:
        message_id: Unique message identifier

    Returns:
        GET v1.0/messageheaders/{id}

    Raises:
        InvalidResourceError: If message_id is missing or blank
    """
    segment = _encode_identifier(message_id, "message_id")
    resource = RestResource(f"{EsendexEndpoint.MESSAGE_HEADERS.value}/{segment}")
    logger.debug(f"Resolved message header resource: {resource}")
    return resource


def message_headers_resource(
    page_number: int,
    page_size: int,
    account_reference: Optional[str] = None,
) -> RestResource:
    """
    Resource for one page of sent messages.

    Paging values are encoded exactly as given. When account_reference is
    passed the listing is scoped to that account.

    Args:
        page_number: 1-based page number
        page_size: Number of messages per page
        account_reference: Optional account reference (e.g. EX0123456)

    Returns:
        GET v1.0/messageheaders?pageNumber=..&pageSize=..[&accountReference=..]

    Raises:
        InvalidResourceError: If paging values are not integers >= 1 or the
            account reference is blank
    """
    params = {
        "pageNumber": _check_page_value(page_number, "page_number"),
        "pageSize": _check_page_value(page_size, "page_size"),
    }

    if account_reference is not None:
        if not isinstance(account_reference, str) or not account_reference.strip():
            raise InvalidResourceError(
                "account_reference cannot be empty",
                details={"account_reference": repr(account_reference)},
            )
        params["accountReference"] = account_reference

    path = f"{EsendexEndpoint.MESSAGE_HEADERS.value}?{urlencode(params, quote_via=quote)}"
    resource = RestResource(path)
    logger.debug(f"Resolved message headers resource: {resource}")
    return resource


def message_batch_resource(batch_id: Identifier) -> RestResource:
    """
    Resource for the messages of one batch send.

    Args:
        batch_id: Unique batch identifier

    Returns:
        GET v1.1/messagebatches/{id}/messages

    Raises:
        InvalidResourceError: If batch_id is missing or blank
    """
    segment = _encode_identifier(batch_id, "batch_id")
    resource = RestResource(f"{EsendexEndpoint.MESSAGE_BATCHES.value}/{segment}/messages")
    logger.debug(f"Resolved message batch resource: {resource}")
    return resource
