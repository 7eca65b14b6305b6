"""
Esendex XML serialiser.

Implements ISerialiser for the Esendex XML dialect. Response documents use
the ``http://api.esendex.com/ns/`` namespace; tags are matched on their
local name so namespaced and bare documents read the same.

Message header shape::

    <messageheader id="..." uri="...">
      <reference>EX0000000</reference>
      <status>Failed</status>
      <laststatusat>2024-01-01T12:00:05Z</laststatusat>
      <submittedat>2024-01-01T12:00:00Z</submittedat>
      <type>SMS</type>
      <to><phonenumber>447700900123</phonenumber></to>
      <from><phonenumber>447700900654</phonenumber></from>
      <summary>Hello</summary>
      <body uri="..."/>
      <direction>Outbound</direction>
      <parts>1</parts>
      <username>user@example.com</username>
      <failurereason>
        <code>80</code>
        <description>...</description>
        <permanentfailure>true</permanentfailure>
      </failurereason>
    </messageheader>

Collections wrap message headers in a root element carrying paging
attributes, either ``pagenumber``/``pagesize``/``totalcount`` or the API's
``startindex``/``count``/``totalcount``.
"""

import re
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from loguru import logger

from esendex.domain.interfaces import ISerialiser, SerialisationError
from esendex.domain.models import FailureReason, SentMessage, SentMessageCollection

T = TypeVar("T")

NAMESPACE = "http://api.esendex.com/ns/"

_TRUE_VALUES = ("true", "1")
_FALSE_VALUES = ("false", "0")

# fractional seconds followed by an optional UTC offset
_FRACTION = re.compile(r"\.(\d+)(?=([+-]\d{2}:\d{2})?$)")


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _child_text(element: ET.Element, *path: str, strip: bool = False) -> Optional[str]:
    """
    Text of a nested child element.

    Free text is returned verbatim. Values that are parsed afterwards
    (numbers, booleans, timestamps) are read with ``strip=True``.

    Args:
        element: Element to search from
        *path: Local names to descend through
        strip: Strip surrounding whitespace and map empty text to None

    Returns:
        Element text, or None if any step is missing
    """
    current = element
    for name in path:
        current = _child(current, name)
        if current is None:
            return None
    text = current.text or ""
    if strip:
        return text.strip() or None
    return text


def _parse_int(value: Optional[str], name: str) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise SerialisationError(
            f"Invalid integer for {name}: {value!r}",
            details={"field": name},
        ) from e


def _parse_bool(value: Optional[str], name: str) -> bool:
    if value is None:
        return False
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise SerialisationError(
        f"Invalid boolean for {name}: {value!r}",
        details={"field": name},
    )


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp.

    Esendex timestamps are informational; an unreadable one is logged and
    dropped rather than failing the whole document.

    Args:
        value: Timestamp text (e.g. 2024-01-01T12:00:05.123Z)

    Returns:
        datetime or None
    """
    if value is None:
        return None

    text = value
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    # fromisoformat before 3.11 only takes 3 or 6 fraction digits
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.warning(f"Could not parse timestamp {value!r}")
        return None


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


class XmlSerialiser(ISerialiser):
    """
    Serialiser for the Esendex XML dialect.

    Supported types: SentMessage and SentMessageCollection.
    """

    def __init__(self):
        self._readers: Dict[type, Callable[[ET.Element], Any]] = {
            SentMessage: self._read_message,
            SentMessageCollection: self._read_collection,
        }
        self._writers: Dict[type, Callable[[Any], ET.Element]] = {
            SentMessage: self._write_message,
            SentMessageCollection: self._write_collection,
        }

    # =========================================================================
    # Public Interface Methods (ISerialiser implementation)
    # =========================================================================

    def deserialise(self, result_type: Type[T], content: str) -> T:
        """
        Convert an XML body into ``result_type``.

        Args:
            result_type: SentMessage or SentMessageCollection
            content: XML document

        Returns:
            Instance of result_type

        Raises:
            SerialisationError: If the document is malformed, lacks required
                values, or result_type is unsupported
        """
        reader = self._readers.get(result_type)
        if reader is None:
            raise SerialisationError(
                f"Cannot deserialise to unsupported type {getattr(result_type, '__name__', result_type)}"
            )

        if not content or not content.strip():
            raise SerialisationError(
                f"Empty response body for {result_type.__name__}"
            )

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise SerialisationError(
                f"Malformed XML for {result_type.__name__}: {e}",
                details={"body": content[:200]},
            ) from e

        return reader(root)

    def serialise(self, value: Any) -> str:
        """
        Convert a SentMessage or SentMessageCollection into XML.

        Args:
            value: Domain object

        Returns:
            XML document as text

        Raises:
            SerialisationError: If the type is unsupported
        """
        writer = self._writers.get(type(value))
        if writer is None:
            raise SerialisationError(
                f"Cannot serialise unsupported type {type(value).__name__}"
            )

        element = writer(value)
        element.set("xmlns", NAMESPACE)
        return ET.tostring(element, encoding="unicode")

    # =========================================================================
    # Readers
    # =========================================================================

    def _read_failure_reason(self, element: ET.Element) -> FailureReason:
        code = _parse_int(_child_text(element, "code", strip=True), "failurereason/code")
        if code is None:
            raise SerialisationError("failurereason is missing its code")

        return FailureReason(
            code=code,
            description=_child_text(element, "description") or "",
            permanent_failure=_parse_bool(
                _child_text(element, "permanentfailure", strip=True), "failurereason/permanentfailure"
            ),
        )

    def _read_message(self, element: ET.Element) -> SentMessage:
        if _local_name(element.tag) != "messageheader":
            raise SerialisationError(
                f"Expected messageheader element, got {_local_name(element.tag)}"
            )

        message_id = element.get("id") or ""
        if not message_id.strip():
            raise SerialisationError("messageheader is missing its id attribute")

        failure_element = _child(element, "failurereason")
        failure_reason = None
        if failure_element is not None:
            failure_reason = self._read_failure_reason(failure_element)

        body_element = _child(element, "body")

        return SentMessage(
            id=message_id,
            uri=element.get("uri"),
            reference=_child_text(element, "reference"),
            status=_child_text(element, "status"),
            last_status_at=_parse_datetime(_child_text(element, "laststatusat", strip=True)),
            submitted_at=_parse_datetime(_child_text(element, "submittedat", strip=True)),
            sent_at=_parse_datetime(_child_text(element, "sentat", strip=True)),
            delivered_at=_parse_datetime(_child_text(element, "deliveredat", strip=True)),
            type=_child_text(element, "type"),
            to=_child_text(element, "to", "phonenumber"),
            from_=_child_text(element, "from", "phonenumber"),
            summary=_child_text(element, "summary"),
            body_uri=body_element.get("uri") if body_element is not None else None,
            direction=_child_text(element, "direction"),
            parts=_parse_int(_child_text(element, "parts", strip=True), "parts"),
            username=_child_text(element, "username"),
            failure_reason=failure_reason,
        )

    def _read_collection(self, element: ET.Element) -> SentMessageCollection:
        messages = [
            self._read_message(child)
            for child in element
            if _local_name(child.tag) == "messageheader"
        ]

        page_number = _parse_int(element.get("pagenumber"), "pagenumber")
        page_size = _parse_int(element.get("pagesize"), "pagesize")
        total_count = _parse_int(element.get("totalcount"), "totalcount")

        # API listings report startindex/count instead of page values
        if page_size is None:
            page_size = _parse_int(element.get("count"), "count")
        if page_number is None:
            start_index = _parse_int(element.get("startindex"), "startindex")
            if start_index is not None and page_size:
                page_number = start_index // page_size + 1

        collection = SentMessageCollection(
            page_number=page_number if page_number is not None else 1,
            page_size=page_size if page_size is not None else len(messages),
            total_count=total_count,
            messages=messages,
        )
        logger.debug(f"Deserialised {collection}")
        return collection

    # =========================================================================
    # Writers
    # =========================================================================

    def _write_message(self, message: SentMessage) -> ET.Element:
        element = ET.Element("messageheader", {"id": message.id})
        if message.uri:
            element.set("uri", message.uri)

        def add(name: str, value: Any) -> ET.Element:
            child = ET.SubElement(element, name)
            child.text = str(value)
            return child

        simple_fields = (
            ("reference", message.reference),
            ("status", message.status),
            ("laststatusat", _format_datetime(message.last_status_at)),
            ("submittedat", _format_datetime(message.submitted_at)),
            ("sentat", _format_datetime(message.sent_at)),
            ("deliveredat", _format_datetime(message.delivered_at)),
            ("type", message.type),
        )
        for name, value in simple_fields:
            if value is not None:
                add(name, value)

        if message.to is not None:
            ET.SubElement(ET.SubElement(element, "to"), "phonenumber").text = message.to
        if message.from_ is not None:
            ET.SubElement(ET.SubElement(element, "from"), "phonenumber").text = message.from_
        if message.summary is not None:
            add("summary", message.summary)
        if message.body_uri is not None:
            ET.SubElement(element, "body", {"uri": message.body_uri})
        if message.direction is not None:
            add("direction", message.direction)
        if message.parts is not None:
            add("parts", message.parts)
        if message.username is not None:
            add("username", message.username)

        if message.failure_reason is not None:
            reason = ET.SubElement(element, "failurereason")
            ET.SubElement(reason, "code").text = str(message.failure_reason.code)
            ET.SubElement(reason, "description").text = message.failure_reason.description
            ET.SubElement(reason, "permanentfailure").text = (
                "true" if message.failure_reason.permanent_failure else "false"
            )

        return element

    def _write_collection(self, collection: SentMessageCollection) -> ET.Element:
        element = ET.Element(
            "messageheaders",
            {
                "pagenumber": str(collection.page_number),
                "pagesize": str(collection.page_size),
            },
        )
        if collection.total_count is not None:
            element.set("totalcount", str(collection.total_count))

        for message in collection.messages:
            element.append(self._write_message(message))

        return element
