from unittest.mock import create_autospec

import pytest

from esendex.domain.interfaces import IRestClient, ISerialiser
from esendex.domain.models import Credentials
from esendex.services.sent_service import SentService


_MESSAGE_ID = "3fa1c4de-5b7a-4f0e-9a59-0d6c1b2e8f10"

_FAILED_MESSAGE_XML = """<?xml version="1.0" encoding="utf-8"?>
<messageheader id="3fa1c4de-5b7a-4f0e-9a59-0d6c1b2e8f10"
               uri="https://api.esendex.com/v1.0/messageheaders/3fa1c4de-5b7a-4f0e-9a59-0d6c1b2e8f10"
               xmlns="http://api.esendex.com/ns/">
  <reference>EX0123456</reference>
  <status>Failed</status>
  <laststatusat>2024-03-01T09:15:30Z</laststatusat>
  <submittedat>2024-03-01T09:15:00Z</submittedat>
  <type>SMS</type>
  <to><phonenumber>447700900123</phonenumber></to>
  <from><phonenumber>447700900654</phonenumber></from>
  <summary>Your order has shipped</summary>
  <body uri="https://api.esendex.com/v1.0/messageheaders/3fa1c4de-5b7a-4f0e-9a59-0d6c1b2e8f10/body"/>
  <direction>Outbound</direction>
  <parts>1</parts>
  <username>user@example.com</username>
  <failurereason>
    <code>80</code>
    <description>yolo</description>
    <permanentfailure>true</permanentfailure>
  </failurereason>
</messageheader>
"""

_MESSAGE_HEADERS_XML = """<?xml version="1.0" encoding="utf-8"?>
<messageheaders startindex="0" count="15" totalcount="2" xmlns="http://api.esendex.com/ns/">
  <messageheader id="a1">
    <reference>ACC1</reference>
    <status>Delivered</status>
    <to><phonenumber>447700900001</phonenumber></to>
  </messageheader>
  <messageheader id="a2">
    <reference>ACC1</reference>
    <status>Failed</status>
    <to><phonenumber>447700900002</phonenumber></to>
    <failurereason>
      <code>12</code>
      <description>Absent subscriber</description>
      <permanentfailure>false</permanentfailure>
    </failurereason>
  </messageheader>
</messageheaders>
"""


@pytest.fixture
def message_id():
    return _MESSAGE_ID


@pytest.fixture
def failed_message_xml():
    return _FAILED_MESSAGE_XML


@pytest.fixture
def message_headers_xml():
    return _MESSAGE_HEADERS_XML


@pytest.fixture
def credentials():
    return Credentials("username", "password")


@pytest.fixture
def rest_client():
    return create_autospec(IRestClient, instance=True)


@pytest.fixture
def serialiser():
    return create_autospec(ISerialiser, instance=True)


@pytest.fixture
def service(rest_client, serialiser):
    return SentService(rest_client, serialiser)
