import uuid

import pytest

from esendex.adapters.http_client import HttpClient
from esendex.adapters.rest_client import RestClient
from esendex.adapters.xml_serialiser import XmlSerialiser
from esendex.domain.interfaces import (
    ConfigurationError,
    InvalidResourceError,
    ProtocolError,
    SerialisationError,
    TransportError,
)
from esendex.domain.models import (
    FailureReason,
    RestResponse,
    SentMessage,
    SentMessageCollection,
)
from esendex.resources import (
    message_batch_resource,
    message_header_resource,
    message_headers_resource,
)
from esendex.services.sent_service import SentService, SentServiceFactory


OK = RestResponse(200, "serialisedItem")


def test_default_factory_wires_production_collaborators(credentials):
    service = SentServiceFactory.create_default(credentials)

    assert isinstance(service.rest_client, RestClient)
    assert isinstance(service.rest_client.http_client, HttpClient)
    assert service.rest_client.http_client.credentials == credentials
    assert service.rest_client.http_client.base_url == "https://api.esendex.com"
    assert isinstance(service.serialiser, XmlSerialiser)


def test_default_factory_overrides(credentials):
    service = SentServiceFactory.create_default(
        credentials, base_url="https://sandbox.example.test", timeout=3
    )

    assert service.rest_client.http_client.base_url == "https://sandbox.example.test"
    assert service.rest_client.http_client.timeout == 3


def test_injected_collaborators_are_kept(credentials):
    rest_client = RestClient(HttpClient(credentials, base_url="http://tempuri.org"))
    serialiser = XmlSerialiser()

    service = SentService(rest_client, serialiser)

    assert service.rest_client is rest_client
    assert service.serialiser is serialiser


def test_create_from_env(monkeypatch):
    monkeypatch.setattr("esendex.config.load_environment", lambda: False)
    monkeypatch.setenv("ESENDEX_USERNAME", "env-user")
    monkeypatch.setenv("ESENDEX_PASSWORD", "env-pass")
    monkeypatch.setenv("ESENDEX_BASE_URL", "https://env.example.test")
    monkeypatch.setenv("ESENDEX_TIMEOUT", "12")

    service = SentServiceFactory.create_from_env()

    http_client = service.rest_client.http_client
    assert http_client.credentials.username == "env-user"
    assert http_client.base_url == "https://env.example.test"
    assert http_client.timeout == 12


def test_create_from_env_applies_log_level(monkeypatch):
    levels = []
    monkeypatch.setattr("esendex.config.load_environment", lambda: False)
    monkeypatch.setattr(
        "esendex.services.sent_service.setup_logging", lambda level: levels.append(level)
    )
    monkeypatch.setenv("ESENDEX_USERNAME", "env-user")
    monkeypatch.setenv("ESENDEX_PASSWORD", "env-pass")
    monkeypatch.setenv("ESENDEX_LOG_LEVEL", "debug")

    SentServiceFactory.create_from_env(configure_logging=True)
    SentServiceFactory.create_from_env()

    assert levels == ["DEBUG"]


def test_create_from_env_without_credentials(monkeypatch):
    monkeypatch.setattr("esendex.config.load_environment", lambda: False)
    monkeypatch.delenv("ESENDEX_USERNAME", raising=False)
    monkeypatch.delenv("ESENDEX_PASSWORD", raising=False)

    with pytest.raises(ConfigurationError):
        SentServiceFactory.create_from_env()


def test_get_batch_messages_with_id_returns_collection(service, rest_client, serialiser):
    batch_id = uuid.uuid4()
    expected = SentMessageCollection()
    rest_client.get.return_value = OK
    serialiser.deserialise.return_value = expected

    result = service.get_batch_messages(batch_id)

    assert result is expected
    rest_client.get.assert_called_once_with(message_batch_resource(batch_id))
    serialiser.deserialise.assert_called_once_with(SentMessageCollection, "serialisedItem")


def test_get_message_with_id_returns_message(service, rest_client, serialiser, message_id):
    expected = SentMessage(id=message_id)
    rest_client.get.return_value = OK
    serialiser.deserialise.return_value = expected

    result = service.get_message(message_id)

    assert result is expected
    serialiser.deserialise.assert_called_once_with(SentMessage, "serialisedItem")


def test_get_message_passes_resolved_resource_unchanged(service, rest_client, serialiser, message_id):
    rest_client.get.return_value = OK
    serialiser.deserialise.return_value = SentMessage(id=message_id)

    service.get_message(message_id)

    (resource,), _ = rest_client.get.call_args
    assert resource == message_header_resource(message_id)
    assert message_id in resource.path
    assert resource.method == "GET"


def test_get_messages_with_page_number_and_page_size(service, rest_client, serialiser):
    rest_client.get.return_value = OK
    serialiser.deserialise.return_value = SentMessageCollection(page_number=1, page_size=15)

    result = service.get_messages(1, 15)

    assert result.page_number == 1
    assert result.page_size == 15
    rest_client.get.assert_called_once_with(message_headers_resource(1, 15))


def test_get_messages_with_account_reference(service, rest_client, serialiser):
    rest_client.get.return_value = OK
    serialiser.deserialise.return_value = SentMessageCollection(page_number=1, page_size=15)

    result = service.get_messages(1, 15, account_reference="ACC1")

    assert result.page_number == 1
    assert result.page_size == 15
    (resource,), _ = rest_client.get.call_args
    assert resource == message_headers_resource(1, 15, account_reference="ACC1")
    for value in ("pageNumber=1", "pageSize=15", "ACC1"):
        assert value in resource.path


def test_get_messages_keeps_server_reported_paging(service, rest_client, serialiser):
    rest_client.get.return_value = OK
    reported = SentMessageCollection(page_number=2, page_size=50)
    serialiser.deserialise.return_value = reported

    result = service.get_messages(1, 15)

    assert result is reported
    assert result.page_number == 2
    assert result.page_size == 50


def test_get_messages_with_failed_message_keeps_failure_reason(service, rest_client, serialiser, message_id):
    sent_message = SentMessage(
        id=message_id,
        failure_reason=FailureReason(code=80, description="yolo", permanent_failure=True),
    )
    rest_client.get.return_value = OK
    serialiser.deserialise.return_value = SentMessageCollection(
        page_number=1, page_size=15, messages=[sent_message]
    )

    result = service.get_messages(1, 15, account_reference="accountReference")

    failure_reason = result.messages[0].failure_reason
    assert failure_reason.code == 80
    assert failure_reason.description == "yolo"
    assert failure_reason.permanent_failure is True


def test_get_message_with_failed_message_from_xml(rest_client, message_id, failed_message_xml):
    rest_client.get.return_value = RestResponse(200, failed_message_xml)
    service = SentService(rest_client, XmlSerialiser())

    result = service.get_message(message_id)

    assert result.id == message_id
    assert result.failure_reason.code == 80
    assert result.failure_reason.description == "yolo"
    assert result.failure_reason.permanent_failure is True


def test_get_messages_from_xml(rest_client, message_headers_xml):
    rest_client.get.return_value = RestResponse(200, message_headers_xml)
    service = SentService(rest_client, XmlSerialiser())

    result = service.get_messages(1, 15, account_reference="ACC1")

    assert result.page_number == 1
    assert result.page_size == 15
    assert [m.id for m in result] == ["a1", "a2"]


OPERATIONS = [
    pytest.param(lambda s: s.get_message("m1"), id="get_message"),
    pytest.param(lambda s: s.get_batch_messages("b1"), id="get_batch_messages"),
    pytest.param(lambda s: s.get_messages(1, 15), id="get_messages"),
    pytest.param(lambda s: s.get_messages(1, 15, account_reference="ACC1"), id="get_messages_scoped"),
]


@pytest.mark.parametrize("operation", OPERATIONS)
@pytest.mark.parametrize("status_code", [400, 401, 404, 500, 503])
def test_non_success_status_raises_protocol_error(service, rest_client, serialiser, operation, status_code):
    rest_client.get.return_value = RestResponse(status_code, "<errors/>")

    with pytest.raises(ProtocolError) as exc_info:
        operation(service)

    assert exc_info.value.status_code == status_code
    assert exc_info.value.response_body == "<errors/>"
    serialiser.deserialise.assert_not_called()


@pytest.mark.parametrize("operation", OPERATIONS)
def test_transport_error_propagates_unchanged(service, rest_client, serialiser, operation):
    error = TransportError("connection refused")
    rest_client.get.side_effect = error

    with pytest.raises(TransportError) as exc_info:
        operation(service)

    assert exc_info.value is error
    serialiser.deserialise.assert_not_called()


@pytest.mark.parametrize("operation", OPERATIONS)
def test_serialisation_error_propagates_unchanged(service, rest_client, serialiser, operation):
    error = SerialisationError("bad body")
    rest_client.get.return_value = OK
    serialiser.deserialise.side_effect = error

    with pytest.raises(SerialisationError) as exc_info:
        operation(service)

    assert exc_info.value is error


def test_invalid_arguments_fail_before_request(service, rest_client):
    with pytest.raises(InvalidResourceError):
        service.get_message("")
    with pytest.raises(InvalidResourceError):
        service.get_batch_messages(None)
    with pytest.raises(InvalidResourceError):
        service.get_messages(0, 15)
    with pytest.raises(InvalidResourceError):
        service.get_messages(1, 15, account_reference="")

    rest_client.get.assert_not_called()
