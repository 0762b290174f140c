import pytest
import requests

from checklist_app.constants import MAX_IMAGE_BYTES, MESSAGES
from checklist_app.data.api_client import ApiClient
from checklist_app.data.repositories import ImageRepository, TodoRepository
from checklist_app.errors import StoreError, StoreUnavailable, ValidationError


class _Response:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.text = "" if payload is None else str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


class _Session:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _client(session, user_id=None):
    return ApiClient("http://store/", "secret", user_id_getter=lambda: user_id, session=session)


def test_headers_carry_token_and_owner():
    session = _Session(_Response(200, {"items": []}))
    _client(session, user_id="u1").request("GET", "/v1/todos", params={"user_id": "u1", "date": None})

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://store/v1/todos")
    assert kwargs["headers"] == {"X-Backend-Token": "secret", "X-User-Id": "u1"}
    assert kwargs["params"] == {"user_id": "u1"}


def test_connection_errors_are_unavailable():
    session = _Session(error=requests.ConnectionError("refused"))
    with pytest.raises(StoreUnavailable):
        _client(session).request("GET", "/v1/public_todos")


def test_server_errors_carry_status_and_detail():
    session = _Session(_Response(500, {"detail": "Internal error"}))
    with pytest.raises(StoreError) as excinfo:
        _client(session).request("GET", "/v1/public_todos")

    assert excinfo.value.status_code == 500
    assert excinfo.value.detail == "Internal error"


def test_unconfigured_client_is_disabled():
    client = ApiClient("", "", session=_Session())
    assert not client.is_enabled()
    with pytest.raises(StoreUnavailable):
        client.request("GET", "/v1/public_todos")


def test_listing_raises_only_when_unreachable():
    unreachable = TodoRepository(_client(_Session(error=requests.Timeout())), today=None)
    with pytest.raises(StoreUnavailable):
        unreachable.list_todos("u1")

    failing = TodoRepository(_client(_Session(_Response(500, {"detail": "x"}))), today=None)
    assert failing.list_todos("u1") == []


def test_mutations_report_failure_as_false():
    repository = TodoRepository(_client(_Session(_Response(404, {"detail": "Todo not found"}))), today=None)

    assert repository.toggle_todo("t1", True) is False
    assert repository.delete_todo("t1") is False


@pytest.mark.parametrize(
    "content_type, size, message",
    [
        ("text/plain", 10, MESSAGES["not_image"]),
        (None, 10, MESSAGES["not_image"]),
        ("image/png", MAX_IMAGE_BYTES + 1, MESSAGES["image_too_large"]),
    ],
)
def test_images_are_validated_before_upload(content_type, size, message):
    session = _Session(_Response(200, {"image_url": "/v1/images/x-1.png"}))
    repository = ImageRepository(_client(session))

    with pytest.raises(ValidationError) as excinfo:
        repository.upload_proof("t1", "file", content_type, b"x" * size)

    assert excinfo.value.message == message
    assert session.calls == []


def test_image_at_the_size_limit_is_uploaded():
    session = _Session(_Response(200, {"todo_id": "t1", "image_url": "/v1/images/t1-1.png"}))
    repository = ImageRepository(_client(session))

    assert repository.upload_proof("t1", "a.png", "image/png", b"x" * MAX_IMAGE_BYTES) == "/v1/images/t1-1.png"
    assert "files" in session.calls[0][2]
