"""Unit tests for the HTTP client and response decoding."""

from unittest.mock import Mock

import pytest
import requests

from dnspod_dyndns.api import HTTPClient, decode_response
from dnspod_dyndns.exceptions import APIError, DecodeError, TransportError

from conftest import make_response


def make_client(**session_behaviour):
    session = Mock()
    for key, value in session_behaviour.items():
        setattr(session.request, key, value)
    return HTTPClient(base_url="https://dnsapi.cn/", timeout=30, session=session), session


def test_post_form_sends_form_values_to_endpoint():
    response = make_response({"status": {"code": "1"}})
    client, session = make_client(return_value=response)

    result = client.post_form("Record.List", values={"format": "json"}, timeout=10)

    assert result is response
    session.request.assert_called_once_with(
        "POST", "https://dnsapi.cn/Record.List", timeout=10, data={"format": "json"}
    )


def test_default_timeout_is_used():
    client, session = make_client(return_value=make_response({}))

    client.post_form("Record.Create", values={"format": "json"})

    assert session.request.call_args.kwargs["timeout"] == 30


def test_build_url():
    client = HTTPClient(base_url="https://dnsapi.cn/")
    assert client.build_url("/Record.Create") == "https://dnsapi.cn/Record.Create"
    assert client.build_url(url="https://other.example/x") == "https://other.example/x"
    assert HTTPClient().build_url("https://dnsapi.cn/Record.List") == "https://dnsapi.cn/Record.List"

    with pytest.raises(ValueError):
        HTTPClient().build_url()


@pytest.mark.parametrize("error", [
    requests.exceptions.ConnectionError("refused"),
    requests.exceptions.ReadTimeout("read timed out"),
    requests.exceptions.TooManyRedirects("loop"),
])
def test_request_failures_raise_transport_error(error):
    client, session = make_client(side_effect=error)

    with pytest.raises(TransportError) as excinfo:
        client.post_form("Record.Modify", values={})

    assert isinstance(excinfo.value, APIError)
    assert excinfo.value.__cause__ is error
    assert session.request.call_count == 1


def test_decode_response_returns_object():
    payload = {"status": {"code": "1", "message": "ok"}}
    assert decode_response(make_response(payload)) == payload


@pytest.mark.parametrize("status_code", [301, 400, 401, 500, 503])
def test_decode_response_rejects_non_2xx(status_code):
    with pytest.raises(DecodeError, match=f"HTTP {status_code}"):
        decode_response(make_response({"status": {"code": "1"}}, status_code=status_code))


def test_decode_response_rejects_invalid_json():
    response = make_response(ValueError("Expecting value"), text="<html>oops</html>")
    with pytest.raises(DecodeError, match="Invalid JSON"):
        decode_response(response)


def test_decode_response_rejects_non_object():
    with pytest.raises(DecodeError):
        decode_response(make_response(["not", "an", "object"]))
