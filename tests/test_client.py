import asyncio

import httpx
import pytest

from conftest import TEST_API_KEY, RecordingTransport
from tsdr.client import API_KEY_HEADER, TsdrClient
from tsdr.config import TSDR_BASE_URL, Settings
from tsdr.errors import TransportFailure, UpstreamAuthError, UpstreamError
from tsdr.models import NumberKind, ResponseFormat


def _client(handler, settings: Settings = None):
    transport = RecordingTransport(handler)
    return TsdrClient(settings or Settings(api_key=TEST_API_KEY), transport=transport), transport


def test_url_templates() -> None:
    client = TsdrClient(Settings())
    assert client.case_status_url(NumberKind.SERIAL, "12345678") == f"{TSDR_BASE_URL}/casestatus/sn12345678/info.json"
    assert (
        client.case_status_url(NumberKind.SERIAL, "12345678", ResponseFormat.XML)
        == "https://tsdrapi.uspto.gov/ts/cd/casestatus/sn12345678/info.xml"
    )
    assert (
        client.case_status_url(NumberKind.REGISTRATION, "1234567", ResponseFormat.JSON)
        == "https://tsdrapi.uspto.gov/ts/cd/casestatus/rn1234567/info.json"
    )
    assert client.status_content_url("12345678") == f"{TSDR_BASE_URL}/casestatus/sn12345678/content"
    assert client.image_url("12345678") == f"{TSDR_BASE_URL}/rawImage/12345678"
    assert client.documents_url("72131351") == f"{TSDR_BASE_URL}/casedocs/bundle.pdf?sn=72131351"


def test_headers_include_api_key_when_configured() -> None:
    request = TsdrClient(Settings(api_key="k")).build_request("GET", "https://x")
    assert request.headers == {"User-Agent": "trademark-mcp-server/1.0.0", API_KEY_HEADER: "k"}


def test_headers_omit_api_key_when_missing() -> None:
    request = TsdrClient(Settings()).build_request("GET", "https://x")
    assert API_KEY_HEADER not in request.headers
    assert request.headers["User-Agent"] == "trademark-mcp-server/1.0.0"


def test_fetch_sends_headers_and_returns_body() -> None:
    client, transport = _client(lambda request: httpx.Response(200, text='{"ok": true}'))

    response = asyncio.run(client.fetch(client.image_url("12345678")))

    assert response.ok
    assert response.text == '{"ok": true}'
    sent = transport.requests[0]
    assert sent.method == "GET"
    assert sent.headers[API_KEY_HEADER] == TEST_API_KEY
    assert sent.headers["User-Agent"] == "trademark-mcp-server/1.0.0"


def test_fetch_generic_error_message() -> None:
    client, _ = _client(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(client.fetch("https://tsdrapi.uspto.gov/ts/cd/casestatus/sn12345678/info.json"))

    assert not isinstance(excinfo.value, UpstreamAuthError)
    assert str(excinfo.value) == "USPTO API returned 500: Internal Server Error. Error: boom"
    assert excinfo.value.status_code == 500


def test_fetch_register_marker_raises_auth_error() -> None:
    client, _ = _client(
        lambda request: httpx.Response(401, text="You need to register for an API key to use this service")
    )

    with pytest.raises(UpstreamAuthError) as excinfo:
        asyncio.run(client.fetch("https://tsdrapi.uspto.gov/ts/cd/casestatus/sn12345678/info.json"))

    assert excinfo.value.status_code == 401


def test_network_errors_become_transport_failures() -> None:
    def handler(request):
        raise httpx.ConnectError("Network error", request=request)

    client, _ = _client(handler)

    with pytest.raises(TransportFailure, match="Network error"):
        asyncio.run(client.fetch("https://tsdrapi.uspto.gov/ts/cd/rawImage/12345678"))


@pytest.mark.parametrize("status_code, expected", [(200, True), (204, True), (404, False), (403, False), (500, False)])
def test_exists_uses_head(status_code, expected) -> None:
    client, transport = _client(lambda request: httpx.Response(status_code))

    assert asyncio.run(client.exists(client.image_url("12345678"))) is expected
    assert transport.requests[0].method == "HEAD"


@pytest.mark.parametrize("status_code, reason", [(403, "Forbidden"), (500, "Internal Server Error")])
def test_register_marker_outside_401_is_a_generic_error(status_code, reason) -> None:
    body = "You need to register for an API key"
    client, _ = _client(lambda request: httpx.Response(status_code, text=body))

    with pytest.raises(UpstreamError) as excinfo:
        asyncio.run(client.fetch("https://tsdrapi.uspto.gov/ts/cd/casestatus/sn12345678/info.json"))

    assert not isinstance(excinfo.value, UpstreamAuthError)
    assert str(excinfo.value) == f"USPTO API returned {status_code}: {reason}. Error: {body}"
