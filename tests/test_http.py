import json
from datetime import timedelta

import httpx
import pytest

from justllm.http import (
    build_http_client,
    endpoint_url,
    ensure_success,
    parse_json,
    request,
    request_json,
)
from justllm.transport_errors import (
    DeserializeError,
    HttpStatusError,
    InvalidConfigError,
    SerializeError,
    TransportRequestError,
)

BASE = "https://api.example.com/v1"


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_endpoint_url_pins_join():
    assert endpoint_url("https://api.example.com/", "/models") == "https://api.example.com/models"


@pytest.mark.parametrize(
    ("base", "path"),
    [(BASE, "chat"), (BASE + "/", "chat"), (BASE, "/chat"), (BASE + "///", "///chat")],
)
def test_endpoint_url_never_duplicates_slashes(base, path):
    assert endpoint_url(base, path) == endpoint_url(BASE, "chat")
    assert "//chat" not in endpoint_url(base, path)


@pytest.mark.asyncio
async def test_build_http_client_sets_default_headers():
    client = build_http_client("placeholder", 5.0, "justllm-test")
    try:
        assert client.headers["authorization"] == "Bearer placeholder"
        assert client.headers["accept"] == "application/json"
        assert client.headers["user-agent"] == "justllm-test"
        assert client.timeout.read == 5.0
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_build_http_client_accepts_timedelta():
    client = build_http_client("placeholder", timedelta(seconds=2), None)
    try:
        assert client.timeout.connect == 2.0
    finally:
        await client.aclose()


def test_build_http_client_rejects_control_characters():
    with pytest.raises(InvalidConfigError):
        build_http_client("placeholder" + chr(10), 5.0, None)


@pytest.mark.asyncio
async def test_request_json_sends_body_and_decodes_response():
    seen = []

    def handler(req):
        seen.append(req)
        return httpx.Response(200, json={"ok": True})

    async with _client(handler) as client:
        result = await request_json(client, BASE + "/", "POST", "/chat/completions", {"model": "m"})

    assert result == {"ok": True}
    assert str(seen[0].url) == endpoint_url(BASE + "/", "/chat/completions")
    assert seen[0].method == "POST"
    assert seen[0].headers["content-type"] == "application/json"
    assert json.loads(seen[0].content) == {"model": "m"}


@pytest.mark.asyncio
async def test_request_without_body_has_no_content_type():
    seen = []

    def handler(req):
        seen.append(req)
        return httpx.Response(200, json={"data": []})

    async with _client(handler) as client:
        result = await request_json(client, BASE, "GET", "models", None)

    assert result == {"data": []}
    assert "content-type" not in seen[0].headers


@pytest.mark.asyncio
async def test_non_success_status_preserves_body():
    async with _client(lambda req: httpx.Response(500, text="boom")) as client:
        with pytest.raises(HttpStatusError) as info:
            await request(client, BASE, "GET", "models", None)
    assert info.value.status == 500
    assert info.value.body == "boom"


@pytest.mark.asyncio
async def test_ensure_success_returns_successful_response():
    response = httpx.Response(204, request=httpx.Request("GET", BASE))
    assert await ensure_success(response) is response


@pytest.mark.asyncio
async def test_parse_json_reports_invalid_body():
    response = httpx.Response(200, text="not json", request=httpx.Request("GET", BASE))
    with pytest.raises(DeserializeError) as info:
        await parse_json(response)
    assert info.value.body == "not json"


@pytest.mark.asyncio
async def test_unserializable_body_raises_serialize_error():
    async with _client(lambda req: httpx.Response(200, json={})) as client:
        with pytest.raises(SerializeError):
            await request(client, BASE, "POST", "chat", {"value": object()})


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error():
    def handler(req):
        raise httpx.ConnectError("refused", request=req)

    async with _client(handler) as client:
        with pytest.raises(TransportRequestError) as info:
            await request(client, BASE, "GET", "models", None)
    assert isinstance(info.value.__cause__, httpx.ConnectError)