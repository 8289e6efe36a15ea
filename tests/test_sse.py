import httpx
import pytest

from justllm.sse import DONE, JsonEventStream, ensure_event_stream, parse_event, split_event
from justllm.transport_errors import (
    DeserializeError,
    InvalidResponseError,
    TransportRequestError,
    Utf8DecodeError,
)


def _response(chunks, content_type="text/event-stream"):
    async def body():
        for chunk in chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk

    headers = {} if content_type is None else {"content-type": content_type}
    return httpx.Response(
        200,
        headers=headers,
        content=body(),
        request=httpx.Request("GET", "http://localhost/stream"),
    )


async def _collect(stream):
    return [item async for item in stream]


@pytest.mark.parametrize("separator", [b"\n\n", b"\r\n\r\n"])
def test_split_event_finds_boundary(separator):
    buffer = b"a" + separator + b"b"
    end, consumed = split_event(buffer)
    assert buffer[:end] == b"a"
    assert buffer[consumed:] == b"b"


def test_split_event_prefers_earliest_boundary():
    buffer = b"x\n\ny\r\n\r\nz"
    end, consumed = split_event(buffer)
    assert buffer[:end] == b"x"
    assert buffer[consumed:] == b"y\r\n\r\nz"


def test_split_event_without_boundary():
    assert split_event(b"data: partial\n") is None


def test_parse_event_decodes_data():
    assert parse_event(b'data: {"a": 1}') == {"a": 1}


def test_parse_event_applies_decoder():
    assert parse_event(b'data: {"a": 2}', lambda value: value["a"]) == 2


def test_parse_event_joins_multiline_data():
    assert parse_event(b'data: {"a":\r\ndata: 1}\r\n') == {"a": 1}


@pytest.mark.parametrize("raw", [b"", b"  \r\n\t", b": keep-alive", b"event: ping\nid: 7"])
def test_parse_event_skips_events_without_data(raw):
    assert parse_event(raw) is None


def test_parse_event_recognises_done():
    assert parse_event(b"data: [DONE]") is DONE


def test_parse_event_rejects_invalid_utf8():
    with pytest.raises(Utf8DecodeError):
        parse_event(b"data: \xff")


def test_parse_event_rejects_invalid_json():
    with pytest.raises(DeserializeError) as info:
        parse_event(b"data: not json")
    assert info.value.body == "not json"


def test_parse_event_wraps_decoder_errors():
    with pytest.raises(DeserializeError):
        parse_event(b'data: {"a": 1}', lambda value: value["missing"])


def test_ensure_event_stream_requires_content_type():
    with pytest.raises(InvalidResponseError, match="missing content-type"):
        ensure_event_stream(_response([], content_type=None))


def test_ensure_event_stream_rejects_other_types():
    with pytest.raises(InvalidResponseError, match="expected text/event-stream"):
        ensure_event_stream(_response([], content_type="application/json"))


def test_ensure_event_stream_rejects_non_ascii_content_type():
    response = _response([], content_type="text/event-stream\u00e9".encode("latin-1"))
    with pytest.raises(InvalidResponseError, match="not valid UTF-8"):
        ensure_event_stream(response)


def test_stream_constructor_rejects_non_sse_response():
    with pytest.raises(InvalidResponseError):
        JsonEventStream(_response([], content_type="text/plain"))


@pytest.mark.asyncio
async def test_stream_reassembles_events_across_chunks_and_stops_at_done():
    chunks = [
        b'data: {"n": 1}\n',
        b'\ndata: {"n"',
        b": 2}\n\n",
        b"data: [DONE]\n\n",
        b'data: {"n": 3}\n\n',
    ]
    stream = JsonEventStream(_response(chunks, "text/event-stream; charset=utf-8"))
    assert await _collect(stream) == [{"n": 1}, {"n": 2}]


@pytest.mark.asyncio
async def test_stream_flushes_trailing_event_without_separator():
    stream = JsonEventStream(_response([b": hi\n\n", b'data: {"n": 1}']))
    assert await _collect(stream) == [{"n": 1}]


@pytest.mark.asyncio
async def test_stream_applies_decoder():
    stream = JsonEventStream(_response([b'data: {"n": 5}\n\n']), lambda value: value["n"])
    assert await _collect(stream) == [5]


@pytest.mark.asyncio
async def test_stream_raises_on_bad_payload():
    stream = JsonEventStream(_response([b'data: {"n": 1}\n\n', b"data: oops\n\n"]))
    received = []
    with pytest.raises(DeserializeError) as info:
        async for item in stream:
            received.append(item)
    assert received == [{"n": 1}]
    assert info.value.body == "oops"


@pytest.mark.asyncio
async def test_stream_wraps_transport_failures():
    stream = JsonEventStream(_response([b'data: {"n": 1}\n\n', httpx.ReadError("cut")]))
    received = []
    with pytest.raises(TransportRequestError) as info:
        async for item in stream:
            received.append(item)
    assert received == [{"n": 1}]
    assert isinstance(info.value.source, httpx.ReadError)