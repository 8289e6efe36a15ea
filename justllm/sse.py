"""Server-sent-event parsing for streams of JSON chunks."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from typing import Any, Generic, TypeVar

import httpx

from .transport_errors import (
    DeserializeError,
    InvalidResponseError,
    TransportRequestError,
    Utf8DecodeError,
)

__all__ = ["DONE", "JsonEventStream", "ensure_event_stream", "split_event", "parse_event"]

T = TypeVar("T")

_ASCII_WHITESPACE = frozenset(b" \t\n\r\x0c")


class _Done:
    def __repr__(self) -> str:
        return "DONE"


DONE = _Done()
"""Returned by :func:`parse_event` for the ``[DONE]`` terminator."""


def _is_blank(data: bytes | bytearray) -> bool:
    return all(byte in _ASCII_WHITESPACE for byte in data)


def ensure_event_stream(response: httpx.Response) -> None:
    """Raise unless the response declares a ``text/event-stream`` body."""
    raw = next(
        (value for key, value in response.headers.raw if key.lower() == b"content-type"),
        None,
    )
    if raw is None:
        raise InvalidResponseError("streaming response was missing content-type")

    try:
        content_type = raw.decode("ascii")
    except UnicodeDecodeError:
        content_type = None
    if content_type is None or not _is_visible(content_type):
        raise InvalidResponseError("streaming response content-type was not valid UTF-8")

    if not content_type.startswith("text/event-stream"):
        raise InvalidResponseError(
            f"expected text/event-stream response, got {content_type}"
        )


def _is_visible(text: str) -> bool:
    return all(ch == "\t" or 32 <= ord(ch) < 127 for ch in text)


def split_event(buffer: bytes | bytearray) -> tuple[int, int] | None:
    """Find the first event boundary: (end of event, bytes to consume), or None."""
    candidates = [
        (index, index + len(separator))
        for separator in (b"\r\n\r\n", b"\n\n")
        if (index := buffer.find(separator)) != -1
    ]
    return min(candidates) if candidates else None


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]


def parse_event(raw_event: bytes | bytearray, decode: Callable[[Any], T] | None = None) -> Any:
    """Parse one raw event.

    Returns ``None`` when the event carries no data, :data:`DONE` for the
    terminator, and otherwise the decoded JSON payload.
    """
    if _is_blank(raw_event):
        return None

    try:
        event = bytes(raw_event).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise Utf8DecodeError(exc) from exc

    data_lines = [
        line[len("data:"):].lstrip()
        for line in _lines(event)
        if not line.startswith(":") and line.startswith("data:")
    ]
    if not data_lines:
        return None

    payload = "\n".join(data_lines)
    if payload == "[DONE]":
        return DONE

    try:
        value = json.loads(payload)
        return decode(value) if decode is not None else value
    except (ValueError, KeyError, TypeError) as exc:
        raise DeserializeError(exc, payload) from exc


class JsonEventStream(Generic[T]):
    """Async iterator of JSON chunks carried by an SSE response."""

    def __init__(self, response: httpx.Response, decode: Callable[[Any], T] | None = None) -> None:
        ensure_event_stream(response)
        self._response = response
        self._decode = decode

    def __repr__(self) -> str:
        return "JsonEventStream(..)"

    async def _raw_chunks(self) -> AsyncIterator[bytes]:
        iterator = self._response.aiter_bytes().__aiter__()
        while True:
            try:
                chunk = await iterator.__anext__()
            except StopAsyncIteration:
                return
            except httpx.HTTPError as exc:
                raise TransportRequestError(exc) from exc
            yield chunk

    async def __aiter__(self) -> AsyncIterator[T]:
        buffer = bytearray()
        done = False
        try:
            async for chunk in self._raw_chunks():
                buffer.extend(chunk)
                while (boundary := split_event(buffer)) is not None:
                    event_end, consumed = boundary
                    event = bytes(buffer[:event_end])
                    del buffer[:consumed]
                    parsed = parse_event(event, self._decode)
                    if parsed is DONE:
                        done = True
                        break
                    if parsed is not None:
                        yield parsed
                if done:
                    break

            if not done and not _is_blank(buffer):
                parsed = parse_event(bytes(buffer), self._decode)
                if parsed is not None and parsed is not DONE:
                    yield parsed
        finally:
            await self._response.aclose()