"""Errors raised by the shared HTTP and SSE transport layer."""

from __future__ import annotations

from http import HTTPStatus

__all__ = [
    "TransportError",
    "InvalidConfigError",
    "BuildClientError",
    "TransportRequestError",
    "HttpStatusError",
    "SerializeError",
    "DeserializeError",
    "Utf8DecodeError",
    "InvalidResponseError",
]


class TransportError(Exception):
    """Base class for failures of the HTTP/SSE transport layer."""


class _SourcedError(TransportError):
    """Transport error that wraps an underlying exception."""

    _prefix = ""

    def __init__(self, source: BaseException) -> None:
        super().__init__(f"{self._prefix}: {source}")
        self.source = source
        self.__cause__ = source


class InvalidConfigError(TransportError):
    """The transport was configured with unusable values."""

    def __init__(self, message: str) -> None:
        super().__init__(f"invalid configuration: {message}")
        self.message = message


class BuildClientError(_SourcedError):
    """The HTTP client could not be constructed."""

    _prefix = "failed to build http client"


class TransportRequestError(_SourcedError):
    """The request failed before a usable response arrived."""

    _prefix = "request failed"


class SerializeError(_SourcedError):
    """The request body could not be encoded as JSON."""

    _prefix = "failed to serialize request body"


class Utf8DecodeError(_SourcedError):
    """A streamed event was not valid UTF-8."""

    _prefix = "failed to decode streamed response as UTF-8"


def _status_text(status: int) -> str:
    try:
        phrase = HTTPStatus(status).phrase
    except ValueError:
        return f"{status} <unknown status code>"
    return f"{status} {phrase}"


class HttpStatusError(TransportError):
    """The API answered with a non-success status; the raw body is kept."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"api returned {_status_text(status)}")
        self.status = status
        self.body = body


class DeserializeError(TransportError):
    """A response body could not be decoded; the raw body is kept."""

    def __init__(self, source: BaseException, body: str) -> None:
        super().__init__(f"failed to deserialize response body: {source}")
        self.source = source
        self.body = body
        self.__cause__ = source


class InvalidResponseError(TransportError):
    """The response did not have the expected shape."""

    def __init__(self, message: str) -> None:
        super().__init__(f"invalid response: {message}")
        self.message = message