"""HTTP transport helpers for OpenAI-like JSON APIs."""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any

import httpx

from .transport_errors import (
    BuildClientError,
    DeserializeError,
    HttpStatusError,
    InvalidConfigError,
    SerializeError,
    TransportRequestError,
)

__all__ = [
    "build_http_client",
    "request",
    "request_json",
    "parse_json",
    "ensure_success",
    "endpoint_url",
]


def _is_valid_header_value(value: str) -> bool:
    return all(ch == "\t" or (ord(ch) >= 32 and ord(ch) != 127) for ch in value)


def build_http_client(
    api_key: str,
    timeout: float | timedelta,
    user_agent: str | None = None,
) -> httpx.AsyncClient:
    """Build an async client that sends Bearer auth and accepts JSON."""
    auth_value = f"Bearer {api_key}"
    if not _is_valid_header_value(auth_value):
        raise InvalidConfigError("api key contains invalid header characters")

    headers: dict[str, bytes] = {
        "authorization": auth_value.encode("utf-8"),
        "accept": b"application/json",
    }
    if user_agent is not None:
        if not _is_valid_header_value(user_agent):
            raise BuildClientError(ValueError("user agent contains invalid header characters"))
        headers["user-agent"] = user_agent.encode("utf-8")

    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
    try:
        return httpx.AsyncClient(headers=headers, timeout=httpx.Timeout(seconds))
    except Exception as exc:  # noqa: BLE001 - any construction failure is reported the same way
        raise BuildClientError(exc) from exc


def endpoint_url(base_url: str, path: str) -> str:
    """Join a base URL and an endpoint path without duplicating slashes."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


async def ensure_success(response: httpx.Response) -> httpx.Response:
    """Return the response if it succeeded, else raise with the raw body kept."""
    if response.is_success:
        return response
    try:
        await response.aread()
    except httpx.HTTPError as exc:
        raise TransportRequestError(exc) from exc
    finally:
        await response.aclose()
    raise HttpStatusError(response.status_code, response.text)


async def request(
    client: httpx.AsyncClient,
    base_url: str,
    method: str,
    path: str,
    body: Any = None,
) -> httpx.Response:
    """Send a request and return the successful, not yet read response."""
    url = endpoint_url(base_url, path)
    content: bytes | None = None
    headers: dict[str, str] | None = None

    if body is not None:
        try:
            content = json.dumps(
                body, separators=(",", ":"), ensure_ascii=False, allow_nan=False
            ).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializeError(exc) from exc
        headers = {"content-type": "application/json"}

    built = client.build_request(method, url, content=content, headers=headers)
    try:
        response = await client.send(built, stream=True)
    except httpx.HTTPError as exc:
        raise TransportRequestError(exc) from exc
    return await ensure_success(response)


async def parse_json(response: httpx.Response) -> Any:
    """Read a response body and decode it as JSON."""
    try:
        await response.aread()
    except httpx.HTTPError as exc:
        raise TransportRequestError(exc) from exc
    finally:
        await response.aclose()
    body = response.text
    try:
        return json.loads(body)
    except json.JSONDecodeError as exc:
        raise DeserializeError(exc, body) from exc


async def request_json(
    client: httpx.AsyncClient,
    base_url: str,
    method: str,
    path: str,
    body: Any = None,
) -> Any:
    """Send a JSON request and decode the JSON response body."""
    response = await request(client, base_url, method, path, body)
    return await parse_json(response)