"""Backend-bound prepared chat requests."""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import InvalidRequestError

__all__ = ["PreparedChatRequestPreview", "PreparedChatRequest"]

_U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class PreparedChatRequestPreview:
    """Compact summary of a prepared request."""

    tool_count: int
    has_stream: bool
    has_response_format: bool


class PreparedChatRequest:
    """Chat request bound to the backend that prepared it.

    The serialized request body is the single source of truth; every summary
    is derived from it, and the object holds no live backend handle.
    """

    __slots__ = ("_backend_id", "_request_body")

    def __init__(self, backend_id: str, request_body: Any) -> None:
        self._backend_id = str(backend_id)
        self._request_body = copy.deepcopy(request_body)
        self._validate()

    @property
    def backend_id(self) -> str:
        """Identifier of the backend that prepared this request."""
        return self._backend_id

    @property
    def request_body(self) -> dict[str, Any]:
        """The canonical request body for execution by a backend."""
        return self._request_body

    def model(self) -> str | None:
        """Return the serialized ``model`` when it is a string."""
        value = self._request_body.get("model")
        return value if isinstance(value, str) else None

    def message_count(self) -> int:
        """Return how many serialized messages the request carries."""
        messages = self._messages()
        return len(messages) if messages is not None else 0

    def preview(self) -> PreparedChatRequestPreview:
        """Return a summary derived from the canonical payload."""
        tools = self._request_body.get("tools")
        tool_count = min(len(tools), _U32_MAX) if isinstance(tools, list) else 0
        return PreparedChatRequestPreview(
            tool_count=tool_count,
            has_stream=self.has_stream(),
            has_response_format="response_format" in self._request_body,
        )

    def has_stream(self) -> bool:
        """Return whether the payload enables streaming."""
        return self._request_body.get("stream") is True

    def request_body_text(self) -> str:
        """Return the request body as compact JSON text for diagnostics."""
        return json.dumps(
            self._request_body, separators=(",", ":"), ensure_ascii=False, sort_keys=True
        )

    def ensure_backend(self, backend_id: str) -> None:
        """Raise unless this request was prepared by ``backend_id``."""
        if self._backend_id != backend_id:
            raise InvalidRequestError(
                f"prepared request for backend '{self._backend_id}' "
                f"cannot be used by '{backend_id}'"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "backend_id": self._backend_id,
            "request_body": copy.deepcopy(self._request_body),
        }

    @classmethod
    def from_dict(cls, data: Any) -> PreparedChatRequest:
        """Decode and validate; raises ``ValueError`` or ``InvalidRequestError``."""
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        try:
            backend_id = data["backend_id"]
            request_body = data["request_body"]
        except KeyError as exc:
            raise ValueError(f"missing field `{exc.args[0]}`") from None
        if not isinstance(backend_id, str):
            raise ValueError("field `backend_id` must be a string")
        return cls(backend_id, request_body)

    def _validate(self) -> None:
        if not isinstance(self._request_body, dict):
            raise InvalidRequestError("prepared request body must be a JSON object")
        if self.model() is None:
            raise InvalidRequestError("prepared request body must include a string model field")
        if self._messages() is None:
            raise InvalidRequestError("prepared request body must include a messages array")

    def _messages(self) -> list[Any] | None:
        messages = self._request_body.get("messages")
        return messages if isinstance(messages, list) else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreparedChatRequest):
            return NotImplemented
        return (
            self._backend_id == other._backend_id
            and self._request_body == other._request_body
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"PreparedChatRequest(backend_id={self._backend_id!r}, "
            f"request_body={self._request_body!r})"
        )