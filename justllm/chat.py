"""Chat-completion requests, messages, responses and streaming chunks."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Union

from .chat_types import (
    ChatCompletionChunkToolCall,
    ChatCompletionLogprobs,
    ChatToolCall,
    FinishReason,
    ResponseFormat,
    StopSequence,
    StreamOptions,
    ToolChoice,
    ToolDefinition,
    Usage,
    stop_from_json,
    stop_to_json,
    tool_choice_from_json,
    tool_choice_to_json,
)

__all__ = [
    "ChatMessage",
    "TextMessage",
    "ToolCallsMessage",
    "ToolResultMessage",
    "ChatCompletionRequest",
    "AssistantRole",
    "AssistantMessage",
    "ChatChoice",
    "ChatCompletionResponse",
    "DeltaMessage",
    "ChatCompletionChunkChoice",
    "ChatCompletionChunk",
    "message",
    "named_message",
    "system_message",
    "user_message",
    "assistant_message",
    "assistant_tool_calls",
    "tool_result",
    "message_from_dict",
]


def _object(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _string(data: Mapping[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _opt_string(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _list(value: Any, key: str) -> list[Any]:
    if not isinstance(value, list):
        raise ValueError(f"field `{key}` must be an array")
    return value


def _opt(value: Any, convert: Callable[[Any], Any]) -> Any:
    return convert(value) if value is not None else None


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        out[key] = value


def _reject_unknown(data: Mapping[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"unknown field `{sorted(unknown)[0]}`")


# --- request-side messages -------------------------------------------------


@dataclass
class TextMessage:
    """Plain role/content message; the role is a free-form string."""

    role: str
    content: str
    name: str | None = None
    reasoning_content: str | None = None

    # Plain messages never carry tool calls or a tool-call id.
    tool_calls: ClassVar[None] = None
    tool_call_id: ClassVar[None] = None

    _KEYS: ClassVar[frozenset[str]] = frozenset({"role", "content", "name", "reasoning_content"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": self.role, "content": self.content}
        _put(out, "name", self.name)
        _put(out, "reasoning_content", self.reasoning_content)
        return out

    @classmethod
    def _parse(cls, data: Mapping[str, Any]) -> TextMessage:
        _reject_unknown(data, cls._KEYS)
        return cls(
            role=_string(data, "role"),
            content=_string(data, "content"),
            name=_opt_string(data, "name"),
            reasoning_content=_opt_string(data, "reasoning_content"),
        )


@dataclass
class ToolCallsMessage:
    """Assistant message carrying one or more tool calls."""

    role: str
    tool_calls: list[ChatToolCall]
    content: str | None = None
    name: str | None = None
    reasoning_content: str | None = None

    tool_call_id: ClassVar[None] = None

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"role", "content", "name", "tool_calls", "reasoning_content"}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": self.role}
        _put(out, "content", self.content)
        _put(out, "name", self.name)
        out["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        _put(out, "reasoning_content", self.reasoning_content)
        return out

    @classmethod
    def _parse(cls, data: Mapping[str, Any]) -> ToolCallsMessage:
        _reject_unknown(data, cls._KEYS)
        calls = _list(_require(data, "tool_calls"), "tool_calls")
        return cls(
            role=_string(data, "role"),
            tool_calls=[ChatToolCall.from_dict(call) for call in calls],
            content=_opt_string(data, "content"),
            name=_opt_string(data, "name"),
            reasoning_content=_opt_string(data, "reasoning_content"),
        )


@dataclass
class ToolResultMessage:
    """Tool result sent back to the model."""

    role: str
    content: str
    tool_call_id: str

    # Tool results carry no name, tool calls or reasoning.
    name: ClassVar[None] = None
    tool_calls: ClassVar[None] = None
    reasoning_content: ClassVar[None] = None

    _KEYS: ClassVar[frozenset[str]] = frozenset({"role", "content", "tool_call_id"})

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content, "tool_call_id": self.tool_call_id}

    @classmethod
    def _parse(cls, data: Mapping[str, Any]) -> ToolResultMessage:
        _reject_unknown(data, cls._KEYS)
        return cls(
            role=_string(data, "role"),
            content=_string(data, "content"),
            tool_call_id=_string(data, "tool_call_id"),
        )


ChatMessage = Union[ToolCallsMessage, ToolResultMessage, TextMessage]


def message(role: str, content: str) -> TextMessage:
    """Create a message with an explicit role."""
    return TextMessage(role=role, content=content)


def named_message(role: str, content: str, name: str) -> TextMessage:
    """Create a message carrying the optional ``name`` field."""
    return TextMessage(role=role, content=content, name=name)


def system_message(content: str) -> TextMessage:
    """Create a system message."""
    return TextMessage(role="system", content=content)


def user_message(content: str) -> TextMessage:
    """Create a user message."""
    return TextMessage(role="user", content=content)


def assistant_message(content: str, reasoning_content: str | None = None) -> TextMessage:
    """Create an assistant message without tool calls."""
    return TextMessage(role="assistant", content=content, reasoning_content=reasoning_content)


def assistant_tool_calls(
    tool_calls: Iterable[ChatToolCall],
    content: str | None = None,
    reasoning_content: str | None = None,
) -> ToolCallsMessage:
    """Create an assistant message that carries tool calls."""
    return ToolCallsMessage(
        role="assistant",
        tool_calls=list(tool_calls),
        content=content,
        reasoning_content=reasoning_content,
    )


def tool_result(content: str, tool_call_id: str) -> ToolResultMessage:
    """Create a tool result message."""
    return ToolResultMessage(role="tool", content=content, tool_call_id=tool_call_id)


def message_from_dict(data: Any) -> ChatMessage:
    """Decode a message, trying tool-call, tool-result and plain shapes in turn."""
    data = _object(data)
    for variant in (ToolCallsMessage, ToolResultMessage, TextMessage):
        try:
            return variant._parse(data)
        except (ValueError, TypeError):
            continue
    raise ValueError("data did not match any variant of ChatMessage")


# --- request ---------------------------------------------------------------


@dataclass
class ChatCompletionRequest:
    """Normalized chat completion request understood by backends."""

    model: str
    messages: list[ChatMessage]
    frequency_penalty: float | None = None
    max_tokens: int | None = None
    presence_penalty: float | None = None
    response_format: ResponseFormat | None = None
    stop: StopSequence | None = None
    stream: bool | None = None
    stream_options: StreamOptions | None = None
    temperature: float | None = None
    top_p: float | None = None
    tools: list[ToolDefinition] | None = None
    tool_choice: ToolChoice | None = None
    logprobs: bool | None = None
    top_logprobs: int | None = None

    def with_tools(self, tools: Iterable[ToolDefinition]) -> ChatCompletionRequest:
        """Return a copy with the given tools configured."""
        return replace(self, messages=list(self.messages), tools=list(tools))

    def with_tool_choice(self, tool_choice: ToolChoice) -> ChatCompletionRequest:
        """Return a copy with the given tool choice."""
        return replace(self, messages=list(self.messages), tool_choice=tool_choice)

    def with_temperature(self, temperature: float) -> ChatCompletionRequest:
        """Return a copy with the given sampling temperature."""
        return replace(self, messages=list(self.messages), temperature=temperature)

    def with_max_tokens(self, max_tokens: int) -> ChatCompletionRequest:
        """Return a copy with the given generated-token limit."""
        return replace(self, messages=list(self.messages), max_tokens=max_tokens)

    def with_response_format(self, response_format: ResponseFormat) -> ChatCompletionRequest:
        """Return a copy with the given response-format hint."""
        return replace(self, messages=list(self.messages), response_format=response_format)

    def with_system_prompt(self, content: str) -> ChatCompletionRequest:
        """Return a copy with a system message appended to the leading system block."""
        return self.prepend_system_message(content)

    def prepend_system_message(self, content: str) -> ChatCompletionRequest:
        """Return a copy with a system message appended to the leading system block."""
        insert_at = 0
        for existing in self.messages:
            if existing.role != "system":
                break
            insert_at += 1
        messages = list(self.messages)
        messages.insert(insert_at, system_message(content))
        return replace(self, messages=messages)

    def prepend_message(self, message: ChatMessage) -> ChatCompletionRequest:
        """Return a copy with the message placed first."""
        return replace(self, messages=[message, *self.messages])

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [entry.to_dict() for entry in self.messages],
            "frequency_penalty": self.frequency_penalty,
            "max_tokens": self.max_tokens,
            "presence_penalty": self.presence_penalty,
            "response_format": _opt(self.response_format, ResponseFormat.to_dict),
            "stop": _opt(self.stop, stop_to_json),
            "stream": self.stream,
            "stream_options": _opt(self.stream_options, StreamOptions.to_dict),
            "temperature": self.temperature,
            "top_p": self.top_p,
            "tools": _opt(self.tools, lambda tools: [tool.to_dict() for tool in tools]),
            "tool_choice": _opt(self.tool_choice, tool_choice_to_json),
            "logprobs": self.logprobs,
            "top_logprobs": self.top_logprobs,
        }

    @classmethod
    def from_dict(cls, data: Any) -> ChatCompletionRequest:
        data = _object(data)
        messages = _list(_require(data, "messages"), "messages")
        tools = data.get("tools")
        return cls(
            model=_string(data, "model"),
            messages=[message_from_dict(entry) for entry in messages],
            frequency_penalty=data.get("frequency_penalty"),
            max_tokens=data.get("max_tokens"),
            presence_penalty=data.get("presence_penalty"),
            response_format=_opt(data.get("response_format"), ResponseFormat.from_dict),
            stop=_opt(data.get("stop"), stop_from_json),
            stream=data.get("stream"),
            stream_options=_opt(data.get("stream_options"), StreamOptions.from_dict),
            temperature=data.get("temperature"),
            top_p=data.get("top_p"),
            tools=_opt(
                tools,
                lambda items: [ToolDefinition.from_dict(t) for t in _list(items, "tools")],
            ),
            tool_choice=_opt(data.get("tool_choice"), tool_choice_from_json),
            logprobs=data.get("logprobs"),
            top_logprobs=data.get("top_logprobs"),
        )


# --- responses ---------------------------------------------------------------


class AssistantRole(str, Enum):
    ASSISTANT = "assistant"


def _tool_calls_from(value: Any) -> list[ChatToolCall] | None:
    return _opt(value, lambda items: [ChatToolCall.from_dict(c) for c in _list(items, "tool_calls")])


@dataclass
class AssistantMessage:
    """Assistant message returned in a non-streaming response."""

    content: str | None = None
    reasoning_content: str | None = None
    tool_calls: list[ChatToolCall] | None = None
    role: AssistantRole = AssistantRole.ASSISTANT

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "content", self.content)
        _put(out, "reasoning_content", self.reasoning_content)
        if self.tool_calls is not None:
            out["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        out["role"] = self.role.value
        return out

    @classmethod
    def from_dict(cls, data: Any) -> AssistantMessage:
        data = _object(data)
        return cls(
            content=_opt_string(data, "content"),
            reasoning_content=_opt_string(data, "reasoning_content"),
            tool_calls=_tool_calls_from(data.get("tool_calls")),
            role=AssistantRole(_require(data, "role")),
        )


@dataclass
class ChatChoice:
    """One choice inside a non-streaming response."""

    index: int
    message: AssistantMessage
    finish_reason: FinishReason | None = None
    logprobs: ChatCompletionLogprobs | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "finish_reason", _opt(self.finish_reason, lambda r: r.value))
        out["index"] = self.index
        out["message"] = self.message.to_dict()
        _put(out, "logprobs", _opt(self.logprobs, ChatCompletionLogprobs.to_dict))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ChatChoice:
        data = _object(data)
        return cls(
            index=_require(data, "index"),
            message=AssistantMessage.from_dict(_require(data, "message")),
            finish_reason=_opt(data.get("finish_reason"), FinishReason),
            logprobs=_opt(data.get("logprobs"), ChatCompletionLogprobs.from_dict),
        )


def _envelope_to_dict(
    obj: ChatCompletionResponse | ChatCompletionChunk, choices: list[dict[str, Any]]
) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": obj.id,
        "choices": choices,
        "created": obj.created,
        "model": obj.model,
    }
    _put(out, "system_fingerprint", obj.system_fingerprint)
    out["object"] = obj.object
    _put(out, "usage", _opt(obj.usage, Usage.to_dict))
    return out


def _envelope_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": _string(data, "id"),
        "created": _require(data, "created"),
        "model": _string(data, "model"),
        "object": _string(data, "object"),
        "system_fingerprint": _opt_string(data, "system_fingerprint"),
        "usage": _opt(data.get("usage"), Usage.from_dict),
    }


@dataclass
class ChatCompletionResponse:
    """Normalized non-streaming chat completion response."""

    id: str
    choices: list[ChatChoice]
    created: int
    model: str
    object: str
    system_fingerprint: str | None = None
    usage: Usage | None = None

    def first_choice(self) -> ChatChoice | None:
        """Return the first choice, if any."""
        return self.choices[0] if self.choices else None

    def first_message(self) -> AssistantMessage | None:
        """Return the first choice's assistant message, if any."""
        choice = self.first_choice()
        return choice.message if choice is not None else None

    def first_choice_content(self) -> str | None:
        """Return the first choice's text content, if any."""
        message = self.first_message()
        return message.content if message is not None else None

    def first_choice_reasoning_content(self) -> str | None:
        """Return the first choice's reasoning content, if any."""
        message = self.first_message()
        return message.reasoning_content if message is not None else None

    def first_choice_tool_calls(self) -> list[ChatToolCall] | None:
        """Return the first choice's tool calls, if any."""
        message = self.first_message()
        return message.tool_calls if message is not None else None

    def to_dict(self) -> dict[str, Any]:
        return _envelope_to_dict(self, [choice.to_dict() for choice in self.choices])

    @classmethod
    def from_dict(cls, data: Any) -> ChatCompletionResponse:
        data = _object(data)
        choices = _list(_require(data, "choices"), "choices")
        return cls(
            choices=[ChatChoice.from_dict(choice) for choice in choices],
            **_envelope_fields(data),
        )


@dataclass
class DeltaMessage:
    """Incremental assistant delta payload."""

    content: str | None = None
    reasoning_content: str | None = None
    role: AssistantRole | None = None
    tool_calls: list[ChatCompletionChunkToolCall] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "content", self.content)
        _put(out, "reasoning_content", self.reasoning_content)
        _put(out, "role", _opt(self.role, lambda r: r.value))
        if self.tool_calls is not None:
            out["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        return out

    @classmethod
    def from_dict(cls, data: Any) -> DeltaMessage:
        data = _object(data)
        return cls(
            content=_opt_string(data, "content"),
            reasoning_content=_opt_string(data, "reasoning_content"),
            role=_opt(data.get("role"), AssistantRole),
            tool_calls=_opt(
                data.get("tool_calls"),
                lambda items: [
                    ChatCompletionChunkToolCall.from_dict(c) for c in _list(items, "tool_calls")
                ],
            ),
        )


@dataclass
class ChatCompletionChunkChoice:
    """One choice inside a streaming chunk."""

    delta: DeltaMessage
    index: int
    finish_reason: FinishReason | None = None
    logprobs: ChatCompletionLogprobs | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"delta": self.delta.to_dict()}
        _put(out, "finish_reason", _opt(self.finish_reason, lambda r: r.value))
        out["index"] = self.index
        _put(out, "logprobs", _opt(self.logprobs, ChatCompletionLogprobs.to_dict))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ChatCompletionChunkChoice:
        data = _object(data)
        return cls(
            delta=DeltaMessage.from_dict(_require(data, "delta")),
            index=_require(data, "index"),
            finish_reason=_opt(data.get("finish_reason"), FinishReason),
            logprobs=_opt(data.get("logprobs"), ChatCompletionLogprobs.from_dict),
        )


@dataclass
class ChatCompletionChunk:
    """Normalized streaming chunk."""

    id: str
    choices: list[ChatCompletionChunkChoice]
    created: int
    model: str
    object: str
    system_fingerprint: str | None = None
    usage: Usage | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        return _envelope_to_dict(self, [choice.to_dict() for choice in self.choices])

    @classmethod
    def from_dict(cls, data: Any) -> ChatCompletionChunk:
        data = _object(data)
        choices = _list(_require(data, "choices"), "choices")
        return cls(
            choices=[ChatCompletionChunkChoice.from_dict(choice) for choice in choices],
            **_envelope_fields(data),
        )