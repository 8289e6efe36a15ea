"""Chat-completion value types shared by requests and responses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

__all__ = [
    "ResponseFormatType",
    "ResponseFormat",
    "StreamOptions",
    "ToolType",
    "FunctionDefinition",
    "ToolDefinition",
    "NamedToolChoiceFunction",
    "NamedToolChoice",
    "ToolChoiceMode",
    "FunctionCall",
    "ChatToolCall",
    "FunctionCallDelta",
    "ChatCompletionChunkToolCall",
    "FinishReason",
    "CompletionTokensDetails",
    "Usage",
    "TopLogprob",
    "TokenLogprob",
    "ChatCompletionLogprobs",
    "stop_to_json",
    "stop_from_json",
    "tool_choice_to_json",
    "tool_choice_from_json",
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


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        out[key] = value


class ResponseFormatType(str, Enum):
    TEXT = "text"
    JSON_OBJECT = "json_object"


class ToolType(str, Enum):
    FUNCTION = "function"


class ToolChoiceMode(str, Enum):
    NONE = "none"
    AUTO = "auto"
    REQUIRED = "required"


class FinishReason(str, Enum):
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    INSUFFICIENT_SYSTEM_RESOURCE = "insufficient_system_resource"


@dataclass
class ResponseFormat:
    """Structured response-format request."""

    kind: ResponseFormatType

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value}

    @classmethod
    def from_dict(cls, data: Any) -> ResponseFormat:
        return cls(ResponseFormatType(_require(_object(data), "type")))


StopSequence = Union[str, list[str]]


def stop_to_json(stop: StopSequence) -> str | list[str]:
    """Encode a stop sequence: a single string or a list of strings."""
    return stop if isinstance(stop, str) else list(stop)


def stop_from_json(data: Any) -> StopSequence:
    """Decode a stop sequence from JSON."""
    if isinstance(data, str):
        return data
    if isinstance(data, list) and all(isinstance(item, str) for item in data):
        return list(data)
    raise ValueError("stop must be a string or a list of strings")


@dataclass
class StreamOptions:
    """Streaming-specific options."""

    include_usage: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "include_usage", self.include_usage)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> StreamOptions:
        return cls(include_usage=_object(data).get("include_usage"))


@dataclass
class FunctionDefinition:
    """Callable function schema exposed to the model."""

    name: str
    description: str | None = None
    parameters: Any = None
    strict: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        _put(out, "description", self.description)
        _put(out, "parameters", self.parameters)
        _put(out, "strict", self.strict)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> FunctionDefinition:
        data = _object(data)
        return cls(
            name=_require(data, "name"),
            description=data.get("description"),
            parameters=data.get("parameters"),
            strict=data.get("strict"),
        )


@dataclass
class ToolDefinition:
    """Tool definition passed to the model."""

    function: FunctionDefinition
    kind: ToolType = ToolType.FUNCTION

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "function": self.function.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> ToolDefinition:
        data = _object(data)
        return cls(
            function=FunctionDefinition.from_dict(_require(data, "function")),
            kind=ToolType(_require(data, "type")),
        )


@dataclass
class NamedToolChoiceFunction:
    """Function named in a tool-choice request."""

    name: str


@dataclass
class NamedToolChoice:
    """Explicit named tool-choice request."""

    function: NamedToolChoiceFunction
    kind: ToolType = ToolType.FUNCTION

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "function": {"name": self.function.name}}

    @classmethod
    def from_dict(cls, data: Any) -> NamedToolChoice:
        data = _object(data)
        function = _object(_require(data, "function"))
        return cls(
            function=NamedToolChoiceFunction(_require(function, "name")),
            kind=ToolType(_require(data, "type")),
        )


ToolChoice = Union[ToolChoiceMode, NamedToolChoice]


def tool_choice_to_json(choice: ToolChoice) -> str | dict[str, Any]:
    """Encode a tool choice: a mode string or a named-tool object."""
    if isinstance(choice, ToolChoiceMode):
        return choice.value
    return choice.to_dict()


def tool_choice_from_json(data: Any) -> ToolChoice:
    """Decode a tool choice from JSON."""
    if isinstance(data, str):
        return ToolChoiceMode(data)
    if isinstance(data, Mapping):
        return NamedToolChoice.from_dict(data)
    raise ValueError("tool_choice must be a mode string or a named tool object")


@dataclass
class FunctionCall:
    """Function invocation payload."""

    name: str
    arguments: str


@dataclass
class ChatToolCall:
    """Tool call emitted in a non-streaming assistant response."""

    id: str
    function: FunctionCall
    kind: ToolType = ToolType.FUNCTION

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "function": {"name": self.function.name, "arguments": self.function.arguments},
        }

    @classmethod
    def from_dict(cls, data: Any) -> ChatToolCall:
        data = _object(data)
        function = _object(_require(data, "function"))
        return cls(
            id=_require(data, "id"),
            function=FunctionCall(
                name=_require(function, "name"),
                arguments=_require(function, "arguments"),
            ),
            kind=ToolType(_require(data, "type")),
        )


@dataclass
class FunctionCallDelta:
    """Incremental function-call payload emitted during streaming."""

    name: str | None = None
    arguments: str | None = None


@dataclass
class ChatCompletionChunkToolCall:
    """Incremental tool-call payload emitted during streaming."""

    index: int | None = None
    id: str | None = None
    kind: ToolType | None = None
    function: FunctionCallDelta | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "index", self.index)
        _put(out, "id", self.id)
        _put(out, "type", self.kind.value if self.kind is not None else None)
        if self.function is not None:
            function: dict[str, Any] = {}
            _put(function, "name", self.function.name)
            _put(function, "arguments", self.function.arguments)
            out["function"] = function
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ChatCompletionChunkToolCall:
        data = _object(data)
        kind = data.get("type")
        function = data.get("function")
        if function is not None:
            function = _object(function)
            function = FunctionCallDelta(
                name=function.get("name"), arguments=function.get("arguments")
            )
        return cls(
            index=data.get("index"),
            id=data.get("id"),
            kind=ToolType(kind) if kind is not None else None,
            function=function,
        )


@dataclass
class CompletionTokensDetails:
    """Additional completion-token details when the provider exposes them."""

    reasoning_tokens: int | None = None


@dataclass
class Usage:
    """Token usage metadata; cache fields are absent when not reported."""

    completion_tokens: int
    prompt_tokens: int
    total_tokens: int
    prompt_cache_hit_tokens: int | None = None
    prompt_cache_miss_tokens: int | None = None
    completion_tokens_details: CompletionTokensDetails | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "completion_tokens": self.completion_tokens,
            "prompt_tokens": self.prompt_tokens,
        }
        _put(out, "prompt_cache_hit_tokens", self.prompt_cache_hit_tokens)
        _put(out, "prompt_cache_miss_tokens", self.prompt_cache_miss_tokens)
        out["total_tokens"] = self.total_tokens
        if self.completion_tokens_details is not None:
            details: dict[str, Any] = {}
            _put(details, "reasoning_tokens", self.completion_tokens_details.reasoning_tokens)
            out["completion_tokens_details"] = details
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Usage:
        data = _object(data)
        details = data.get("completion_tokens_details")
        if details is not None:
            details = CompletionTokensDetails(_object(details).get("reasoning_tokens"))
        return cls(
            completion_tokens=_require(data, "completion_tokens"),
            prompt_tokens=_require(data, "prompt_tokens"),
            total_tokens=_require(data, "total_tokens"),
            prompt_cache_hit_tokens=data.get("prompt_cache_hit_tokens"),
            prompt_cache_miss_tokens=data.get("prompt_cache_miss_tokens"),
            completion_tokens_details=details,
        )


@dataclass
class TopLogprob:
    """Top alternative logprob for a token."""

    token: str
    logprob: float
    bytes: list[int] | None = None


@dataclass
class TokenLogprob:
    """Logprob metadata for a single token."""

    token: str
    logprob: float
    top_logprobs: list[TopLogprob] = field(default_factory=list)
    bytes: list[int] | None = None


def _top_to_dict(entry: TopLogprob) -> dict[str, Any]:
    out: dict[str, Any] = {"token": entry.token, "logprob": entry.logprob}
    _put(out, "bytes", entry.bytes)
    return out


def _top_from_dict(data: Any) -> TopLogprob:
    data = _object(data)
    raw = data.get("bytes")
    return TopLogprob(
        token=_require(data, "token"),
        logprob=float(_require(data, "logprob")),
        bytes=list(raw) if raw is not None else None,
    )


def _token_to_dict(entry: TokenLogprob) -> dict[str, Any]:
    out: dict[str, Any] = {"token": entry.token, "logprob": entry.logprob}
    _put(out, "bytes", entry.bytes)
    out["top_logprobs"] = [_top_to_dict(top) for top in entry.top_logprobs]
    return out


def _token_from_dict(data: Any) -> TokenLogprob:
    data = _object(data)
    raw = data.get("bytes")
    return TokenLogprob(
        token=_require(data, "token"),
        logprob=float(_require(data, "logprob")),
        top_logprobs=[_top_from_dict(top) for top in _require(data, "top_logprobs")],
        bytes=list(raw) if raw is not None else None,
    )


@dataclass
class ChatCompletionLogprobs:
    """Logprob payload for completion tokens."""

    content: list[TokenLogprob] | None = None
    reasoning_content: list[TokenLogprob] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.content is not None:
            out["content"] = [_token_to_dict(entry) for entry in self.content]
        if self.reasoning_content is not None:
            out["reasoning_content"] = [_token_to_dict(entry) for entry in self.reasoning_content]
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ChatCompletionLogprobs:
        data = _object(data)
        content = data.get("content")
        reasoning = data.get("reasoning_content")
        return cls(
            content=[_token_from_dict(e) for e in content] if content is not None else None,
            reasoning_content=(
                [_token_from_dict(e) for e in reasoning] if reasoning is not None else None
            ),
        )