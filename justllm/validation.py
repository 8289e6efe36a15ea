"""Request validation shared by backend implementations."""

from __future__ import annotations

from dataclasses import replace

from .chat import ChatCompletionRequest
from .chat_types import NamedToolChoice
from .errors import InvalidRequestError
from .prepared import PreparedChatRequest

__all__ = [
    "validate_common_request",
    "validate_non_streaming_request",
    "into_validated_streaming_request",
    "validate_prepared_non_streaming_request",
    "validate_prepared_streaming_request",
]


def validate_common_request(request: ChatCompletionRequest) -> None:
    """Check fields shared by the streaming and non-streaming paths."""
    if request.tool_choice is not None and not request.tools:
        raise InvalidRequestError("tool_choice requires at least one configured tool")

    choice = request.tool_choice
    if isinstance(choice, NamedToolChoice):
        wanted = choice.function.name
        if not any(tool.function.name == wanted for tool in request.tools or ()):
            raise InvalidRequestError(f"tool_choice references unknown tool '{wanted}'")

    if request.top_logprobs is not None and request.logprobs is not True:
        raise InvalidRequestError("top_logprobs requires logprobs=true")


def validate_non_streaming_request(
    request: ChatCompletionRequest, method_name: str, streaming_method_name: str
) -> None:
    """Check that a request suits a non-streaming endpoint."""
    validate_common_request(request)

    if request.stream:
        raise InvalidRequestError(
            f"stream=true is not supported by {method_name}; "
            f"use {streaming_method_name} instead"
        )
    if request.stream_options is not None:
        raise InvalidRequestError("stream_options require stream=true")


def into_validated_streaming_request(
    request: ChatCompletionRequest, method_name: str
) -> ChatCompletionRequest:
    """Validate a request and return a copy with streaming enabled."""
    validate_common_request(request)

    if request.stream is False:
        raise InvalidRequestError(f"stream=false is not supported by {method_name}")

    return replace(request, messages=list(request.messages), stream=True)


def validate_prepared_non_streaming_request(
    request: PreparedChatRequest, method_name: str, streaming_method_name: str
) -> None:
    """Check that a prepared request suits a non-streaming endpoint."""
    if request.has_stream():
        raise InvalidRequestError(
            f"prepared request enables stream=true and cannot be sent via {method_name}; "
            f"use {streaming_method_name} instead"
        )


def validate_prepared_streaming_request(
    request: PreparedChatRequest, method_name: str, non_streaming_method_name: str
) -> None:
    """Check that a prepared request suits a streaming endpoint."""
    if not request.has_stream():
        raise InvalidRequestError(
            "prepared request does not enable stream=true and cannot be sent via "
            f"{method_name}; use {non_streaming_method_name} instead"
        )