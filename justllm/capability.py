"""Capability interfaces that backends implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from .catalog import BalanceSnapshot, ModelCatalogResponse
from .chat import ChatCompletionChunk, ChatCompletionRequest, ChatCompletionResponse
from .errors import Capability, UnsupportedCapabilityError
from .prepared import PreparedChatRequest

__all__ = [
    "ChatCompletionStream",
    "Identifiable",
    "ChatCompletion",
    "StreamingChatCompletion",
    "ModelCatalog",
    "Balance",
    "CapabilityNegotiation",
    "LlmBackend",
]

ChatCompletionStream = AsyncIterator[ChatCompletionChunk]
"""Async iterator of normalized chat-completion chunks."""


class Identifiable(ABC):
    """Root identity shared by all capabilities."""

    @abstractmethod
    def backend_id(self) -> str:
        """Return the stable backend identifier."""


class ChatCompletion(Identifiable):
    """Non-streaming chat completion, direct or via prepare/send."""

    @abstractmethod
    async def create_chat_completion(
        self, request: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        """Execute a non-streaming chat completion."""

    @abstractmethod
    async def prepared_request(self, request: ChatCompletionRequest) -> PreparedChatRequest:
        """Turn a request into one bound to this backend."""

    @abstractmethod
    async def send_prepared(self, request: PreparedChatRequest) -> ChatCompletionResponse:
        """Execute a request prepared by this backend."""


class StreamingChatCompletion(Identifiable):
    """Streaming chat completion, direct or via prepare/send."""

    @abstractmethod
    async def stream_chat_completion(
        self, request: ChatCompletionRequest
    ) -> ChatCompletionStream:
        """Start a streaming chat completion."""

    @abstractmethod
    async def prepared_streaming_request(
        self, request: ChatCompletionRequest
    ) -> PreparedChatRequest:
        """Turn a streaming request into one bound to this backend."""

    @abstractmethod
    async def send_prepared_stream(self, request: PreparedChatRequest) -> ChatCompletionStream:
        """Execute a streaming request prepared by this backend."""


class ModelCatalog(Identifiable):
    """Listing of the provider's models."""

    @abstractmethod
    async def list_models(self) -> ModelCatalogResponse:
        """Return the provider's current model catalog."""


class Balance(Identifiable):
    """Account balance or quota inspection."""

    @abstractmethod
    async def get_balance(self) -> BalanceSnapshot:
        """Return the provider's current balance snapshot."""


class CapabilityNegotiation(Identifiable):
    """Explicit negotiation of optional capabilities.

    A backend that lacks a capability raises ``UnsupportedCapabilityError``
    here, at negotiation time, rather than from the capability itself.
    """

    def model_catalog(self) -> ModelCatalog:
        """Return a model-catalog handle, if supported."""
        raise UnsupportedCapabilityError(self.backend_id(), Capability.MODEL_CATALOG)

    def balance(self) -> Balance:
        """Return a balance handle, if supported."""
        raise UnsupportedCapabilityError(self.backend_id(), Capability.BALANCE)


class LlmBackend(ChatCompletion, StreamingChatCompletion, CapabilityNegotiation):
    """Common surface of a runtime-selected backend."""