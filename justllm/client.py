"""Chat client facade and the provider-entry contract used by the registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, replace

from .capability import Balance, ChatCompletionStream, LlmBackend, ModelCatalog
from .chat import ChatCompletionRequest, ChatCompletionResponse, ChatMessage
from .prepared import PreparedChatRequest

__all__ = ["ChatClientOptions", "ProviderEntry", "ChatClient"]


@dataclass(frozen=True)
class ChatClientOptions:
    """Per-call defaults for a chat client: a required model and an optional system prompt."""

    model: str
    system_prompt: str | None = None

    def with_system_prompt(self, system_prompt: str) -> ChatClientOptions:
        """Return a copy with the given default system prompt."""
        return replace(self, system_prompt=system_prompt)


class ProviderEntry(ABC):
    """Fully configured provider entry that can connect a shared backend."""

    @abstractmethod
    def id(self) -> str:
        """Return the stable lookup identifier of this entry."""

    @abstractmethod
    def provider(self) -> str:
        """Return the provider family identifier."""

    @abstractmethod
    def connect(self) -> LlmBackend:
        """Connect a backend from this entry's configuration."""


class ChatClient(LlmBackend):
    """Pairs a provider entry id and request defaults with a shared backend.

    All backend operations are forwarded to the shared backend.
    """

    def __init__(
        self, provider_id: str, options: ChatClientOptions, backend: LlmBackend
    ) -> None:
        self._provider_id = provider_id
        self._model = options.model
        self._system_prompt = options.system_prompt
        self._backend = backend

    @property
    def provider_id(self) -> str:
        """The provider entry id used to create this client."""
        return self._provider_id

    @property
    def model(self) -> str:
        """The default model."""
        return self._model

    @property
    def system_prompt(self) -> str | None:
        """The default system prompt, if any."""
        return self._system_prompt

    @property
    def backend(self) -> LlmBackend:
        """The shared backend this client forwards to."""
        return self._backend

    def _copy(self, model: str, system_prompt: str | None) -> ChatClient:
        return ChatClient(
            self._provider_id, ChatClientOptions(model, system_prompt), self._backend
        )

    def with_model(self, model: str) -> ChatClient:
        """Return a client with a new default model."""
        return self._copy(model, self._system_prompt)

    def with_system_prompt(self, system_prompt: str) -> ChatClient:
        """Return a client with a new default system prompt."""
        return self._copy(self._model, system_prompt)

    def clear_system_prompt(self) -> ChatClient:
        """Return a client without a default system prompt."""
        return self._copy(self._model, None)

    def request(self, messages: Iterable[ChatMessage]) -> ChatCompletionRequest:
        """Build a request pre-filled with the default model and system prompt."""
        request = ChatCompletionRequest(self._model, list(messages))
        if self._system_prompt is not None:
            request = request.with_system_prompt(self._system_prompt)
        return request

    def backend_id(self) -> str:
        return self._backend.backend_id()

    async def create_chat_completion(
        self, request: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        return await self._backend.create_chat_completion(request)

    async def prepared_request(self, request: ChatCompletionRequest) -> PreparedChatRequest:
        return await self._backend.prepared_request(request)

    async def send_prepared(self, request: PreparedChatRequest) -> ChatCompletionResponse:
        return await self._backend.send_prepared(request)

    async def stream_chat_completion(
        self, request: ChatCompletionRequest
    ) -> ChatCompletionStream:
        return await self._backend.stream_chat_completion(request)

    async def prepared_streaming_request(
        self, request: ChatCompletionRequest
    ) -> PreparedChatRequest:
        return await self._backend.prepared_streaming_request(request)

    async def send_prepared_stream(self, request: PreparedChatRequest) -> ChatCompletionStream:
        return await self._backend.send_prepared_stream(request)

    def model_catalog(self) -> ModelCatalog:
        return self._backend.model_catalog()

    def balance(self) -> Balance:
        return self._backend.balance()

    def __repr__(self) -> str:
        return (
            f"ChatClient(provider_id={self._provider_id!r}, model={self._model!r}, "
            f"has_system_prompt={self._system_prompt is not None}, "
            f"backend_id={self._backend.backend_id()!r})"
        )