"""Error taxonomy of the LLM client layer."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "Capability",
    "LlmError",
    "InvalidRequestError",
    "UnsupportedCapabilityError",
    "UnimplementedCapabilityError",
    "UnavailableCapabilityError",
    "BackendError",
]


class Capability(Enum):
    """Capabilities a backend may or may not offer."""

    CHAT_COMPLETION = "chat completion"
    STREAMING_CHAT_COMPLETION = "streaming chat completion"
    MODEL_CATALOG = "model catalog"
    BALANCE = "balance"

    def __str__(self) -> str:
        return self.value


class LlmError(Exception):
    """Base class for client-layer errors."""


class InvalidRequestError(LlmError):
    """The request was invalid before it reached the provider."""

    def __init__(self, message: str) -> None:
        super().__init__(f"invalid request: {message}")
        self.message = message


class UnsupportedCapabilityError(LlmError):
    """The backend never offers the requested capability."""

    def __init__(self, backend: str, capability: Capability) -> None:
        super().__init__(f"{backend} does not support {capability}")
        self.backend = backend
        self.capability = capability


class UnimplementedCapabilityError(LlmError):
    """The backend should offer the capability but does not yet."""

    def __init__(self, backend: str, capability: Capability) -> None:
        super().__init__(f"{backend} has not implemented {capability}")
        self.backend = backend
        self.capability = capability


class UnavailableCapabilityError(LlmError):
    """The backend cannot offer the capability in its current state."""

    def __init__(self, backend: str, capability: Capability, message: str) -> None:
        super().__init__(f"{backend} cannot currently provide {capability}: {message}")
        self.backend = backend
        self.capability = capability
        self.message = message


class BackendError(LlmError):
    """The underlying provider failed."""

    def __init__(self, backend: str, source: BaseException) -> None:
        super().__init__(f"{backend} backend error: {source}")
        self.backend = backend
        self.source = source
        self.__cause__ = source