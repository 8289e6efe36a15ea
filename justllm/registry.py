"""Registry of configured provider entries with lazily connected backends."""

from __future__ import annotations

import threading
from collections.abc import Iterator

from .capability import LlmBackend
from .client import ChatClient, ChatClientOptions, ProviderEntry
from .errors import InvalidRequestError

__all__ = ["ProviderRegistry"]


class _StoredProvider:
    __slots__ = ("entry", "backend", "lock")

    def __init__(self, entry: ProviderEntry) -> None:
        self.entry = entry
        self.backend: LlmBackend | None = None
        self.lock = threading.Lock()

    @property
    def id(self) -> str:
        return self.entry.id()


class ProviderRegistry:
    """Holds provider entries by id and hands out chat clients.

    The first ``chat`` call for an entry connects its backend; later calls
    reuse that backend with fresh per-call defaults.
    """

    def __init__(self) -> None:
        self._providers: list[_StoredProvider] = []

    def register(self, provider: ProviderEntry) -> ProviderRegistry:
        """Register an entry, replacing one with the same id and its cached backend."""
        stored = _StoredProvider(provider)
        for index, existing in enumerate(self._providers):
            if existing.id == stored.id:
                self._providers[index] = stored
                break
        else:
            self._providers.append(stored)
        return self

    def chat(self, id: str, options: ChatClientOptions) -> ChatClient:
        """Create a chat client for a registered entry."""
        stored = next((entry for entry in self._providers if entry.id == id), None)
        if stored is None:
            raise InvalidRequestError(f"unknown provider id: {id}")
        with stored.lock:
            if stored.backend is None:
                stored.backend = stored.entry.connect()
            backend = stored.backend
        return ChatClient(id, options, backend)

    def provider_ids(self) -> Iterator[str]:
        """Yield the ids of all registered entries in registration order."""
        return (entry.id for entry in self._providers)