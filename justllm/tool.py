"""Locally executable tools exposed to the model, and their errors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from .chat_types import FunctionDefinition, ToolDefinition, ToolType

__all__ = [
    "LlmTool",
    "RenamedTool",
    "ToolRegistrationError",
    "DuplicateToolError",
    "ToolCallError",
    "UnknownToolError",
    "ToolExecutionError",
]


class LlmTool(ABC):
    """Application-side tool that the model can call by name."""

    @abstractmethod
    def name(self) -> str:
        """Return the tool name exposed to the model."""

    @abstractmethod
    def description(self) -> str:
        """Return the human-readable description exposed to the model."""

    @abstractmethod
    def parameters_schema(self) -> Any:
        """Return the JSON Schema describing the accepted arguments."""

    def to_tool_definition(self) -> ToolDefinition:
        """Describe this tool as a normalized tool definition."""
        return ToolDefinition(
            ToolType.FUNCTION,
            FunctionDefinition(
                name=self.name(),
                description=self.description(),
                parameters=self.parameters_schema(),
            ),
        )

    @abstractmethod
    async def call(self, args_json: str) -> str:
        """Run the tool with JSON arguments and return a JSON-serializable result.

        Return normally for ordinary outcomes, even failures the tool reports
        in-band; raise only for abnormal runtime failures.
        """


class RenamedTool(LlmTool):
    """Wraps a tool under another name and, optionally, another description."""

    def __init__(self, inner: LlmTool, name: str, description: str | None = None) -> None:
        self._inner = inner
        self._name = name
        self._description = description

    def name(self) -> str:
        return self._name

    def description(self) -> str:
        if self._description is not None:
            return self._description
        return self._inner.description()

    def parameters_schema(self) -> Any:
        return self._inner.parameters_schema()

    async def call(self, args_json: str) -> str:
        return await self._inner.call(args_json)


class ToolRegistrationError(Exception):
    """A tool could not be registered."""


class DuplicateToolError(ToolRegistrationError):
    """Two tools were registered under the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"duplicate tool name '{name}'")
        self.name = name


class ToolCallError(Exception):
    """A tool call could not be completed."""


class UnknownToolError(ToolCallError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        names = list(available)
        listing = ", ".join(names) if names else "(none)"
        super().__init__(f"unknown tool '{name}'. available tools: {listing}")
        self.name = name
        self.available = listing


def _error_chain(error: BaseException) -> str:
    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(str(current))
        current = current.__cause__
    return ": ".join(parts)


class ToolExecutionError(ToolCallError):
    """A registered tool failed abnormally."""

    def __init__(self, name: str, source: BaseException) -> None:
        super().__init__(f"tool '{name}' execution failed: {_error_chain(source)}")
        self.name = name
        self.source = source
        self.__cause__ = source