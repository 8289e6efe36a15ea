"""Registry and dispatcher for locally executable tools."""

from __future__ import annotations

from collections.abc import Iterable

from .chat_types import ToolDefinition
from .tool import DuplicateToolError, LlmTool, ToolExecutionError, UnknownToolError

__all__ = ["ToolDispatcher"]


class ToolDispatcher:
    """Holds tools by name and routes model-emitted calls to them."""

    def __init__(self) -> None:
        self._tools: dict[str, LlmTool] = {}

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def add_tool(self, tool: LlmTool) -> None:
        """Register a tool; raise ``DuplicateToolError`` if its name is taken."""
        name = tool.name()
        if name in self._tools:
            raise DuplicateToolError(name)
        self._tools[name] = tool

    def add_tools(self, tools: Iterable[LlmTool]) -> None:
        """Register several tools, stopping at the first duplicate."""
        for tool in tools:
            self.add_tool(tool)

    def tool_names(self) -> list[str]:
        """Return the registered names in sorted order."""
        return sorted(self._tools)

    async def call_tool(self, name: str, args_json: str) -> str:
        """Call the named tool with JSON arguments."""
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name, self.tool_names())
        try:
            return await tool.call(args_json)
        except Exception as exc:  # noqa: BLE001 - any tool failure is reported the same way
            raise ToolExecutionError(name, exc) from exc

    def tool_definitions(self) -> list[ToolDefinition]:
        """Return the definitions of all tools, ordered by name."""
        return [self._tools[name].to_tool_definition() for name in self.tool_names()]