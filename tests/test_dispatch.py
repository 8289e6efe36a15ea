import json

import pytest

from justllm.dispatch import ToolDispatcher
from justllm.tool import (
    DuplicateToolError,
    LlmTool,
    ToolExecutionError,
    UnknownToolError,
)


class EchoTool(LlmTool):
    def name(self):
        return "echo"

    def description(self):
        return "Echo the provided message."

    def parameters_schema(self):
        return {
            "type": "object",
            "properties": {"message": {"type": "string"}},
            "required": ["message"],
        }

    async def call(self, args_json):
        return json.dumps(json.loads(args_json)["message"])


class FailingTool(LlmTool):
    def name(self):
        return "fail"

    def description(self):
        return "Always fails."

    def parameters_schema(self):
        return {"type": "object", "properties": {}, "required": []}

    async def call(self, args_json):
        raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_dispatch_routes_registered_tools():
    dispatch = ToolDispatcher()
    dispatch.add_tool(EchoTool())
    result = await dispatch.call_tool("echo", '{"message":"hello"}')
    assert result == '"hello"'


def test_rejects_duplicate_tool_names():
    dispatch = ToolDispatcher()
    dispatch.add_tool(EchoTool())
    with pytest.raises(DuplicateToolError) as info:
        dispatch.add_tool(EchoTool())
    assert info.value.name == "echo"
    assert len(dispatch) == 1


@pytest.mark.asyncio
async def test_unknown_tool_error_lists_available_names():
    dispatch = ToolDispatcher()
    dispatch.add_tool(EchoTool())
    with pytest.raises(UnknownToolError) as info:
        await dispatch.call_tool("missing", "{}")
    assert info.value.name == "missing"
    assert info.value.available == "echo"


@pytest.mark.asyncio
async def test_unknown_tool_on_empty_dispatcher():
    dispatch = ToolDispatcher()
    with pytest.raises(UnknownToolError) as info:
        await dispatch.call_tool("missing", "{}")
    assert info.value.available == "(none)"


@pytest.mark.asyncio
async def test_execution_errors_preserve_tool_name():
    dispatch = ToolDispatcher()
    dispatch.add_tool(FailingTool())
    with pytest.raises(ToolExecutionError) as info:
        await dispatch.call_tool("fail", "{}")
    assert info.value.name == "fail"
    assert str(info.value.source) == "boom"


def test_tool_definitions_follow_normalized_shape():
    dispatch = ToolDispatcher()
    dispatch.add_tool(EchoTool())
    definitions = dispatch.tool_definitions()
    assert len(definitions) == 1
    assert definitions[0].function.name == "echo"
    assert definitions[0].function.description == "Echo the provided message."


def test_tool_names_are_sorted_and_len_counts():
    dispatch = ToolDispatcher()
    assert len(dispatch) == 0
    dispatch.add_tools([FailingTool(), EchoTool()])
    assert dispatch.tool_names() == ["echo", "fail"]
    assert len(dispatch) == 2
    assert [d.function.name for d in dispatch.tool_definitions()] == ["echo", "fail"]


def test_add_tools_stops_at_duplicate():
    dispatch = ToolDispatcher()
    with pytest.raises(DuplicateToolError):
        dispatch.add_tools([EchoTool(), EchoTool(), FailingTool()])
    assert dispatch.tool_names() == ["echo"]