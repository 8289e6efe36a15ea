import json

import pytest

from justllm.chat_types import ToolDefinition
from justllm.tool import (
    DuplicateToolError,
    LlmTool,
    RenamedTool,
    ToolCallError,
    ToolExecutionError,
    ToolRegistrationError,
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


def test_to_tool_definition_uses_tool_metadata():
    tool = EchoTool()
    definition = LlmTool.to_tool_definition(tool)
    expected = ToolDefinition.from_dict(
        {
            "type": "function",
            "function": {
                "name": "echo",
                "description": "Echo the provided message.",
                "parameters": tool.parameters_schema(),
            },
        }
    )
    assert definition == expected
    assert definition.function.name == "echo"
    assert definition.function.description == "Echo the provided message."
    assert definition.to_dict()["type"] == "function"


def test_renamed_tool_overrides_name_and_description():
    tool = RenamedTool(EchoTool(), "shout", "Repeat it.")
    assert tool.name() == "shout"
    assert tool.description() == "Repeat it."
    assert tool.parameters_schema() == EchoTool().parameters_schema()


def test_renamed_tool_falls_back_to_inner_description():
    tool = RenamedTool(EchoTool(), "shout")
    assert tool.description() == "Echo the provided message."
    definition = tool.to_tool_definition()
    assert definition.function.name == "shout"


@pytest.mark.asyncio
async def test_renamed_tool_delegates_call():
    tool = RenamedTool(EchoTool(), "shout", None)
    assert await tool.call('{"message":"hello"}') == '"hello"'


def test_llm_tool_is_abstract():
    with pytest.raises(TypeError):
        LlmTool()


def test_duplicate_tool_error_message():
    error = DuplicateToolError("echo")
    assert isinstance(error, ToolRegistrationError)
    assert error.name == "echo"
    assert str(error) == "duplicate tool name 'echo'"


def test_unknown_tool_error_lists_names():
    error = UnknownToolError("missing", ["echo", "fail"])
    assert isinstance(error, ToolCallError)
    assert error.available == "echo, fail"
    assert str(error) == "unknown tool 'missing'. available tools: echo, fail"


def test_unknown_tool_error_with_no_tools():
    error = UnknownToolError("missing", [])
    assert error.available == "(none)"


def test_execution_error_keeps_name_and_source_chain():
    inner = ValueError("bad input")
    outer = RuntimeError("boom")
    outer.__cause__ = inner
    error = ToolExecutionError("fail", outer)
    assert error.name == "fail"
    assert error.source is outer
    assert error.__cause__ is outer
    assert str(error) == "tool 'fail' execution failed: boom: bad input"