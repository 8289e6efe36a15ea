# justllm

Provider-neutral building blocks for clients of OpenAI-like chat-completion APIs.

The package is organised as plain modules:

| Module | What it holds |
| --- | --- |
| `justllm.chat_types` | Shared value types: `ToolDefinition`, `FunctionDefinition`, `ChatToolCall`, `ToolChoiceMode`, `NamedToolChoice`, `ResponseFormat`, `StreamOptions`, `Usage`, `FinishReason`, logprob types, and `stop_to_json` / `tool_choice_to_json` helpers |
| `justllm.chat` | Messages (`TextMessage`, `ToolCallsMessage`, `ToolResultMessage`), `ChatCompletionRequest`, `ChatCompletionResponse`, `ChatCompletionChunk` and message constructors |
| `justllm.catalog` | `BalanceSnapshot`, `BalanceEntry`, `Currency`, `ModelCatalogResponse`, `ModelInfo` |
| `justllm.prepared` | `PreparedChatRequest` and `PreparedChatRequestPreview` |
| `justllm.validation` | Request checks shared by backends |
| `justllm.capability` | Abstract capability interfaces and `LlmBackend` |
| `justllm.errors` | `LlmError` and its subclasses, `Capability` |
| `justllm.http` | `httpx`-based JSON request helpers |
| `justllm.sse` | `JsonEventStream` for `text/event-stream` responses |
| `justllm.transport_errors` | `TransportError` and its subclasses |
| `justllm.client` | `ChatClient`, `ChatClientOptions`, `ProviderEntry` |
| `justllm.registry` | `ProviderRegistry` |
| `justllm.tool` | `LlmTool`, `RenamedTool` and tool errors |
| `justllm.dispatch` | `ToolDispatcher` |

Most data classes have `to_dict()` and a `from_dict()` class method for their JSON
wire shape. Python 3.10 or later is required; the only runtime dependency is `httpx`.

## What this package does not do

It ships no ready-made backend for any particular provider. To talk to an API you
implement `justllm.capability.LlmBackend` yourself (the `http` and `sse` helpers
cover the transport) and, if you want the registry, a `ProviderEntry` whose
`connect()` returns that backend. There is no command-line program.

## Building requests

```python
from justllm.chat import ChatCompletionRequest, user_message

request = (
    ChatCompletionRequest("my-model", [user_message("Say hello in one sentence.")])
    .with_temperature(0.2)
    .with_max_tokens(64)
    .with_system_prompt("You are a concise assistant.")
)

print(request.to_dict())
```

Every `with_*` method returns a new request. `with_system_prompt` (and its twin
`prepend_system_message`) inserts the system message at the end of the leading block
of system messages, so repeated calls keep their order and stay ahead of the
conversation. `prepend_message` puts any message first.

Other message constructors in `justllm.chat`: `message`, `named_message`,
`system_message`, `assistant_message`, `assistant_tool_calls` and `tool_result`.
`message_from_dict` decodes a message by trying the tool-calls, tool-result and plain
shapes in that order.

Responses offer `first_choice()`, `first_message()`, `first_choice_content()`,
`first_choice_reasoning_content()` and `first_choice_tool_calls()`, each returning
`None` when there is nothing to return.

## Validation

`justllm.validation` raises `InvalidRequestError` when:

- `tool_choice` is set but no tools are configured, or names a tool that is not configured;
- `top_logprobs` is set without `logprobs=True`;
- a non-streaming path gets `stream=True` or `stream_options`
  (`validate_non_streaming_request`);
- a streaming path gets `stream=False` (`into_validated_streaming_request`, which
  otherwise returns a copy with `stream=True`);
- a prepared request's stream flag does not match the path it is sent on
  (`validate_prepared_non_streaming_request`, `validate_prepared_streaming_request`).

## Prepared requests

```python
from justllm.prepared import PreparedChatRequest

prepared = PreparedChatRequest(
    "my-backend",
    {"model": "my-model", "messages": [{"role": "user", "content": "hi"}]},
)
print(prepared.model(), prepared.message_count(), prepared.preview())
print(prepared.request_body_text())
prepared.ensure_backend("my-backend")        # raises InvalidRequestError on mismatch
```

The body must be a JSON object with a string `model` and a `messages` array, else
`InvalidRequestError` is raised. `to_dict()` / `from_dict()` round-trip the request.

## Capabilities

`ChatCompletion` and `StreamingChatCompletion` offer direct and prepare/send paths.
Optional features are reached through `CapabilityNegotiation.model_catalog()` and
`.balance()`, which by default raise `UnsupportedCapabilityError`; a backend that
supports them overrides these to return a `ModelCatalog` or `Balance` handle.

## Transport

```python
from justllm.http import build_http_client, request, request_json
from justllm.sse import JsonEventStream

client = build_http_client("placeholder", timeout=30.0)
# models = await request_json(client, "https://api.example.com/v1", "GET", "/models", None)
# response = await request(client, base_url, "POST", "chat/completions", body)
# async for chunk in JsonEventStream(response, ChatCompletionChunk.from_dict):
#     ...
```

`build_http_client` sends `Authorization: Bearer <key>` and `Accept: application/json`.
Non-success statuses raise `HttpStatusError` carrying `status` and the raw `body`;
undecodable JSON raises `DeserializeError` with the body kept. `JsonEventStream`
requires a `text/event-stream` content type, splits events on blank lines, ignores
comment lines, joins `data:` lines, and stops at `[DONE]`.

## Local tools

```python
import json

from justllm.dispatch import ToolDispatcher
from justllm.tool import LlmTool, RenamedTool


class Sum(LlmTool):
    def name(self):
        return "sum"

    def description(self):
        return "Add two numbers together."

    def parameters_schema(self):
        return {
            "type": "object",
            "properties": {"x": {"type": "number"}, "y": {"type": "number"}},
            "required": ["x", "y"],
        }

    async def call(self, args_json):
        args = json.loads(args_json)
        return json.dumps({"result": args["x"] + args["y"]})


dispatcher = ToolDispatcher()
dispatcher.add_tool(Sum())
dispatcher.add_tool(RenamedTool(Sum(), "add", "Add two numbers."))
print(dispatcher.tool_names())               # ['add', 'sum']
# result = await dispatcher.call_tool("sum", '{"x": 1, "y": 2}')
```

Registering the same name twice raises `DuplicateToolError`; calling an unknown name
raises `UnknownToolError`, whose message lists the available tools (or `(none)`); a
tool that raises is reported as `ToolExecutionError` carrying the tool name.
`tool_definitions()` returns one definition per tool, ordered by name.

## Providers and clients

```python
from justllm.chat import user_message
from justllm.client import ChatClientOptions
from justllm.registry import ProviderRegistry

registry = ProviderRegistry()
registry.register(my_entry)                  # an instance of your ProviderEntry

client = registry.chat(
    my_entry.id(),
    ChatClientOptions("my-model").with_system_prompt("You are a concise assistant."),
)
request = client.request([user_message("Say hello.")])
# response = await client.create_chat_completion(request)
# print(response.first_choice_content())
```

The backend is connected the first time `chat` is called for an entry and reused
afterwards; registering an entry with an existing id replaces it and drops the cached
backend. An unknown id raises `InvalidRequestError`. `ChatClient` forwards every
backend operation to the shared backend and offers `with_model`, `with_system_prompt`
and `clear_system_prompt`, each returning a new client.

## Tests

The test suite uses pytest with pytest-asyncio, both listed in the `test` extra.