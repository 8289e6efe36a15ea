"""Building blocks for OpenAI-like chat clients: types, validation, transport, registry, tools."""

__version__ = "0.1.0"

__all__ = [
    "capability",
    "catalog",
    "chat",
    "chat_types",
    "client",
    "dispatch",
    "errors",
    "http",
    "prepared",
    "registry",
    "sse",
    "tool",
    "transport_errors",
    "validation",
]