[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "justllm"
version = "0.1.0"
description = "Provider-neutral building blocks for OpenAI-like chat-completion clients: normalized chat types, request validation, prepared requests, capability interfaces, HTTP/SSE transport helpers, a provider registry and local tool dispatch"
requires-python = ">=3.10"
keywords = ["llm", "openai", "chat-completion", "sse", "tool-calling", "http-client"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "httpx>=0.27",
]

[project.optional-dependencies]
test = [
    "pytest>=8",
    "pytest-asyncio>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["justllm"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
