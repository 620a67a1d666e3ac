"""Shared constants and literal types for gitcomm."""

from typing import Literal

DEFAULT_PROVIDER = "openrouter"
DEFAULT_MAX_TOKENS = 50
DEFAULT_TEMPERATURE = 0.7
MAX_TEMPERATURE = 2.0
REQUEST_TIMEOUT_SECONDS = 30
STATUS_BODY_SNIPPET_LENGTH = 200
CHAT_COMPLETIONS_PATH = "/chat/completions"

CONFIG_DIR_NAME = ".gitcomm"
CONFIG_FILE_NAME = "config.json"
CONFIG_DIR_ENV = "GITCOMM_CONFIG_DIR"
PROVIDER_ENV = "GITCOMM_PROVIDER"
DEBUG_ENV = "GITCOMM_DEBUG"
LANGSMITH_PROJECT = "gitcomm"

COMMIT_MESSAGE_MARKER = "Generated Commit Message:"
COMMIT_MESSAGE_MARKERS = (COMMIT_MESSAGE_MARKER,)
PLACEHOLDER_COMMIT_MESSAGE = "update"
HEURISTIC_MIN_LINE_LENGTH = 10
HEURISTIC_MAX_LINE_LENGTH = 100
HEURISTIC_SKIP_PREFIXES = ("#", "```")

WireDialect = Literal["openai", "gemini"]
OrchestratorName = Literal["sequential", "langgraph"]
