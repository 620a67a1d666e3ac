"""Runtime infrastructure helpers for SDK clients and tracing."""

import logging
import os
from functools import lru_cache
from typing import Any

from google import genai
from google.genai import types as genai_types
from langsmith import traceable
from langsmith.run_trees import get_cached_client
from openai import OpenAI

from commit_api.constants import LANGSMITH_PROJECT
from commit_api.schemas import AppConfig, ProviderProfile

logger = logging.getLogger(__name__)

# Local OpenAI-compatible servers ignore the bearer token, but the SDK insists on one.
_KEYLESS_PLACEHOLDER = "no-key"


@lru_cache(maxsize=8)
def get_openai_client(base_url: str, api_key: str, timeout_seconds: float) -> OpenAI:
    return OpenAI(
        api_key=api_key or _KEYLESS_PLACEHOLDER,
        base_url=base_url,
        timeout=timeout_seconds,
        max_retries=0,
    )


def openai_client_for(profile: ProviderProfile) -> OpenAI:
    return get_openai_client(profile.base_url, profile.api_key, profile.timeout_seconds)


@lru_cache(maxsize=4)
def get_gemini_client(api_key: str, timeout_seconds: float) -> genai.Client:
    return genai.Client(
        api_key=api_key,
        http_options=genai_types.HttpOptions(timeout=int(timeout_seconds * 1000)),
    )


def gemini_client_for(profile: ProviderProfile) -> genai.Client:
    return get_gemini_client(profile.api_key, profile.timeout_seconds)


@traceable(run_type="llm", name="openai.chat.completions.create")
def invoke_openai_chat(client: OpenAI, request_params: dict[str, Any]) -> Any:
    return client.chat.completions.with_raw_response.create(**request_params)


@traceable(run_type="llm", name="gemini.models.generate_content")
def invoke_gemini_generate(client: genai.Client, request_params: dict[str, Any]) -> Any:
    return client.models.generate_content(**request_params)


def configure_langsmith(app_config: AppConfig) -> bool:
    """Enable LangSmith tracing when a key is available; return whether it is on."""
    langsmith_api_key = os.environ.get("LANGSMITH_API_KEY") or app_config.langsmith_api_key
    if not langsmith_api_key:
        os.environ.pop("LANGSMITH_TRACING", None)
        logger.debug("LangSmith tracing disabled because API key is unavailable")
        return False

    os.environ["LANGSMITH_TRACING"] = "true"
    os.environ["LANGSMITH_API_KEY"] = langsmith_api_key
    os.environ.setdefault("LANGSMITH_PROJECT", LANGSMITH_PROJECT)
    return True


def flush_langsmith_traces() -> None:
    if os.environ.get("LANGSMITH_TRACING", "").lower() != "true":
        return
    if not os.environ.get("LANGSMITH_API_KEY"):
        return
    try:
        get_cached_client().flush()
    except Exception:
        logger.warning("Failed to flush LangSmith traces", exc_info=True)
