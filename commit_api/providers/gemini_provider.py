"""Gemini transport backed by the google-genai SDK."""

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from commit_api.constants import STATUS_BODY_SNIPPET_LENGTH
from commit_api.errors import NetworkError, StatusError, UnexpectedShapeError
from commit_api.infra.runtime import gemini_client_for, invoke_gemini_generate
from commit_api.schemas import ChatRequest, ProviderProfile

from .base import LogContext

logger = logging.getLogger(__name__)


def _response_text(response: Any) -> str:
    text = getattr(response, "text", None)
    if not isinstance(text, str):
        raise UnexpectedShapeError("Gemini response contains no text candidate")
    return text


class GeminiChatProvider:
    def __init__(
        self,
        get_client: Callable[[ProviderProfile], genai.Client] = gemini_client_for,
        log_context: LogContext | None = None,
    ) -> None:
        self._get_client = get_client
        self._log_context = log_context or LogContext()

    def send(self, profile: ProviderProfile, request: ChatRequest) -> str:
        client = self._get_client(profile)
        request_params: dict[str, Any] = {
            "model": request.model,
            "contents": request.prompt,
            "config": genai_types.GenerateContentConfig(
                max_output_tokens=request.max_tokens,
                temperature=request.temperature,
            ),
        }

        start = time.time()
        try:
            response = invoke_gemini_generate(client, request_params)
        except genai_errors.APIError as exc:
            snippet = str(exc.message or exc.details or "")[:STATUS_BODY_SNIPPET_LENGTH]
            raise StatusError(exc.code, snippet) from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"{type(exc).__name__}: {exc}") from exc
        duration_ms = int((time.time() - start) * 1000)

        self._log_context.log_payload(logger, "Got response from LLM", response)
        content = _response_text(response)

        logger.info(
            "Chat completion received",
            extra={
                "provider": profile.name,
                "model": request.model,
                "gemini_duration_ms": duration_ms,
                "response_length": len(content),
            },
        )
        return content
