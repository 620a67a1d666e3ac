"""OpenAI-style chat completion transport."""

import json
import logging
import time
from collections.abc import Callable
from typing import Any

import openai
from openai import OpenAI
from pydantic import ValidationError

from commit_api.constants import STATUS_BODY_SNIPPET_LENGTH
from commit_api.errors import DecodeError, NetworkError, StatusError, UnexpectedShapeError
from commit_api.infra.runtime import invoke_openai_chat, openai_client_for
from commit_api.schemas import ChatCompletionEnvelope, ChatRequest, ProviderProfile

from .base import LogContext

logger = logging.getLogger(__name__)


def parse_chat_completion(body: str) -> str:
    """Decode a chat completion body and return ``choices[0].message.content``."""
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}") from exc

    try:
        envelope = ChatCompletionEnvelope.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise UnexpectedShapeError(
            f"Unexpected response format at {location}: {first['msg']}"
        ) from exc
    return envelope.content


class OpenAIChatProvider:
    def __init__(
        self,
        get_client: Callable[[ProviderProfile], OpenAI] = openai_client_for,
        log_context: LogContext | None = None,
    ) -> None:
        self._get_client = get_client
        self._log_context = log_context or LogContext()

    def send(self, profile: ProviderProfile, request: ChatRequest) -> str:
        client = self._get_client(profile)
        request_params: dict[str, Any] = request.model_dump()

        start = time.time()
        try:
            raw_response = invoke_openai_chat(client, request_params)
        except openai.APIStatusError as exc:
            snippet = exc.response.text[:STATUS_BODY_SNIPPET_LENGTH]
            raise StatusError(exc.status_code, snippet) from exc
        except openai.APIConnectionError as exc:
            # Includes APITimeoutError.
            raise NetworkError(f"{type(exc).__name__}: {exc}") from exc
        duration_ms = int((time.time() - start) * 1000)

        body = raw_response.text
        if not 200 <= raw_response.status_code < 300:
            raise StatusError(raw_response.status_code, body[:STATUS_BODY_SNIPPET_LENGTH])
        self._log_context.log_payload(logger, "Got response from LLM", body)
        content = parse_chat_completion(body)

        logger.info(
            "Chat completion received",
            extra={
                "provider": profile.name,
                "model": request.model,
                "openai_duration_ms": duration_ms,
                "status_code": raw_response.status_code,
                "response_length": len(content),
            },
        )
        return content
