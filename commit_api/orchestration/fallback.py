"""Sequential fallback across providers and models."""

import logging
import time
from collections.abc import Mapping, Sequence

from commit_api.errors import AllModelsFailedError, EmptyCompletionError, TransportError
from commit_api.providers.base import ChatProvider, LogContext, ProviderResponse
from commit_api.schemas import ChatRequest, ProviderProfile

from .base import ChatOrchestrator, FallbackCandidate, build_fallback_chain

logger = logging.getLogger(__name__)


def attempt_candidate(
    providers: Mapping[str, ChatProvider],
    candidate: FallbackCandidate,
    prompt: str,
    log_context: LogContext,
) -> ProviderResponse:
    """Run one attempt; raises ``TransportError`` when the model gave nothing usable."""
    profile = candidate.profile
    provider = providers.get(profile.kind)
    if provider is None:
        raise RuntimeError(f"Unsupported provider: {profile.kind}")

    log_context.report(f"Trying model {candidate.model} ({profile.name})...")
    request = ChatRequest.for_prompt(profile, candidate.model, prompt)
    start = time.time()
    try:
        content = provider.send(profile, request).strip()
        if not content:
            raise EmptyCompletionError()
    except TransportError as exc:
        raise exc.bind(profile.name, candidate.model)

    return ProviderResponse(
        content=content,
        model=candidate.model,
        provider=profile.name,
        duration_seconds=round(time.time() - start, 2),
    )


def report_fallback(
    error: TransportError, has_next: bool, log_context: LogContext
) -> None:
    if isinstance(error, EmptyCompletionError):
        reason = "returned an empty response"
    else:
        reason = f"failed ({error.kind}: {error})"
    suffix = ", falling back to next model" if has_next else ""
    log_context.report(f"Model {error.model} {reason}{suffix}")
    logger.warning(
        "Model attempt failed",
        extra={
            "provider": error.provider,
            "model": error.model,
            "error_kind": error.kind,
            "has_fallback": has_next,
        },
    )


class FallbackChatOrchestrator(ChatOrchestrator):
    def __init__(
        self, providers: Mapping[str, ChatProvider], log_context: LogContext | None = None
    ) -> None:
        self._providers = providers
        self._log_context = log_context or LogContext()

    def run(self, chain: Sequence[FallbackCandidate], prompt: str) -> ProviderResponse:
        attempts: list[tuple[str, TransportError]] = []
        for index, candidate in enumerate(chain):
            try:
                response = attempt_candidate(self._providers, candidate, prompt, self._log_context)
            except TransportError as exc:
                attempts.append((candidate.model, exc))
                report_fallback(exc, index + 1 < len(chain), self._log_context)
                continue
            logger.info(
                "Commit message generated",
                extra={
                    "provider": response.provider,
                    "model": response.model,
                    "attempts": len(attempts) + 1,
                },
            )
            return response

        raise AllModelsFailedError(attempts[-1][1] if attempts else None, attempts)

    def generate(self, profile: ProviderProfile, prompt: str) -> str:
        return self.run(build_fallback_chain([profile]), prompt).content
