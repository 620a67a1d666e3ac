"""Application service for commit message generation."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from commit_api.extraction import extract_commit_message, is_placeholder_message
from commit_api.orchestration.base import ChatOrchestrator, build_fallback_chain
from commit_api.prompts import DEFAULT_FORMAT_CONTRACT, FormatContract, build_prompt
from commit_api.schemas import ProviderProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitSuggestion:
    message: str
    raw_response: str
    model: str
    provider: str

    @property
    def is_placeholder(self) -> bool:
        return is_placeholder_message(self.message)


class CommitMessageService:
    def __init__(
        self,
        orchestrator: ChatOrchestrator,
        format_contract: FormatContract = DEFAULT_FORMAT_CONTRACT,
    ) -> None:
        self._orchestrator = orchestrator
        self._format_contract = format_contract

    def suggest(self, diff: str, profiles: Sequence[ProviderProfile]) -> CommitSuggestion:
        prompt = build_prompt(diff, self._format_contract)
        logger.info(
            "Commit message requested",
            extra={"diff_length": len(diff), "providers": [p.name for p in profiles]},
        )

        response = self._orchestrator.run(build_fallback_chain(profiles), prompt)
        message = extract_commit_message(response.content, (self._format_contract.marker,))
        if is_placeholder_message(message):
            logger.warning(
                "No commit message could be extracted from the model output",
                extra={"model": response.model, "response_length": len(response.content)},
            )
        return CommitSuggestion(
            message=message,
            raw_response=response.content,
            model=response.model,
            provider=response.provider,
        )
