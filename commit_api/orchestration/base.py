"""Orchestration interfaces for model fallback."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from commit_api.providers.base import ProviderResponse
from commit_api.schemas import ProviderProfile


@dataclass(frozen=True)
class FallbackCandidate:
    profile: ProviderProfile
    model: str


def build_fallback_chain(profiles: Sequence[ProviderProfile]) -> list[FallbackCandidate]:
    """Flatten profiles into (profile, model) pairs, keeping configured order."""
    return [FallbackCandidate(profile, model) for profile in profiles for model in profile.models]


class ChatOrchestrator(Protocol):
    def run(self, chain: Sequence[FallbackCandidate], prompt: str) -> ProviderResponse:
        """Try each candidate in order and return the first usable completion."""
        ...

    def generate(self, profile: ProviderProfile, prompt: str) -> str:
        """Run the fallback chain of a single profile and return the completion text."""
        ...
