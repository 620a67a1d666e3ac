"""LangGraph-based fallback orchestration."""

from collections.abc import Mapping, Sequence
from typing import NotRequired, TypedDict, cast

from langgraph.graph import END, START, StateGraph

from commit_api.errors import AllModelsFailedError, TransportError
from commit_api.providers.base import ChatProvider, LogContext, ProviderResponse
from commit_api.schemas import ProviderProfile

from .base import ChatOrchestrator, FallbackCandidate, build_fallback_chain
from .fallback import attempt_candidate, report_fallback


class FallbackGraphState(TypedDict):
    chain: Sequence[FallbackCandidate]
    prompt: str
    index: int
    attempts: list[tuple[str, TransportError]]
    response: NotRequired[ProviderResponse]


class LangGraphFallbackOrchestrator(ChatOrchestrator):
    def __init__(
        self, providers: Mapping[str, ChatProvider], log_context: LogContext | None = None
    ) -> None:
        self._providers = providers
        self._log_context = log_context or LogContext()
        graph = StateGraph(FallbackGraphState)
        graph.add_node("attempt_model", self._attempt_model)
        graph.add_conditional_edges(
            START, self._next_step, {"attempt": "attempt_model", "done": END}
        )
        graph.add_conditional_edges(
            "attempt_model", self._next_step, {"attempt": "attempt_model", "done": END}
        )
        self._graph = graph.compile()

    @staticmethod
    def _next_step(state: FallbackGraphState) -> str:
        if "response" in state or state["index"] >= len(state["chain"]):
            return "done"
        return "attempt"

    def _attempt_model(self, state: FallbackGraphState) -> dict[str, object]:
        chain = state["chain"]
        index = state["index"]
        try:
            response = attempt_candidate(
                self._providers, chain[index], state["prompt"], self._log_context
            )
        except TransportError as exc:
            report_fallback(exc, index + 1 < len(chain), self._log_context)
            return {
                "index": index + 1,
                "attempts": [*state["attempts"], (chain[index].model, exc)],
            }
        return {"index": index + 1, "response": response}

    def run(self, chain: Sequence[FallbackCandidate], prompt: str) -> ProviderResponse:
        initial_state: FallbackGraphState = {
            "chain": list(chain),
            "prompt": prompt,
            "index": 0,
            "attempts": [],
        }
        result = cast(
            "FallbackGraphState",
            self._graph.invoke(initial_state, config={"recursion_limit": len(chain) + 5}),
        )
        response = result.get("response")
        if response is None:
            attempts = result["attempts"]
            raise AllModelsFailedError(attempts[-1][1] if attempts else None, attempts)
        return response

    def generate(self, profile: ProviderProfile, prompt: str) -> str:
        return self.run(build_fallback_chain([profile]), prompt).content
