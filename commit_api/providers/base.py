"""Provider interfaces and shared response model."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from commit_api.schemas import ChatRequest, ProviderProfile

ProgressCallback = Callable[[str], None]


@dataclass(frozen=True)
class LogContext:
    """Debug switch and progress sink handed to orchestrators and providers."""

    debug: bool = False
    progress: ProgressCallback | None = None

    def report(self, message: str) -> None:
        if self.progress is not None:
            self.progress(message)

    def log_payload(self, logger: logging.Logger, message: str, payload: object) -> None:
        if self.debug:
            logger.debug(message, extra={"payload": payload})


@dataclass(frozen=True)
class ProviderResponse:
    content: str
    model: str
    provider: str
    duration_seconds: float


class ChatProvider(Protocol):
    def send(self, profile: ProviderProfile, request: ChatRequest) -> str:
        """Send one chat request and return the raw completion text.

        Raises a ``TransportError`` subclass on any failure.
        """
        ...
