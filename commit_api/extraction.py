"""Locate the commit message inside free-form model output."""

import re
from collections.abc import Sequence

from .constants import (
    COMMIT_MESSAGE_MARKERS,
    HEURISTIC_MAX_LINE_LENGTH,
    HEURISTIC_MIN_LINE_LENGTH,
    HEURISTIC_SKIP_PREFIXES,
    PLACEHOLDER_COMMIT_MESSAGE,
)

# Closing emphasis left over from a decorated marker such as "**Generated Commit Message:**".
_TRAILING_MARKER_EMPHASIS = re.compile(r"\A[*_]+(?=\s|\Z)")


def _text_after_marker(raw_text: str, markers: Sequence[str]) -> str | None:
    for marker in markers:
        index = raw_text.find(marker)
        if index < 0:
            continue
        message = raw_text[index + len(marker) :].strip()
        message = _TRAILING_MARKER_EMPHASIS.sub("", message).strip()
        if message:
            return message
    return None


def _first_plausible_line(raw_text: str, markers: Sequence[str]) -> str | None:
    # Best effort: may pick a line that is not the intended subject.
    for line in raw_text.splitlines():
        candidate = line.strip()
        if not candidate or candidate.startswith(HEURISTIC_SKIP_PREFIXES):
            continue
        if any(marker in candidate for marker in markers):
            continue
        if HEURISTIC_MIN_LINE_LENGTH < len(candidate) < HEURISTIC_MAX_LINE_LENGTH:
            return candidate
    return None


def extract_commit_message(
    raw_text: str, markers: Sequence[str] = COMMIT_MESSAGE_MARKERS
) -> str:
    """Return the commit message in ``raw_text``; never raises.

    Markers are tried in priority order and the text after the first occurrence
    of the first one present is returned. Without a marker the first plausible
    subject line is used, and failing that the placeholder ``"update"``.
    """
    return (
        _text_after_marker(raw_text, markers)
        or _first_plausible_line(raw_text, markers)
        or PLACEHOLDER_COMMIT_MESSAGE
    )


def is_placeholder_message(message: str) -> bool:
    return message == PLACEHOLDER_COMMIT_MESSAGE
