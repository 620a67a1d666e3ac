"""Thin wrapper around the git command line."""

import logging
import subprocess

from commit_api.errors import GitError

logger = logging.getLogger(__name__)


def run_git(args: list[str]) -> str:
    """Run ``git <args>`` and return stdout; raise ``GitError`` with stderr on failure."""
    logger.debug("Running git", extra={"git_args": args})
    try:
        process = subprocess.run(
            ["git", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise GitError("git executable not found") from exc
    if process.returncode != 0:
        raise GitError(process.stderr.strip() or f"git {' '.join(args)} failed")
    return process.stdout


def get_staged_diff() -> str:
    return run_git(["diff", "--staged"])


def stage_all() -> None:
    run_git(["add", "."])


def commit(message: str) -> str:
    return run_git(["commit", "-m", message])


def push() -> str:
    return run_git(["push"])
