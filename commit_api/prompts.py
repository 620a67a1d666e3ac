"""Prompt rendering for commit message generation."""

from dataclasses import dataclass

from .constants import COMMIT_MESSAGE_MARKER


@dataclass(frozen=True)
class FormatContract:
    marker: str = COMMIT_MESSAGE_MARKER
    example_message: str = "Fix bug in user login process"


DEFAULT_FORMAT_CONTRACT = FormatContract()

_INSTRUCTIONS = (
    "Analyze the following git diff and provide a single-line commit message based on the "
    "changes.\n"
    "Please ensure that your response strictly follows the specified format below."
)

_CLOSING = (
    "Make sure to provide a commit message that accurately reflects the changes made in the "
    "git diff. Thank you!"
)


def build_prompt(diff: str, contract: FormatContract = DEFAULT_FORMAT_CONTRACT) -> str:
    """Render the instruction text sent to the model; the diff is embedded verbatim."""
    return (
        f"{_INSTRUCTIONS}\n\n"
        f"Git Diff:\n{diff}\n\n"
        "Format your response as follows, including the exact wording:\n"
        f"{contract.marker}\n"
        "[Your generated commit message here]\n\n"
        "Example output:\n"
        f"{contract.marker}\n"
        f"{contract.example_message}\n\n"
        f"{_CLOSING}"
    )
