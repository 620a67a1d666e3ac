import subprocess
import unittest
from unittest.mock import patch

from commit_api.errors import GitError
from commit_api.infra import git


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr=stderr)


class GitWrapperTests(unittest.TestCase):
    def test_get_staged_diff_returns_stdout(self) -> None:
        with patch.object(git.subprocess, "run", return_value=completed(stdout="diff")) as run:
            self.assertEqual(git.get_staged_diff(), "diff")

        self.assertEqual(run.call_args.args[0], ["git", "diff", "--staged"])

    def test_commit_passes_message_as_single_argument(self) -> None:
        with patch.object(git.subprocess, "run", return_value=completed()) as run:
            git.commit("Fix foo typo\n\nLonger body")

        self.assertEqual(run.call_args.args[0], ["git", "commit", "-m", "Fix foo typo\n\nLonger body"])

    def test_failure_raises_git_error_with_stderr(self) -> None:
        failure = completed(returncode=128, stderr="fatal: not a git repository\n")
        with patch.object(git.subprocess, "run", return_value=failure):
            with self.assertRaisesRegex(GitError, "fatal: not a git repository"):
                git.push()

    def test_missing_git_binary(self) -> None:
        with patch.object(git.subprocess, "run", side_effect=FileNotFoundError("git")):
            with self.assertRaisesRegex(GitError, "git executable not found"):
                git.stage_all()


if __name__ == "__main__":
    unittest.main()
