import unittest

from commit_api.prompts import FormatContract, build_prompt


class BuildPromptTests(unittest.TestCase):
    def test_embeds_diff_verbatim_and_names_marker(self) -> None:
        diff = "diff --git a/x b/x\n+foo\n"

        prompt = build_prompt(diff)

        self.assertIn(f"Git Diff:\n{diff}", prompt)
        self.assertIn("Generated Commit Message:\n[Your generated commit message here]", prompt)
        self.assertIn("Generated Commit Message:\nFix bug in user login process", prompt)

    def test_output_is_deterministic(self) -> None:
        diff = "diff --git a/y b/y\n-bar\n+baz\n"

        self.assertEqual(build_prompt(diff), build_prompt(diff))

    def test_large_diff_is_not_truncated(self) -> None:
        diff = "\n".join(f"+line {i}" for i in range(5000))

        self.assertIn(diff, build_prompt(diff))

    def test_custom_contract(self) -> None:
        contract = FormatContract(marker="COMMIT:", example_message="Add feature flag")

        prompt = build_prompt("+x\n", contract)

        self.assertIn("COMMIT:\nAdd feature flag", prompt)
        self.assertNotIn("Generated Commit Message:", prompt)


if __name__ == "__main__":
    unittest.main()
