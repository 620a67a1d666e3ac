import unittest

from pydantic import ValidationError

from commit_api.config import resolve_fallback_profiles, resolve_provider_profile
from commit_api.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, REQUEST_TIMEOUT_SECONDS
from commit_api.errors import (
    ConfigError,
    InvalidSettingError,
    MissingCredentialError,
    UnknownProviderError,
)
from commit_api.model_registry import PROVIDER_SPECS
from commit_api.schemas import AppConfig, ChatMessage, ChatRequest


class ResolveProviderProfileTests(unittest.TestCase):
    def test_primary_env_var_wins_over_legacy_and_file(self) -> None:
        config = AppConfig(api_keys={"openrouter": "file-key"})
        environ = {"OPENROUTER_API_KEY": "primary-key", "OPEN_ROUTER_API_KEY": "legacy-key"}

        profile = resolve_provider_profile(config, "openrouter", environ=environ)

        self.assertEqual(profile.api_key, "primary-key")

    def test_legacy_env_var_wins_over_file(self) -> None:
        config = AppConfig(api_keys={"openrouter": "file-key"})
        environ = {"OPENROUTER_API_KEY": "  ", "OPEN_ROUTER_API_KEY": "legacy-key"}

        profile = resolve_provider_profile(config, "openrouter", environ=environ)

        self.assertEqual(profile.api_key, "legacy-key")

    def test_file_key_used_when_env_is_empty(self) -> None:
        config = AppConfig(open_router_api_key="legacy-file-key")

        profile = resolve_provider_profile(config, "openrouter", environ={})

        self.assertEqual(profile.api_key, "legacy-file-key")

    def test_missing_credential_is_a_config_error(self) -> None:
        with self.assertRaises(MissingCredentialError) as ctx:
            resolve_provider_profile(AppConfig(), "groq", environ={})

        self.assertEqual(ctx.exception.provider, "groq")
        self.assertIn("GROQ_API_KEY", str(ctx.exception))

    def test_keyless_provider_resolves_without_credential(self) -> None:
        profile = resolve_provider_profile(AppConfig(), "ollama", environ={})

        self.assertEqual(profile.api_key, "")
        self.assertEqual(profile.models, PROVIDER_SPECS["ollama"].default_models)

    def test_unknown_provider(self) -> None:
        with self.assertRaisesRegex(UnknownProviderError, "Unsupported provider: acme"):
            resolve_provider_profile(AppConfig(), "acme", environ={})

    def test_provider_selection_order(self) -> None:
        config = AppConfig(provider="groq", api_keys={"groq": "g", "openai": "o", "gemini": "x"})

        self.assertEqual(resolve_provider_profile(config, environ={}).name, "groq")
        self.assertEqual(
            resolve_provider_profile(config, environ={"GITCOMM_PROVIDER": "openai"}).name,
            "openai",
        )
        self.assertEqual(
            resolve_provider_profile(
                config, "gemini", environ={"GITCOMM_PROVIDER": "openai"}
            ).name,
            "gemini",
        )
        self.assertEqual(
            resolve_provider_profile(AppConfig(api_keys={"openrouter": "k"}), environ={}).name,
            "openrouter",
        )

    def test_zero_overrides_are_replaced_by_defaults(self) -> None:
        config = AppConfig(api_keys={"openai": "k"})

        profile = resolve_provider_profile(
            config, "openai", max_tokens=0, temperature=0, environ={}
        )

        self.assertEqual(profile.max_tokens, DEFAULT_MAX_TOKENS)
        self.assertEqual(profile.temperature, DEFAULT_TEMPERATURE)
        self.assertEqual(profile.timeout_seconds, REQUEST_TIMEOUT_SECONDS)

    def test_explicit_overrides_beat_file_values(self) -> None:
        config = AppConfig(api_keys={"openai": "k"}, max_tokens=80, temperature=0.2)

        self.assertEqual(
            resolve_provider_profile(config, "openai", environ={}).max_tokens, 80
        )
        profile = resolve_provider_profile(
            config, "openai", max_tokens=120, temperature=1.1, environ={}
        )
        self.assertEqual(profile.max_tokens, 120)
        self.assertEqual(profile.temperature, 1.1)

    def test_model_override_keeps_order_and_drops_blanks(self) -> None:
        config = AppConfig(api_keys={"openai": "k"})

        profile = resolve_provider_profile(
            config, "openai", models=[" gpt-4o ", "", "gpt-4o-mini", "gpt-4o"], environ={}
        )

        self.assertEqual(profile.models, ("gpt-4o", "gpt-4o-mini"))
        self.assertEqual(profile.default_model, "gpt-4o")
        self.assertEqual(profile.fallback_models, ("gpt-4o-mini",))

    def test_file_models_and_url_only_apply_to_configured_provider(self) -> None:
        config = AppConfig(
            provider="openrouter",
            api_keys={"openrouter": "k", "openai": "o"},
            models=["a/one", "b/two"],
            api_url="https://proxy.example/v1/",
        )

        openrouter = resolve_provider_profile(config, environ={})
        openai = resolve_provider_profile(config, "openai", environ={})

        self.assertEqual(openrouter.models, ("a/one", "b/two"))
        self.assertEqual(openrouter.base_url, "https://proxy.example/v1")
        self.assertEqual(openai.models, PROVIDER_SPECS["openai"].default_models)
        self.assertEqual(openai.base_url, PROVIDER_SPECS["openai"].base_url)

    def test_full_endpoint_api_url_is_reduced_to_api_root(self) -> None:
        for api_url in (
            "https://openrouter.ai/api/v1/chat/completions",
            "https://openrouter.ai/api/v1/chat/completions/",
            " https://openrouter.ai/api/v1 ",
        ):
            with self.subTest(api_url=api_url):
                config = AppConfig(open_router_api_key="sk", api_url=api_url)

                profile = resolve_provider_profile(config, environ={})

                self.assertEqual(profile.base_url, "https://openrouter.ai/api/v1")

    def test_out_of_range_temperature_is_a_config_error(self) -> None:
        config = AppConfig(api_keys={"openrouter": "k"})

        with self.assertRaises(InvalidSettingError) as ctx:
            resolve_provider_profile(config, temperature=2.5, environ={})

        self.assertIsInstance(ctx.exception, ConfigError)
        self.assertIn("temperature", str(ctx.exception))

    def test_out_of_range_file_temperature_is_a_config_error(self) -> None:
        config = AppConfig(api_keys={"openrouter": "k"}, temperature=3)

        with self.assertRaises(ConfigError):
            resolve_provider_profile(config, environ={})

    def test_profile_is_immutable(self) -> None:
        profile = resolve_provider_profile(AppConfig(), "ollama", environ={})

        with self.assertRaises(ValidationError):
            profile.api_key = "changed"  # type: ignore[misc]


class ResolveFallbackProfilesTests(unittest.TestCase):
    def test_resolves_in_order_and_skips_duplicates(self) -> None:
        config = AppConfig(api_keys={"openrouter": "r", "gemini": "g"})

        profiles = resolve_fallback_profiles(
            config, [None, "gemini", "openrouter"], models=["x/primary"], environ={}
        )

        self.assertEqual([p.name for p in profiles], ["openrouter", "gemini"])
        self.assertEqual(profiles[0].models, ("x/primary",))
        self.assertEqual(profiles[1].models, PROVIDER_SPECS["gemini"].default_models)

    def test_missing_fallback_credential_is_fatal(self) -> None:
        config = AppConfig(api_keys={"openrouter": "r"})

        with self.assertRaises(MissingCredentialError):
            resolve_fallback_profiles(config, [None, "openai"], environ={})


class ChatRequestTests(unittest.TestCase):
    def test_exactly_one_user_message(self) -> None:
        with self.assertRaises(ValidationError):
            ChatRequest(
                model="m",
                messages=[ChatMessage(content="a"), ChatMessage(content="b")],
            )
        with self.assertRaises(ValidationError):
            ChatRequest(model="m", messages=[{"role": "assistant", "content": "a"}])

    def test_for_prompt_uses_profile_parameters(self) -> None:
        profile = resolve_provider_profile(
            AppConfig(), "ollama", max_tokens=64, temperature=0.3, environ={}
        )

        request = ChatRequest.for_prompt(profile, "qwen3:8b", "hello")

        self.assertEqual(
            request.model_dump(),
            {
                "model": "qwen3:8b",
                "messages": [{"role": "user", "content": "hello"}],
                "max_tokens": 64,
                "temperature": 0.3,
                "stream": False,
            },
        )


if __name__ == "__main__":
    unittest.main()
