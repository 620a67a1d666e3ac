"""Provider registry: endpoints, credential variables and default fallback models."""

from dataclasses import dataclass

from .constants import WireDialect


@dataclass(frozen=True)
class ProviderSpec:
    kind: WireDialect
    base_url: str
    default_models: tuple[str, ...]
    api_key_env: str | None = None
    legacy_api_key_env: str | None = None
    requires_api_key: bool = True


PROVIDER_SPECS: dict[str, ProviderSpec] = {
    # --- OpenAI-compatible chat completion endpoints ---
    "openrouter": ProviderSpec(
        kind="openai",
        base_url="https://openrouter.ai/api/v1",
        default_models=(
            "meta-llama/llama-3.3-70b-instruct:free",
            "google/gemini-2.0-flash-exp:free",
            "mistralai/mistral-small-3.1-24b-instruct:free",
        ),
        api_key_env="OPENROUTER_API_KEY",
        legacy_api_key_env="OPEN_ROUTER_API_KEY",
    ),
    "openai": ProviderSpec(
        kind="openai",
        base_url="https://api.openai.com/v1",
        default_models=("gpt-4o-mini",),
        api_key_env="OPENAI_API_KEY",
    ),
    "groq": ProviderSpec(
        kind="openai",
        base_url="https://api.groq.com/openai/v1",
        default_models=("llama-3.3-70b-versatile", "llama-3.1-8b-instant"),
        api_key_env="GROQ_API_KEY",
    ),
    "ollama": ProviderSpec(
        kind="openai",
        base_url="http://localhost:11434/v1",
        default_models=("qwen3:8b",),
        requires_api_key=False,
    ),
    # --- Vendor SDK ---
    "gemini": ProviderSpec(
        kind="gemini",
        base_url="https://generativelanguage.googleapis.com",
        default_models=("gemini-1.5-flash", "gemini-1.5-flash-8b"),
        api_key_env="GEMINI_API_KEY",
        legacy_api_key_env="GOOGLE_API_KEY",
    ),
}
ALLOWED_PROVIDERS = set(PROVIDER_SPECS)
