"""Resolve provider profiles from the loaded config file and the environment."""

import logging
import os
from collections.abc import Mapping, Sequence

from pydantic import ValidationError

from .constants import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_MAX_TOKENS,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    PROVIDER_ENV,
    REQUEST_TIMEOUT_SECONDS,
)
from .errors import InvalidSettingError, MissingCredentialError, UnknownProviderError
from .model_registry import ALLOWED_PROVIDERS, PROVIDER_SPECS, ProviderSpec
from .schemas import AppConfig, ProviderProfile, normalize_models

logger = logging.getLogger(__name__)


def select_provider(
    app_config: AppConfig, provider: str | None = None, environ: Mapping[str, str] | None = None
) -> str:
    environ = os.environ if environ is None else environ
    selected = (
        (provider or "").strip()
        or environ.get(PROVIDER_ENV, "").strip()
        or (app_config.provider or "").strip()
        or DEFAULT_PROVIDER
    ).lower()
    if selected not in ALLOWED_PROVIDERS:
        raise UnknownProviderError(selected, list(ALLOWED_PROVIDERS))
    return selected


def resolve_api_key(
    provider: str, spec: ProviderSpec, app_config: AppConfig, environ: Mapping[str, str]
) -> str:
    """Primary env var, then the legacy env var, then the config file."""
    for env_var in (spec.api_key_env, spec.legacy_api_key_env):
        if not env_var:
            continue
        value = environ.get(env_var, "").strip()
        if value:
            logger.debug("API key resolved from environment", extra={"env_var": env_var})
            return value
    return app_config.stored_api_key(provider)


def api_root(url: str) -> str:
    """Accept either an API root or a full chat-completions endpoint URL."""
    root = url.strip().rstrip("/")
    if root.endswith(CHAT_COMPLETIONS_PATH):
        root = root[: -len(CHAT_COMPLETIONS_PATH)]
    return root


def _positive_or_default(*candidates: float | None, default: float) -> float:
    for candidate in candidates:
        if candidate is not None and candidate > 0:
            return candidate
    return default


def resolve_provider_profile(
    app_config: AppConfig,
    provider: str | None = None,
    *,
    models: Sequence[str] | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    environ: Mapping[str, str] | None = None,
) -> ProviderProfile:
    environ = os.environ if environ is None else environ
    name = select_provider(app_config, provider, environ)
    spec = PROVIDER_SPECS[name]

    api_key = resolve_api_key(name, spec, app_config, environ)
    if spec.requires_api_key and not api_key:
        raise MissingCredentialError(name, spec.api_key_env)

    # File-level models and endpoint belong to the provider the file was written for.
    configured_provider = (app_config.provider or DEFAULT_PROVIDER).lower()
    uses_file_settings = name == configured_provider

    resolved_models = normalize_models(list(models or []))
    if not resolved_models and uses_file_settings:
        resolved_models = list(app_config.models)
    if not resolved_models:
        resolved_models = list(spec.default_models)

    base_url = spec.base_url
    if uses_file_settings and spec.kind == "openai" and app_config.api_url:
        base_url = api_root(app_config.api_url)

    try:
        profile = ProviderProfile(
            name=name,
            kind=spec.kind,
            base_url=base_url.rstrip("/"),
            api_key=api_key,
            models=tuple(resolved_models),
            max_tokens=int(
                _positive_or_default(max_tokens, app_config.max_tokens, default=DEFAULT_MAX_TOKENS)
            ),
            temperature=_positive_or_default(
                temperature, app_config.temperature, default=DEFAULT_TEMPERATURE
            ),
            timeout_seconds=_positive_or_default(
                app_config.timeout_seconds, default=REQUEST_TIMEOUT_SECONDS
            ),
        )
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidSettingError(f"Invalid settings for provider {name}: {problems}") from exc
    logger.debug(
        "Provider profile resolved",
        extra={"provider": profile.name, "models": list(profile.models)},
    )
    return profile


def resolve_fallback_profiles(
    app_config: AppConfig,
    providers: Sequence[str | None],
    *,
    models: Sequence[str] | None = None,
    max_tokens: int | None = None,
    temperature: float | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[ProviderProfile]:
    """Resolve the primary provider plus any fallback providers, in order.

    Explicit model overrides only apply to the first (primary) provider; the
    fallback providers use their own configured or default model lists.
    """
    profiles: list[ProviderProfile] = []
    seen: set[str] = set()
    for index, provider in enumerate(providers):
        profile = resolve_provider_profile(
            app_config,
            provider,
            models=models if index == 0 else None,
            max_tokens=max_tokens,
            temperature=temperature,
            environ=environ,
        )
        if profile.name in seen:
            continue
        seen.add(profile.name)
        profiles.append(profile)
    return profiles
