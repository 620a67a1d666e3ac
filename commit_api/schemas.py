"""Pydantic schemas for provider profiles, chat payloads and the config file."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_validator

from .constants import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    MAX_TEMPERATURE,
    REQUEST_TIMEOUT_SECONDS,
    OrchestratorName,
    WireDialect,
)


def normalize_models(models: list[str] | tuple[str, ...] | None) -> list[str]:
    """Strip model ids, drop blanks and keep the first occurrence of duplicates."""
    normalized: list[str] = []
    for model in models or []:
        trimmed = model.strip()
        if trimmed and trimmed not in normalized:
            normalized.append(trimmed)
    return normalized


class ProviderProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: WireDialect
    base_url: str
    api_key: str = ""
    models: tuple[str, ...] = Field(min_length=1)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, gt=0, le=MAX_TEMPERATURE)
    timeout_seconds: float = Field(default=REQUEST_TIMEOUT_SECONDS, gt=0)

    @property
    def default_model(self) -> str:
        return self.models[0]

    @property
    def fallback_models(self) -> tuple[str, ...]:
        return self.models[1:]


class ChatMessage(BaseModel):
    role: Literal["user"] = "user"
    content: str


class ChatRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=1)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0, le=MAX_TEMPERATURE)
    stream: Literal[False] = False

    @model_validator(mode="after")
    def validate_single_user_message(self) -> "ChatRequest":
        if len(self.messages) != 1:
            raise ValueError("ChatRequest must carry exactly one user message")
        return self

    @classmethod
    def for_prompt(cls, profile: ProviderProfile, model: str, prompt: str) -> "ChatRequest":
        return cls(
            model=model,
            messages=[ChatMessage(content=prompt)],
            max_tokens=profile.max_tokens,
            temperature=profile.temperature,
        )

    @property
    def prompt(self) -> str:
        return self.messages[0].content


class ChatCompletionMessage(BaseModel):
    content: StrictStr


class ChatCompletionChoice(BaseModel):
    message: ChatCompletionMessage


class ChatCompletionEnvelope(BaseModel):
    """Required subset of an OpenAI-style chat completion body."""

    choices: list[ChatCompletionChoice] = Field(min_length=1)

    @property
    def content(self) -> str:
        return self.choices[0].message.content


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: str | None = None
    api_keys: dict[str, str] = Field(default_factory=dict)
    open_router_api_key: str | None = None
    models: list[str] = Field(default_factory=list)
    fallback_providers: list[str] = Field(default_factory=list)
    max_tokens: int = 0
    temperature: float = 0
    api_url: str | None = None
    timeout_seconds: float = 0
    orchestrator: OrchestratorName = "sequential"
    langsmith_api_key: str | None = None

    @field_validator("models")
    @classmethod
    def validate_models(cls, models: list[str]) -> list[str]:
        return normalize_models(models)

    @field_validator("max_tokens", "temperature", "timeout_seconds")
    @classmethod
    def clamp_negative(cls, value: float) -> float:
        return value if value > 0 else 0

    def stored_api_key(self, provider: str) -> str:
        key = self.api_keys.get(provider) or ""
        if not key and provider == "openrouter":
            key = self.open_router_api_key or ""
        return key.strip()
