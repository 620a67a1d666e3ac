"""Domain-level exceptions for gitcomm."""


class ConfigError(ValueError):
    """Raised when provider configuration cannot be resolved."""


class MissingCredentialError(ConfigError):
    def __init__(self, provider: str, env_var: str | None = None) -> None:
        hint = f" (set {env_var} or store a key with 'gitcomm config set')" if env_var else ""
        super().__init__(f"API key not set for provider {provider}{hint}")
        self.provider = provider
        self.env_var = env_var


class UnknownProviderError(ConfigError):
    def __init__(self, provider: str, allowed: list[str]) -> None:
        super().__init__(
            f"Unsupported provider: {provider}. Allowed providers: {', '.join(sorted(allowed))}"
        )
        self.provider = provider


class ConfigFileError(ConfigError):
    """Raised when the configuration file exists but cannot be read or parsed."""


class InvalidSettingError(ConfigError):
    """Raised when a resolved setting such as temperature is out of range."""


class TransportError(Exception):
    """A single model attempt failed; the fallback chain may move on."""

    kind = "transport"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.model: str | None = None
        self.provider: str | None = None

    def bind(self, provider: str, model: str) -> "TransportError":
        self.provider = provider
        self.model = model
        return self


class NetworkError(TransportError):
    kind = "network"


class StatusError(TransportError):
    kind = "status"

    def __init__(self, status_code: int, body_snippet: str) -> None:
        super().__init__(f"HTTP {status_code}: {body_snippet}")
        self.status_code = status_code
        self.body_snippet = body_snippet


class DecodeError(TransportError):
    kind = "decode"


class UnexpectedShapeError(TransportError):
    kind = "unexpected_shape"


class EmptyCompletionError(UnexpectedShapeError):
    kind = "empty_response"

    def __init__(self) -> None:
        super().__init__("model returned an empty completion")


class AllModelsFailedError(RuntimeError):
    def __init__(
        self,
        last_error: TransportError | None,
        attempts: list[tuple[str, TransportError]] | None = None,
    ) -> None:
        attempts = attempts or []
        if last_error is None:
            message = "No models configured for the fallback chain"
        else:
            message = f"All {len(attempts)} model(s) failed; last error: {last_error}"
        super().__init__(message)
        self.last_error = last_error
        self.attempts = attempts


class GitError(RuntimeError):
    """Raised when a git command exits with a non-zero status."""
