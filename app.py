"""gitcomm command line interface: generate a commit message from the staged diff."""

import json
import logging
import os

import click
from pydantic import ValidationError

from commit_api.config import resolve_fallback_profiles
from commit_api.constants import DEBUG_ENV, DEFAULT_PROVIDER, MAX_TEMPERATURE, OrchestratorName
from commit_api.errors import AllModelsFailedError, ConfigError, GitError, UnknownProviderError
from commit_api.infra import git
from commit_api.infra.config_store import load_config, masked_config, save_config
from commit_api.infra.runtime import configure_langsmith, flush_langsmith_traces
from commit_api.model_registry import ALLOWED_PROVIDERS
from commit_api.orchestration.base import ChatOrchestrator
from commit_api.orchestration.fallback import FallbackChatOrchestrator
from commit_api.orchestration.langgraph_flow import LangGraphFallbackOrchestrator
from commit_api.providers.base import ChatProvider, LogContext
from commit_api.providers.gemini_provider import GeminiChatProvider
from commit_api.providers.openai_provider import OpenAIChatProvider
from commit_api.schemas import AppConfig
from commit_api.services.commit_service import CommitMessageService

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def debug_enabled(flag: bool) -> bool:
    return flag or os.environ.get(DEBUG_ENV, "").strip().lower() in ("1", "true", "yes")


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def echo_progress(message: str) -> None:
    click.echo(message, err=True)


def get_commit_service(
    orchestrator_name: OrchestratorName, log_context: LogContext
) -> CommitMessageService:
    providers: dict[str, ChatProvider] = {
        "openai": OpenAIChatProvider(log_context=log_context),
        "gemini": GeminiChatProvider(log_context=log_context),
    }
    orchestrator: ChatOrchestrator
    if orchestrator_name == "langgraph":
        orchestrator = LangGraphFallbackOrchestrator(providers, log_context)
    else:
        orchestrator = FallbackChatOrchestrator(providers, log_context)
    return CommitMessageService(orchestrator)


@click.group(invoke_without_command=True)
@click.version_option(VERSION, prog_name="gitcomm")
@click.option("-a", "--auto", is_flag=True, help="Commit with the generated message")
@click.option("-s", "--stage-all", is_flag=True, help="Stage all changes (git add .) first")
@click.option("-p", "--push", is_flag=True, help="Push after committing (requires --auto)")
@click.option("--provider", type=str, default=None, help="Provider to use")
@click.option(
    "-m",
    "--model",
    "models",
    multiple=True,
    help="Model to try; repeat to set the fallback order",
)
@click.option(
    "--fallback-provider",
    "fallback_providers",
    multiple=True,
    help="Provider to fall back to after the primary one; repeatable",
)
@click.option("--max-tokens", type=int, default=None, help="Maximum tokens to generate")
@click.option(
    "--temperature",
    type=click.FloatRange(max=MAX_TEMPERATURE),
    default=None,
    help="Sampling temperature",
)
@click.option("--debug", is_flag=True, help="Log requests and raw model responses")
@click.pass_context
def cli(
    ctx: click.Context,
    auto: bool,
    stage_all: bool,
    push: bool,
    provider: str | None,
    models: tuple[str, ...],
    fallback_providers: tuple[str, ...],
    max_tokens: int | None,
    temperature: float | None,
    debug: bool,
) -> None:
    """Generate a commit message for the staged changes."""
    if ctx.invoked_subcommand is not None:
        return
    if push and not auto:
        raise click.UsageError("--push requires --auto")

    debug = debug_enabled(debug)
    configure_logging(debug)
    log_context = LogContext(debug=debug, progress=echo_progress)

    try:
        app_config = load_config()
        configure_langsmith(app_config)
        profiles = resolve_fallback_profiles(
            app_config,
            [provider, *(fallback_providers or app_config.fallback_providers)],
            models=models,
            max_tokens=max_tokens,
            temperature=temperature,
        )

        if stage_all:
            git.stage_all()
        diff = git.get_staged_diff()
        if not diff.strip():
            click.echo("No staged changes. Please stage your changes before running gitcomm.")
            return

        click.echo("Analyzing changes and generating commit message...", err=True)
        service = get_commit_service(app_config.orchestrator, log_context)
        suggestion = service.suggest(diff, profiles)
        click.echo(suggestion.message)

        if not auto:
            return
        if suggestion.is_placeholder:
            raise click.ClickException(
                "Could not extract a commit message from the model output; nothing committed."
            )
        git.commit(suggestion.message)
        click.echo("Changes committed successfully!", err=True)
        if push:
            git.push()
            click.echo("Changes pushed successfully!", err=True)
    except (ConfigError, AllModelsFailedError, GitError) as exc:
        logger.debug("gitcomm failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc
    finally:
        flush_langsmith_traces()


@cli.group("config")
def config_group() -> None:
    """Inspect or update ~/.gitcomm/config.json."""


@config_group.command("show")
def config_show() -> None:
    """Print the stored configuration with secrets masked."""
    try:
        app_config = load_config()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(masked_config(app_config), indent=4))


@config_group.command("set")
@click.option("--provider", type=str, default=None, help="Default provider")
@click.option("--api-key", type=str, default=None, help="API key for the provider")
@click.option("-m", "--model", "models", multiple=True, help="Fallback model list, in order")
@click.option("--fallback-provider", "fallback_providers", multiple=True)
@click.option("--max-tokens", type=int, default=None)
@click.option("--temperature", type=click.FloatRange(max=MAX_TEMPERATURE), default=None)
@click.option("--api-url", type=str, default=None, help="Base URL for an OpenAI-style API")
@click.option("--timeout", "timeout_seconds", type=float, default=None)
@click.option("--orchestrator", type=click.Choice(["sequential", "langgraph"]), default=None)
def config_set(
    provider: str | None,
    api_key: str | None,
    models: tuple[str, ...],
    fallback_providers: tuple[str, ...],
    max_tokens: int | None,
    temperature: float | None,
    api_url: str | None,
    timeout_seconds: float | None,
    orchestrator: str | None,
) -> None:
    """Store settings without prompting."""
    try:
        app_config = load_config()
        for name in [provider, *fallback_providers]:
            if name is not None and name.lower() not in ALLOWED_PROVIDERS:
                raise UnknownProviderError(name, list(ALLOWED_PROVIDERS))
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    updates: dict[str, object] = {}
    if provider is not None:
        updates["provider"] = provider.lower()
    if api_key is not None:
        target = (provider or app_config.provider or DEFAULT_PROVIDER).lower()
        updates["api_keys"] = {**app_config.api_keys, target: api_key.strip()}
    if models:
        updates["models"] = list(models)
    if fallback_providers:
        updates["fallback_providers"] = [name.lower() for name in fallback_providers]
    if max_tokens is not None:
        updates["max_tokens"] = max_tokens
    if temperature is not None:
        updates["temperature"] = temperature
    if api_url is not None:
        updates["api_url"] = api_url.strip() or None
    if timeout_seconds is not None:
        updates["timeout_seconds"] = timeout_seconds
    if orchestrator is not None:
        updates["orchestrator"] = orchestrator

    try:
        updated = AppConfig.model_validate({**app_config.model_dump(), **updates})
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    path = save_config(updated)
    click.echo(f"Configuration saved to {path}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
