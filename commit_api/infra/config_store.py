"""Load and save the JSON configuration file."""

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from commit_api.constants import CONFIG_DIR_ENV, CONFIG_DIR_NAME, CONFIG_FILE_NAME
from commit_api.errors import ConfigFileError
from commit_api.schemas import AppConfig

logger = logging.getLogger(__name__)


def config_path(environ: Mapping[str, str] | None = None) -> Path:
    environ = os.environ if environ is None else environ
    override = environ.get(CONFIG_DIR_ENV, "").strip()
    config_dir = Path(override) if override else Path.home() / CONFIG_DIR_NAME
    return config_dir / CONFIG_FILE_NAME


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        logger.debug("Config file not found; using defaults", extra={"path": str(path)})
        return AppConfig()

    try:
        return AppConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigFileError(f"Cannot read config file {path}: {exc}") from exc
    except ValidationError as exc:
        raise ConfigFileError(f"Invalid config file {path}: {exc}") from exc


def save_config(config: AppConfig, path: Path | None = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
    payload = config.model_dump(exclude_defaults=True)
    path.write_text(json.dumps(payload, indent=4) + "\n", encoding="utf-8")
    path.chmod(0o600)
    logger.debug("Config file saved", extra={"path": str(path)})
    return path


def masked_config(config: AppConfig) -> dict[str, object]:
    """Config as a dict with every secret reduced to its last four characters."""

    def mask(value: str | None) -> str | None:
        if not value:
            return value
        return f"****{value[-4:]}" if len(value) > 4 else "****"

    payload = config.model_dump()
    payload["api_keys"] = {name: mask(key) for name, key in config.api_keys.items()}
    payload["open_router_api_key"] = mask(config.open_router_api_key)
    payload["langsmith_api_key"] = mask(config.langsmith_api_key)
    return payload
