"""
Centralized configuration for the importer.

Values resolve in this order:
1. Explicit overrides (CLI flags)
2. Environment variables
3. YAML config file (~/.hnp_importer/config.yaml or --config)
4. Defaults below
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError
from .paths import config_path

logger = logging.getLogger(__name__)

# ============================================================
# Defaults
# ============================================================

DEFAULT_API_BASE: str = "https://api.hacknplan.com/v0"
"""Hack'n'Plan public API root."""

DEFAULT_TIMEOUT: float = 30.0
"""Per-request HTTP timeout in seconds."""

DEFAULT_LOG_LEVEL: str = "INFO"

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
"""Accepted values for log_level (case-insensitive)."""

# ============================================================
# Environment variables
# ============================================================

ENV_API_KEY = "HACKNPLAN_API_KEY"
ENV_PROJECT_ID = "HACKNPLAN_PROJECT_ID"
ENV_API_BASE = "HACKNPLAN_API_BASE"
ENV_DEFAULT_CATEGORY = "HNP_IMPORTER_DEFAULT_CATEGORY"
ENV_LOG_LEVEL = "HNP_IMPORTER_LOG_LEVEL"

# config key -> env var
_ENV_KEYS = {
    "api_key": ENV_API_KEY,
    "project_id": ENV_PROJECT_ID,
    "api_base": ENV_API_BASE,
    "default_category": ENV_DEFAULT_CATEGORY,
    "log_level": ENV_LOG_LEVEL,
}


@dataclass(frozen=True)
class ImporterConfig:
    """Settings for one import run."""

    api_key: str
    project_id: int
    api_base: str = DEFAULT_API_BASE
    default_category: str | None = None
    board: str | None = None
    dry_run: bool = False
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def project_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/projects/{self.project_id}"


def load_config_file(path: str | Path | None = None) -> dict[str, Any]:
    """
    Load the YAML config file.

    A missing default file is fine (returns {}); a missing explicit path
    is an error.
    """
    explicit = path is not None
    file_path = Path(path) if explicit else config_path()
    if not file_path.exists():
        if explicit:
            raise ConfigurationError(f"Config file not found: {file_path}")
        return {}

    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{file_path} must contain a mapping at top level")

    logger.debug(f"Loaded config file {file_path}")
    return data


def load_config(path: str | Path | None = None, **overrides: Any) -> ImporterConfig:
    """
    Build an ImporterConfig.

    Args:
        path: Optional explicit YAML config path.
        **overrides: Values that win over env and file (None is ignored).

    Raises:
        ConfigurationError if the API key or project id is missing/invalid,
        or the timeout or log level is not usable.
    """
    values: dict[str, Any] = dict(load_config_file(path))

    for key, env_var in _ENV_KEYS.items():
        if os.environ.get(env_var):
            values[key] = os.environ[env_var]

    for key, value in overrides.items():
        if value is not None:
            values[key] = value

    api_key = values.get("api_key")
    if not api_key:
        raise ConfigurationError(f"No Hack'n'Plan API key. Set {ENV_API_KEY} or api_key in config.")

    raw_project = values.get("project_id")
    if raw_project in (None, ""):
        raise ConfigurationError(
            f"No Hack'n'Plan project. Set {ENV_PROJECT_ID} or project_id in config."
        )
    try:
        project_id = int(raw_project)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"{ENV_PROJECT_ID} must be an integer, got {raw_project!r}"
        ) from e

    try:
        timeout = float(values.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"timeout must be a number, got {values.get('timeout')!r}") from e

    log_level = str(values.get("log_level") or DEFAULT_LOG_LEVEL).upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"Unknown log level {log_level!r}. Use one of: {', '.join(LOG_LEVELS)}"
        )

    return ImporterConfig(
        api_key=str(api_key),
        project_id=project_id,
        api_base=str(values.get("api_base") or DEFAULT_API_BASE),
        default_category=values.get("default_category") or None,
        board=values.get("board") or None,
        dry_run=bool(values.get("dry_run", False)),
        timeout=timeout,
        log_level=log_level,
    )
