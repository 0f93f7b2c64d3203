from __future__ import annotations

import os
from pathlib import Path

APP_ENV_HOME = "HNP_IMPORTER_HOME"


def app_home() -> Path:
    """
    User-writable home for the importer.
    Override with HNP_IMPORTER_HOME.
    """
    if os.environ.get(APP_ENV_HOME):
        return Path(os.environ[APP_ENV_HOME]).expanduser().resolve()
    return (Path.home() / ".hnp_importer").resolve()


def config_path() -> Path:
    """Default location of the optional YAML config file."""
    return app_home() / "config.yaml"
