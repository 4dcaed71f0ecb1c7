"""Client code generation driven by a YAML configuration."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".ariadne-codegen.yml"
SECTION_KEY = "ariadne-codegen"
SCHEMA_SOURCE_KEYS = ("schema_path", "remote_schema_url")


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Load generator settings from a YAML file.

    The document may either hold the settings directly or nest them under an
    ``ariadne-codegen`` key.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or lacks a
            schema source or ``queries_path``.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"configuration file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc

    if isinstance(data, dict) and SECTION_KEY in data:
        data = data[SECTION_KEY]
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping of generator settings")
    if not any(data.get(key) for key in SCHEMA_SOURCE_KEYS):
        raise ConfigError(f"{path} must set one of: {', '.join(SCHEMA_SOURCE_KEYS)}")
    if not data.get("queries_path"):
        raise ConfigError(f"{path} must set queries_path")
    return data


def generate(config: Mapping[str, Any]) -> None:
    """Generate client bindings with ariadne-codegen."""
    from ariadne_codegen.main import client

    logger.info("Generating client package %s", config.get("target_package_name", "graphql_client"))
    client({"tool": {SECTION_KEY: dict(config)}})
