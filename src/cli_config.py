"""Configuration loading for the aggregation run.

Values come from an optional YAML/JSON file and from repeatable CLI flags;
CLI values are appended after the file values.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from aggregate.pipeline import AggregationConfig
from constants import Constants
from errors import ConfigError

logger = logging.getLogger(__name__)

# config key -> argparse dest
CONFIG_KEYS = {
    "include_only_repo_ids": "INCLUDE_REPO_IDS",
    "include_only_repo_urls": "INCLUDE_REPO_URLS",
    "excluded_repo_ids": "EXCLUDE_REPO_IDS",
    "excluded_repo_urls": "EXCLUDE_REPO_URLS",
    "additional_artifacts": "ADDITIONAL_ARTIFACTS",
}


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the configuration mapping from a YAML (or JSON) file.

    A top-level ``finddeps:`` section is unwrapped when present.

    Raises:
        FileNotFoundError: when ``config_path`` does not exist.
        ConfigError: when the file is not valid YAML or not a mapping.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        raise FileNotFoundError(config_path)

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid configuration file {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping")
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"'{Constants.CONFIG_SECTION}' section of {config_path} must be a mapping")

    unknown = sorted(set(section) - set(CONFIG_KEYS))
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
    return section


def _string_list(key: str, value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"Configuration value '{key}' must be a list of strings")
    return list(value)


def build_config(args: Any = None, file_values: Optional[Dict[str, Any]] = None) -> AggregationConfig:
    """Merge file values and CLI flags into an ``AggregationConfig``.

    Raises:
        ConfigError: when a value is not a string or list of strings.
    """
    file_values = file_values or {}
    merged: Dict[str, List[str]] = {}
    for key, dest in CONFIG_KEYS.items():
        values = _string_list(key, file_values.get(key))
        values.extend(_string_list(key, getattr(args, dest, None)))
        merged[key] = values
    return AggregationConfig(**merged)
