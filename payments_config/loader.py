"""
Configuration Loader (``payments_config.loader``).

Responsibility
--------------
Loads an engine configuration YAML file and parses it into the frozen
``EngineConfig`` dataclass.

File format
-----------
Either a bare mapping or a mapping under a top-level ``engine`` key::

    engine:
      output_decimal_places: 4
      output_rounding: ROUND_HALF_EVEN
      delimiter: ","
      log_level: ERROR

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or invalid values  -> ``ValueError``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from payments_config.schema import EngineConfig

CONFIG_ENV_VAR = "PAYMENTS_CONFIG"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(data).__name__}")
    return data


def parse_engine_config(data: dict[str, Any]) -> EngineConfig:
    """Parse an EngineConfig from a dict, rejecting unknown keys."""
    if "engine" in data:
        if set(data) != {"engine"}:
            extra = sorted(set(data) - {"engine"})
            raise ValueError(f"Unknown top-level configuration keys: {extra}")
        data = data["engine"] or {}
        if not isinstance(data, dict):
            raise ValueError("'engine' must be a mapping")
    unknown = sorted(set(data) - EngineConfig.field_names())
    if unknown:
        raise ValueError(f"Unknown configuration keys: {unknown}")
    return EngineConfig(**data)


def load_engine_config(path: Path | str | None = None) -> EngineConfig:
    """
    Load the engine configuration.

    Resolution order: explicit ``path``, then the ``PAYMENTS_CONFIG``
    environment variable, then built-in defaults.
    """
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if not env_path:
            return EngineConfig()
        path = env_path
    return parse_engine_config(load_yaml_file(Path(path)))
