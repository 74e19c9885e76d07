"""
payments_config -- Engine configuration.

Public API:
    EngineConfig        -- frozen settings consumed by the engine service
    load_engine_config  -- YAML file -> EngineConfig (defaults when no file)
"""

from payments_config.loader import CONFIG_ENV_VAR, load_engine_config, load_yaml_file
from payments_config.schema import EngineConfig

__all__ = ["CONFIG_ENV_VAR", "EngineConfig", "load_engine_config", "load_yaml_file"]
