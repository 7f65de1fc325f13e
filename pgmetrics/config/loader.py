"""Configuration loader: defaults, YAML file, environment, command line."""

import yaml
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional
from .models import PluginConfig
from .settings import Settings


class ConfigLoader:
    """Load and validate plugin configuration."""

    @staticmethod
    def read_file(config_path: str) -> Dict[str, Any]:
        """Read a YAML mapping of PluginConfig fields, substituting ${VAR} placeholders."""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        return ConfigLoader._substitute_env_vars(raw_config)

    @staticmethod
    def load(
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None
    ) -> PluginConfig:
        """
        Build configuration with precedence defaults < file < environment < overrides.

        Args:
            config_path: Optional YAML file
            overrides: Values given on the command line; None entries are ignored

        Returns:
            PluginConfig: Validated configuration object
        """
        raw_config: Dict[str, Any] = {}
        if config_path:
            raw_config.update(ConfigLoader.read_file(config_path))
        raw_config.update(Settings.from_environment())
        if overrides:
            raw_config.update({k: v for k, v in overrides.items() if v is not None})

        return PluginConfig(**raw_config)

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """
        Recursively substitute ${ENV_VAR} placeholders with environment values.

        Args:
            obj: Object to process (str, dict, list, or primitive)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, str):
            # Replace ${VAR_NAME} with os.getenv('VAR_NAME')
            pattern = r'\$\{(\w+)\}'
            return re.sub(pattern, lambda m: os.getenv(m.group(1), ''), obj)

        elif isinstance(obj, dict):
            return {k: ConfigLoader._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [ConfigLoader._substitute_env_vars(item) for item in obj]

        return obj
