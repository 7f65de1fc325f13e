"""Environment variable bindings for plugin options."""

import os
from typing import Any, Dict, Optional


class Settings:
    """Plugin option values taken from environment variables."""

    # PluginConfig field -> environment variable
    ENV_BINDINGS = {
        "check": "Check",
        "critical": "Critical",
        "warning": "Warning",
        "debug": "DEBUG",
        "database_name": "DATABASE_NAME",
        "user_name": "USER_NAME",
        "metrics": "METRICS",
        "psql_path": "PSQL_PATH",
        "query_timeout": "QUERY_TIMEOUT",
    }

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get an environment variable, treating an empty value as unset.

        Args:
            key: Environment variable name
            default: Value returned when the variable is unset or empty

        Returns:
            Optional[str]: Variable value or default
        """
        value = os.getenv(key)
        return value if value else default

    @staticmethod
    def from_environment() -> Dict[str, Any]:
        """
        Collect option values that are set in the environment.

        Returns:
            Dict[str, Any]: PluginConfig field names mapped to raw strings
        """
        values = {}
        for field, env_var in Settings.ENV_BINDINGS.items():
            value = Settings.get(env_var)
            if value is not None:
                values[field] = value
        return values
