"""Pydantic configuration models for the plugin."""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List

from ..dispatcher import DOMAINS, check_domain


class ThresholdsConfig(BaseModel):
    """Warning and critical boundaries for a single-point check."""
    warning: float = 85.0
    critical: float = 95.0

    @model_validator(mode='after')
    def critical_above_warning(self) -> 'ThresholdsConfig':
        """Ensure the critical threshold is larger than the warning threshold."""
        if self.critical <= self.warning:
            raise ValueError('--critical threshold must be larger than --warning threshold')
        return self


class PluginConfig(BaseModel):
    """Root configuration, validated before any query runs."""
    check: str = ""  # Single point to check, e.g. "connections.sensu.total"
    critical: float = 95.0
    warning: float = 85.0
    debug: bool = False
    database_name: str = "sensu"
    user_name: str = "sensu"
    metrics: List[str] = Field(default_factory=lambda: list(DOMAINS))
    psql_path: str = "psql"
    query_timeout: float = Field(default=30.0, ge=0)  # Seconds, 0 disables

    @field_validator('metrics', mode='before')
    @classmethod
    def split_metrics(cls, v):
        """Accept "bgwriter,locks" as well as a list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(',') if item.strip()]
        return v

    @model_validator(mode='after')
    def validate_plugin(self) -> 'PluginConfig':
        """Pre-flight checks, in the order the plugin reports them."""
        if not self.database_name:
            raise ValueError('--database or DATABASE_NAME environment variable is required')

        if self.check:
            if self.critical <= self.warning:
                raise ValueError('--critical threshold must be larger than --warning threshold')
            if check_domain(self.check) not in DOMAINS:
                raise ValueError(f'--check is not supported: {self.check}')
            # Check mode runs only the check's own domain
            self.metrics = [check_domain(self.check)]

        for metric in self.metrics:
            if metric not in DOMAINS:
                raise ValueError(f'--metrics not supported: {metric}')

        if not self.user_name:
            raise ValueError('--username or USER_NAME environment variable is required')

        return self

    @property
    def thresholds(self) -> ThresholdsConfig:
        return ThresholdsConfig(warning=self.warning, critical=self.critical)
