"""
Shared configuration management for the Browser Gate.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ACCESS_",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


class GateSettings(ServiceConfig):
    """Settings consumed when assembling the browser gate.

    ``ACCESS_GATE_EXCLUDE`` is read as a JSON list, e.g.
    ``'["^/assets", "^/health"]'``.
    """

    gate_location: Optional[str] = Field(default=None)
    gate_exclude: List[str] = Field(default_factory=list)
    gate_rules_file: Optional[str] = Field(default=None)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)


def get_gate_settings(service_name: str = "browser_gate", port: int = 8090, **overrides) -> GateSettings:
    """Get gate settings, with explicit overrides taking precedence over env."""
    return GateSettings(service_name=service_name, port=port, **overrides)
