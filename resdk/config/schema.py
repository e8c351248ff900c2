"""Configuration schema using Pydantic."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from resdk.core.models import Outcome


class ResponsesConfig(BaseModel):
    """Status codes and content type used by the default JSON serializers."""

    model_config = ConfigDict(extra="ignore")

    content_type: str = "application/json"
    success_status: int = Field(default=200, ge=100, le=599)
    authentication_error_status: int = Field(default=401, ge=100, le=599)
    validation_error_status: int = Field(default=400, ge=100, le=599)
    processing_error_status: int = Field(default=500, ge=100, le=599)
    not_found_status: int = Field(default=404, ge=100, le=599)
    authorization_error_status: int = Field(default=403, ge=100, le=599)
    not_found_message: str = "Not found"

    def status_for(self, outcome: Outcome) -> int:
        """HTTP status code for one lifecycle outcome."""
        return int(getattr(self, f"{outcome}_status"))


class ServerConfig(BaseModel):
    """Settings for ``resdk serve``."""

    model_config = ConfigDict(extra="ignore")

    host: str = "127.0.0.1"  # localhost only by default
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class TelemetryConfig(BaseModel):
    """Prometheus exporter settings."""

    model_config = ConfigDict(extra="ignore")

    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = Field(default=9100, ge=1, le=65535)


class Config(BaseSettings):
    """Root configuration for resdk.

    Values come from ``RESDK_*`` environment variables first, then from the
    config file, then from the defaults below.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        env_prefix="RESDK_",
        env_nested_delimiter="__",
    )

    config_version: int = 1
    responses: ResponsesConfig = Field(default_factory=ResponsesConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # File values arrive as init kwargs; the environment overrides them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings
