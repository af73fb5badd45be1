"""
C2D Console Configuration — Single Source of Truth (SSoT)

IoT Hub coordinates, camera defaults and direct-method timeouts are
centralized here using pydantic-settings.
Secrets are loaded from the environment or a `.env` file and NEVER hardcoded.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


# ─── Enums ────────────────────────────────────────────────────────────────────

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ─── Core Application Settings ───────────────────────────────────────────────

class ConsoleSettings(BaseSettings):
    """Global configuration loaded from environment variables / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="C2D_",
        case_sensitive=False,
        extra="ignore",
    )

    # ── General ──────────────────────────────────────────────────────────────
    log_level: LogLevel = Field(default=LogLevel.WARNING)

    # ── IoT Hub ──────────────────────────────────────────────────────────────
    iothub_connection_string: Optional[SecretStr] = Field(default=None)
    device_id: Optional[str] = Field(default=None)
    module_id: str = Field(default="lvaEdge")
    iothub_api_version: str = Field(default="2021-04-12")

    # ── Direct methods ───────────────────────────────────────────────────────
    method_response_timeout_s: int = Field(default=30, ge=5, le=300)
    method_connect_timeout_s: int = Field(default=0, ge=0, le=300)
    http_timeout_s: float = Field(default=60.0, gt=0)

    # ── Camera (RTSP) ────────────────────────────────────────────────────────
    rtsp_url: Optional[str] = Field(default=None)
    rtsp_user_name: Optional[str] = Field(default=None)
    rtsp_password: Optional[SecretStr] = Field(default=None)

    # ── Graph instance ───────────────────────────────────────────────────────
    instance_name: str = Field(default="Sample-Graph-1")
    instance_description: str = Field(default="Sample graph description")

    @property
    def rtsp_password_value(self) -> Optional[str]:
        if self.rtsp_password is None:
            return None
        return self.rtsp_password.get_secret_value()


# ─── Singleton accessor ──────────────────────────────────────────────────────

_settings: Optional[ConsoleSettings] = None


def get_settings(env_file: Optional[str] = None) -> ConsoleSettings:
    """Return the cached global settings instance (lazy-loaded).

    An explicit ``env_file`` replaces the cached instance.
    """
    global _settings
    if env_file is not None:
        _settings = ConsoleSettings(_env_file=env_file)
    elif _settings is None:
        _settings = ConsoleSettings()
    return _settings
