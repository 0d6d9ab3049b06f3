from __future__ import annotations

from typing import Literal

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from openwx.clients.openweather import DEFAULT_USER_AGENT, OPENWEATHER_BASE_URL
from openwx.models.weather import Units

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="OPENWX_",
        case_sensitive=False,
    )

    api_key: str = Field(default="")
    base_url: AnyHttpUrl = Field(default=OPENWEATHER_BASE_URL)
    units: Units = Field(default=Units.STANDARD)

    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=3, max_length=256)
    timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)

    # Newport Coast, CA
    default_latitude: float = Field(default=33.545)
    default_longitude: float = Field(default=-117.771)

    log_level: LogLevel = Field(default="WARNING")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def base_url_str(self) -> str:
        return str(self.base_url).rstrip("/")


def load_settings() -> Settings:
    return Settings()
