"""Application configuration and environment management."""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ConfigDict, field_validator


load_dotenv()


def _detect_timezone() -> str:
    tz_env = os.environ.get("TZ") or os.environ.get("LOCAL_TIMEZONE")
    if tz_env:
        return tz_env

    try:
        import tzlocal

        return tzlocal.get_localzone_name() or "UTC"
    except Exception:
        return "UTC"


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="Zone Clock", description="Human readable app name")
    environment: str = Field(default="development", description="Runtime environment name")

    data_dir: Path = Field(default=Path("data"), description="Directory for persistent data")
    database_url: str = Field(
        default="sqlite:///data/zoneclock.db",
        description="SQLAlchemy connection string for the state store",
    )
    state_key: str = Field(
        default="zoneclock.clock_store_state.v1",
        description="Versioned key the clock snapshot is stored under",
    )

    default_timezone: str = Field(
        default_factory=_detect_timezone,
        description="Olson timezone identifier of the local environment",
    )

    viewer_context_url: str = Field(
        default="https://time.yaosamo.com/api/viewer-hour-format",
        description="Endpoint describing the viewer's location",
    )
    search_hosts: List[str] = Field(
        default_factory=lambda: ["https://time.yaosamo.com", "https://when-there.vercel.app"],
        description="City search hosts, tried in order",
    )
    search_path: str = Field(default="/api/geoapify-autocomplete", description="City search path on each host")
    search_limit: int = Field(default=8, ge=1, le=50, description="Maximum number of search results requested")
    lookup_timeout: float = Field(default=5.0, gt=0, description="Timeout in seconds for remote lookups")

    share_base_url: str = Field(default="https://time.yaosamo.com/", description="Base URL for share links")

    tick_seconds: int = Field(default=1, ge=1, description="Interval of the clock tick")
    uses_24_hour_clock: Optional[bool] = Field(
        default=None,
        description="Force 12/24-hour display; detected from the locale when unset",
    )
    log_level: str = Field(default="INFO", description="Root log level for the zoneclock logger")

    @field_validator("default_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone '{value}'") from exc
        return value

    @field_validator("search_hosts", mode="after")
    @classmethod
    def _normalise_hosts(cls, value: List[str]) -> List[str]:
        hosts = [item.strip().rstrip("/") for item in value if item and item.strip()]
        if not hosts:
            raise ValueError("At least one search host is required")
        return hosts

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        value_upper = value.upper()
        if value_upper not in allowed:
            raise ValueError(f"Unknown log level '{value}'")
        return value_upper


_ENV_MAPPING = {
    "APP_NAME": "app_name",
    "ENVIRONMENT": "environment",
    "DATA_DIR": "data_dir",
    "DATABASE_URL": "database_url",
    "STATE_KEY": "state_key",
    "DEFAULT_TIMEZONE": "default_timezone",
    "VIEWER_CONTEXT_URL": "viewer_context_url",
    "SEARCH_HOSTS": "search_hosts",
    "SEARCH_PATH": "search_path",
    "SEARCH_LIMIT": "search_limit",
    "LOOKUP_TIMEOUT": "lookup_timeout",
    "SHARE_BASE_URL": "share_base_url",
    "TICK_SECONDS": "tick_seconds",
    "USES_24_HOUR_CLOCK": "uses_24_hour_clock",
    "LOG_LEVEL": "log_level",
}


def _load_settings() -> Settings:
    data: dict[str, object] = {}
    for env_name, field_name in _ENV_MAPPING.items():
        if env_name not in os.environ:
            continue
        value = os.environ[env_name]
        if field_name == "search_hosts":
            data[field_name] = [item.strip() for item in value.split(",") if item.strip()]
        elif field_name == "uses_24_hour_clock" and not value.strip():
            continue
        else:
            data[field_name] = value
    return Settings(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = _load_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
