"""Configuration management"""

import logging
from typing import Literal, Optional
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field

logger = logging.getLogger(__name__)

FIREFOX_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:137.0) "
    "Gecko/20100101 Firefox/137.0"
)


class Settings(BaseSettings):
    """Application settings"""
    server_host: str = Field(default="0.0.0.0", description="Listen address")
    server_port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "SERVER_PORT", "server_port"),
        description="Listen port",
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")
    user_agent: str = Field(default=FIREFOX_USER_AGENT, description="Browser user agent sent upstream")
    request_timeout: float = Field(default=30, description="Upstream transport timeout (seconds)")
    bahn_base_url: str = Field(default="https://www.bahn.de", description="Upstream base URL")
    station_resolver: Literal["remote", "static"] = Field(
        default="remote", description="Station resolution strategy"
    )
    station_table_path: Optional[str] = Field(default=None, description="Static station table (JSON)")
    timezone: str = Field(default="Europe/Berlin", description="Wall-clock timezone for search dates")
    default_day_limit: int = Field(default=3, description="Days searched when dayLimit is omitted")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached settings instance"""
    global _settings
    if _settings is None:
        env_file_path = Path(".env")
        if not env_file_path.exists():
            logger.warning(f"Environment file {env_file_path.absolute()} not found, using defaults")
        else:
            logger.info(f"Loading environment file: {env_file_path.absolute()}")

        try:
            _settings = Settings()
            logger.info(
                f"Settings loaded - host: {_settings.server_host}, port: {_settings.server_port}, "
                f"resolver: {_settings.station_resolver}, log level: {_settings.log_level}"
            )
        except Exception as e:
            logger.error(f"Failed to load settings: {e}, using defaults")
            _settings = Settings.model_validate({})

    return _settings
