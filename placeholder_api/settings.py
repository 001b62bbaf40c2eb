from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PLACEHOLDER_", case_sensitive=False, frozen=True
    )

    config_path: Path | None = None
    bind_host: str = "0.0.0.0"
    bind_port: int = 3000
    log_level: str = "INFO"
    cache_max_age: int = 31536000
