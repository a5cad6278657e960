"""Runtime settings, read from ``ARCHITECT_*`` environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LinterSettings(BaseSettings):
    """Process-level settings. Rule configuration lives in ``architect.json``."""

    model_config = SettingsConfigDict(env_prefix="ARCHITECT_", case_sensitive=False)

    workers: int | None = Field(default=None, ge=1)
    log_level: str = "WARNING"
    log_json: bool = False
    config_filename: str = "architect.json"


@lru_cache
def get_settings() -> LinterSettings:
    return LinterSettings()


def settings_env_name(field: str) -> str:
    """Environment variable that sets ``field``."""
    return f"{LinterSettings.model_config['env_prefix']}{field.upper()}"
