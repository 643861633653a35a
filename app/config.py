from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = APP_DIR / "templates"
STATIC_DIR = APP_DIR / "static"


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./queue.db"
    base_url: str = "http://localhost:8000"
    admin_username: str = "admin"
    admin_password: str
    max_group_size: int = Field(default=99, ge=1)
    guest_poll_seconds: int = Field(default=10, ge=1)
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s %(message)s"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="", frozen=True)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Return the settings read once at process start."""

    return Settings()
