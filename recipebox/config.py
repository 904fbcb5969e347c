"""
config.py

Purpose:
    Application settings read from the environment (or a local .env file).

Usage:
    from recipebox.config import settings
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Storage
    database_url: str = "sqlite:///./recipebox.db"
    image_dir: str = "data/images"

    # Import pipeline
    user_agent: str = DESKTOP_USER_AGENT
    fetch_timeout: float = 20.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="RECIPEBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()


def get_settings() -> Settings:
    return settings
