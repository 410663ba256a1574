# config/settings.py

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global engine settings, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="CONTRACT_SUITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    APP_NAME: str = "contract-suite"
    APP_VERSION: str = "0.1.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    USE_COLORS: bool = True

    # Output grouping; when unset, groupings are appended at the collection root
    VARIATION_FOLDER_NAME: Optional[str] = None
    INTEGRATION_FOLDER_NAME: Optional[str] = None


# Create global settings instance
settings = Settings()
