from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PortalSettings(BaseSettings):
    """
    Runtime configuration, read from MEDPORTAL_* environment variables
    (or a local .env file).
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDPORTAL_", env_file=".env", extra="ignore"
    )

    APP_TITLE: str = "Medical sales portal"
    DATABASE_URL: str = "sqlite:///./medportal.db"
    SESSION_TTL_MINUTES: int = Field(720, gt=0)
    LOG_LEVEL: str = "INFO"
    # Tables are created on startup unless a migration tool owns the schema
    CREATE_TABLES_ON_STARTUP: bool = True


config_settings = PortalSettings()
