# app/core/config.py

from typing import Annotated, Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from the environment (and .env)."""

    database_url: Optional[str] = None
    environment: str = "development"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # CORS_ORIGINS is a comma-separated list in the environment
    cors_origins: Annotated[List[str], NoDecode] = ["*"]

    db_pool_size: int = 10
    db_timeout_seconds: int = 30
    port: int = 8080

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("log_file", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        return value or None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [o.strip() for o in value.split(",") if o.strip()]
        return value or ["*"]

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    def __repr__(self) -> str:
        return (
            f"Settings(environment={self.environment!r}, log_level={self.log_level!r}, "
            f"database_url_set={bool(self.database_url)}, cors_origins={self.cors_origins!r})"
        )
