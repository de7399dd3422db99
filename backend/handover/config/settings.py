"""Handover Ops configuration, read from the environment (and .env)"""
from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Project store
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "handover_ops_dev"

    # Used when the settings collection holds no integrations catalog yet
    integrations_seed_path: str = "./data/integrations.json"

    # Version history
    default_version: int = Field(default=1, ge=1)
    persist_version_history: bool = True

    # Logging; an empty logs_path keeps logs on stdout only
    logs_path: str = "./logs"
    log_level: str = "INFO"

    # Comma separated origins, or "*"
    cors_origins: str = "*"

    environment: str = "development"
    debug: bool = True

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def allow_all_origins(self) -> bool:
        return self.cors_origins.strip() == "*"

    @property
    def docs_enabled(self) -> bool:
        """OpenAPI docs are served in debug mode outside production"""
        return self.debug and self.environment.lower() != "production"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
