"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application environment
    env: Literal["dev", "test", "staging", "prod"] = "dev"

    # Database (appointments and medications only; assessments are never stored)
    database_url: str = "sqlite+aiosqlite:///./carecompanion.db"
    init_db_on_startup: bool = True

    # Logging
    log_level: str = "INFO"

    # Assessment catalogs (file names inside carecompanion/assessment/data)
    question_bank_file: str = "question-bank-v1.yaml"
    resource_catalog_file: str = "resource-catalog-v1.yaml"
    default_audience: str = "all"

    # In-memory assessment sessions
    assessment_session_ttl_minutes: int = 60

    # Shown alongside results whenever the crisis item is answered above zero
    crisis_message_text: str = (
        "If you are having thoughts of harming yourself, please reach out now. "
        "Call or text 988 (Suicide & Crisis Lifeline, 24/7) or call 911 "
        "if you are in immediate danger."
    )
    crisis_message_enabled: bool = True

    # Chat assistant
    chat_api_key: str = ""
    chat_api_endpoint: str = "https://api.openai.com/v1/chat/completions"
    chat_model: str = "gpt-3.5-turbo"
    chat_max_tokens: int = 300
    chat_temperature: float = 0.7
    chat_timeout_seconds: float = 15.0

    # CORS
    cors_origins: list[str] = [
        "http://localhost:8088",
        "http://127.0.0.1:8088",
        "http://localhost:8082",
        "http://127.0.0.1:8082",
    ]

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode."""
        return self.env == "dev"

    @property
    def is_prod(self) -> bool:
        """Check if running in production mode."""
        return self.env == "prod"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
