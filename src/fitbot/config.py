"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    jwt_expires_days: int = 7
    ai_api_key: str | None = None
    ai_base_url: str = "https://openrouter.ai/api/v1"
    ai_model: str = "openai/gpt-3.5-turbo"
    ai_timeout_seconds: float = 8.0
    chat_mode: Literal["fallback", "external_first"] = "external_first"
    off_base_url: str = "https://world.openfoodfacts.org"
    off_user_agent: str = "FitBot/1.0 (https://github.com/fitbot)"
    off_timeout_seconds: float = 10
    local_food_csv_path: str = "data/food-database.csv"
    cors_origins: str = "*"
    admin_email: str | None = None
    general_rate_limit: str = "200/10 seconds"
    auth_rate_limit: str = "20/10 seconds"
    chat_rate_limit: str = "50/10 seconds"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env; empty or "*" allows any origin."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins = [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
    return origins or ["*"]
