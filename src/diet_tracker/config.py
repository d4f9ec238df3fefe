"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    off_base_url: str = "https://world.openfoodfacts.org"
    off_user_agent: str = "PersonalDietTracker/1.0"
    civil_timezone: str = "Asia/Kolkata"
    food_cache_max_age_days: int = 7
    remote_search_timeout_seconds: float = 3.0
    remote_search_min_query_length: int = 3
    remote_search_limit: int = 5
    cache_search_limit: int = 8
    search_result_limit: int = 12
    search_debounce_seconds: float = 0.3
    userback_token: str | None = None
    userback_script_url: str = "https://static.userback.io/widget/v1.js"
    support_email: str = "feedback@example.com"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_bearer_token(raw: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header value."""
    if raw is None:
        return None
    scheme, _, token = raw.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    cleaned = token.strip()
    return cleaned or None
