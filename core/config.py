# core/config.py

from enum import Enum
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Runtime configuration, read from environment variables or `.env`."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Glossy Transition Campaign API"
    app_env: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./campaign.db"
    database_echo: bool = False

    # Sessions
    session_secret: str = "change-me-in-production"
    session_cookie: str = "campaign_session"
    session_max_age: int = 14 * 24 * 60 * 60  # 14 days

    # OTP
    otp_ttl_minutes: int = 5
    test_phone_number: str = "+913333333331"
    test_otp: str = "123456"
    invalidate_previous_otps: bool = True

    # Campaign rules
    campaign_name: str = "glossy_transition"
    enforce_eligibility: bool = False
    min_followers: int = 500
    min_engagement_rate: float = 6.0
    auto_approve: bool = True
    target_participants: int = 500000
    target_content: int = 100000

    @property
    def is_production(self) -> bool:
        return self.app_env == Environment.PRODUCTION


@lru_cache()
def get_settings() -> Settings:
    return Settings()
