"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central settings – values come from .env or environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Completion endpoint
    completion_api_key: str = ""
    completion_model: str = "mistralai/mistral-small-3.1-24b-instruct:free"
    completion_base_url: str = "https://openrouter.ai/api/v1"
    completion_mode: str = "chat"  # chat | completion
    completion_timeout_s: float = 60.0
    app_referer: str = ""
    app_title: str = "CareerSync AI"

    # Per-feature keys (fall back to completion_api_key)
    cv_analysis_api_key: str = ""
    job_match_api_key: str = ""
    career_advice_api_key: str = ""
    skills_map_api_key: str = ""
    mock_interview_api_key: str = ""

    # Feature behaviour
    min_cv_length: int = 50
    history_window_turns: int = 6

    # Hosted auth / profile backend
    supabase_url: str = ""
    supabase_key: str = ""

    # Telegram Bot (feedback notifications)
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""

    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"
    log_dir: str = "logs"

    def api_key_for(self, feature: str) -> str:
        """Return the API key configured for *feature*, or the shared key."""
        per_feature = {
            "cv_analysis": self.cv_analysis_api_key,
            "job_match": self.job_match_api_key,
            "career_chat": self.career_advice_api_key,
            "skills_roadmap": self.skills_map_api_key,
            "mock_interview_start": self.mock_interview_api_key,
            "mock_interview_turn": self.mock_interview_api_key,
        }
        return per_feature.get(feature) or self.completion_api_key


@lru_cache
def get_settings() -> Settings:
    """Return cached singleton settings instance."""
    return Settings()


def setup_logging() -> None:
    """Configure root logger based on settings."""
    settings = get_settings()
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
