from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    gemini_api_key: str = ""
    anthropic_api_key: str = ""  # only needed when a claude-* model is in the chain

    # Simplification
    model_chain: list[str] = [
        "gemini-3-flash-preview",
        "gemini-2.5-flash",
        "gemini-2.0-flash",
    ]
    entailment_model: str = "facebook/bart-large-mnli"

    # Text-to-speech service
    tts_url: str = "http://localhost:3000/api/tts"
    tts_timeout_seconds: float = 30.0
    default_voice: str = "en-US-Journey-F"
    default_speed: float = 1.0

    # App config
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
