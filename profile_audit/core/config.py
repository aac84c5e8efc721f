from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    APP_NAME: str = "Profile Audit Service"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # External AI scorer; unset disables it and reports fall back to the rule score
    AI_SCORER_URL: str | None = None
    AI_SCORER_API_KEY: str | None = None
    AI_SCORER_TIMEOUT_SECONDS: float = 30.0

    # Per-client fixed window on the pipeline routes
    RATE_LIMIT_MAX_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_SECONDS: float = 60.0

    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024


settings = Settings()
