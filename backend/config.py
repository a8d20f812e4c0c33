from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Get the directory where this config file is located.
_BACKEND_DIR = Path(__file__).parent.resolve()
_PROJECT_ROOT = _BACKEND_DIR.parent


class Settings(BaseSettings):
    # Talent Protocol API
    TALENT_API_URL: str = "https://api.talentprotocol.com"
    TALENT_API_KEY: Optional[str] = None
    TALENT_API_TIMEOUT_SECONDS: float = 30.0

    # Scoring dimension. The scorer name is what the search API filters and
    # sorts on; the slug is what appears inside each profile's score list.
    CREATOR_SCORER_NAME: str = "Creator Score"
    CREATOR_SCORE_SLUG: str = "creator_score"

    # Leaderboard policy
    LEADERBOARD_MIN_SCORE: int = 1  # Listing admits anyone with a score
    ELIGIBILITY_MIN_SCORE: int = 80  # Level 3+
    REWARD_QUALIFICATION_SCORE: int = 100  # Reported to callers as minScore
    ELIGIBLE_FALLBACK_RATIO: float = 0.3  # Estimate used when the eligible count is unavailable

    # Pagination defaults for the inbound request surface
    LEADERBOARD_DEFAULT_PAGE: int = 1
    LEADERBOARD_DEFAULT_PER_PAGE: int = 25

    # Logging / API
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: list[str] = ["*"]

    @field_validator("TALENT_API_URL", mode="before")
    @classmethod
    def _normalize_url_field(cls, value: object) -> object:
        """Trim accidental quotes/whitespace from URL env vars."""
        if value is None:
            return value
        text = str(value).strip().strip('"').strip("'")
        if not text:
            return text
        return text.rstrip("/")

    @field_validator("TALENT_API_KEY", mode="before")
    @classmethod
    def _normalize_api_key(cls, value: object) -> object:
        """Treat blank keys as unset so the credential check catches them."""
        if value is None:
            return value
        text = str(value).strip().strip('"').strip("'")
        return text or None

    class Config:
        # Load project-root .env first (common workflow), then backend/.env
        # as an override if present.
        env_file = (
            str(_PROJECT_ROOT / ".env"),
            str(_BACKEND_DIR / ".env"),
        )
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
