# app/core/config.py
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.schemas.recap import RateMode, UnmatchedKeyPolicy


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables (or a local `.env` file)
    at runtime and cover:
    - DB connection
    - Internal API key
    - Logging
    - Default recap aggregation policies
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "Attendance Recap"
    APP_ENV: str = Field("local", description="Environment name: local/dev/stage/prod")

    DB_URL: str = Field(
        "sqlite+aiosqlite:///./attendance_recap.db",
        description="SQLAlchemy-compatible database URL",
    )

    INTERNAL_API_KEY: str | None = Field(
        default=None,
        description="API key required for hitting /internal endpoints",
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level for the service (DEBUG/INFO/WARNING/ERROR).",
    )

    # --- Recap policies ---
    RECAP_RATE_MODE: RateMode = Field(
        default=RateMode.CENSUS,
        description=(
            "Default org-wide rate formula: CENSUS, SUBMISSION or AUTO "
            "(census when a census denominator exists, else submissions)."
        ),
    )
    RECAP_UNMATCHED_KEY_POLICY: UnmatchedKeyPolicy = Field(
        default=UnmatchedKeyPolicy.NAME,
        description=(
            "How unmatched submitters are keyed: NAME (temp_<name>) or "
            "NAME_CATEGORY_GROUP."
        ),
    )
    FOLLOW_UP_LIMIT: int = Field(
        default=8,
        description="Default number of participants listed in the follow-up view.",
    )

    @field_validator("RECAP_RATE_MODE", "RECAP_UNMATCHED_KEY_POLICY", mode="before")
    @classmethod
    def _upper_policy(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Settings are read and validated only once per process.
    """
    return Settings()
