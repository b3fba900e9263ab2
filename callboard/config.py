"""Callboard — Configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings

MIN_PRODUCTION_BCRYPT_ROUNDS = 12


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./callboard.db"

    # Sessions
    SESSION_SECRET: str = "change-me"
    SESSION_TTL_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12
    OAUTH_STATE_TTL_MINUTES: int = 10
    JWT_ALGORITHM: str = "HS256"

    # Vapi
    VAPI_BASE_URL: str = "https://api.vapi.ai"
    VAPI_PRIVATE_KEY: str = ""
    VAPI_TIMEOUT_SECONDS: float = 30.0

    # Webhook shared secret for POST /api/logCall
    WEBHOOK_API_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("WEBHOOK_API_KEY", "API_KEY", "VAPI_API_KEY"),
    )

    # Google sign-in
    GOOGLE_CLIENT_ID: str = ""
    GOOGLE_CLIENT_SECRET: str = ""
    GOOGLE_CALLBACK_URL: str = "http://localhost:5001/api/auth/google/callback"
    FRONTEND_URL: str = "http://localhost:5173"

    # CORS (comma-separated)
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def check_bcrypt_rounds(self) -> "Settings":
        if self.ENVIRONMENT == "production" and self.BCRYPT_ROUNDS < MIN_PRODUCTION_BCRYPT_ROUNDS:
            raise ValueError(
                f"BCRYPT_ROUNDS must be at least {MIN_PRODUCTION_BCRYPT_ROUNDS} in production"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def google_enabled(self) -> bool:
        return bool(self.GOOGLE_CLIENT_ID and self.GOOGLE_CLIENT_SECRET)


@lru_cache
def get_settings() -> Settings:
    return Settings()
