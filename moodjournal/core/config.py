import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv()  # Load from .env file

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_GATEWAY_MODEL = "google/gemini-2.5-flash"


class Settings(BaseModel):
    """Process-wide configuration, resolved once at start-up."""

    model_config = ConfigDict(frozen=True)

    database_url: str = "sqlite:///./moodjournal.db"

    # Token & Auth
    secret_key: Optional[str] = None
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # AI gateway (OpenAI-compatible chat completions)
    ai_gateway_api_key: Optional[str] = None
    ai_gateway_base_url: str = DEFAULT_GATEWAY_URL
    ai_gateway_model: str = DEFAULT_GATEWAY_MODEL
    ai_gateway_timeout_seconds: float = 30.0

    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from the environment (and `.env`, if present)."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./moodjournal.db"),
        secret_key=os.getenv("SECRET_KEY"),
        algorithm=os.getenv("ALGORITHM", "HS256"),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")),
        ai_gateway_api_key=os.getenv("AI_GATEWAY_API_KEY") or None,
        ai_gateway_base_url=os.getenv("AI_GATEWAY_BASE_URL", DEFAULT_GATEWAY_URL),
        ai_gateway_model=os.getenv("AI_GATEWAY_MODEL", DEFAULT_GATEWAY_MODEL),
        ai_gateway_timeout_seconds=float(os.getenv("AI_GATEWAY_TIMEOUT_SECONDS", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    return load_settings()
