"""
Application configuration
"""
from typing import List

from pydantic_settings import BaseSettings
from pydantic import model_validator
from functools import lru_cache
from dotenv import dotenv_values


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./prompt_index.db"

    # Language-model providers (each optional; an empty key skips that tier)
    ANTHROPIC_API_KEY: str = ""  # Get from: https://console.anthropic.com/
    CLAUDE_MODEL_PRIMARY: str = "claude-sonnet-4-20250514"
    CLAUDE_MAX_TOKENS: int = 2048
    CLAUDE_COST_PER_1K_INPUT_TOKENS: float = 0.003  # $3 per 1M input tokens (Sonnet 4)
    CLAUDE_COST_PER_1K_OUTPUT_TOKENS: float = 0.015  # $15 per 1M output tokens (Sonnet 4)
    CLAUDE_DAILY_BUDGET: float = 10.0  # Daily budget in USD

    GROQ_API_KEY: str = ""  # Get from: https://console.groq.com/
    GROQ_MODELS: List[str] = [
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
        "gemma2-9b-it",
    ]

    # Stock data providers (each optional)
    POLYGON_API_KEY: str = ""  # Get from: https://polygon.io/ (free tier: 5 calls/min)
    FINNHUB_API_KEY: str = ""  # Get from: https://finnhub.io/ (free tier: 60 calls/min)
    ALPHA_VANTAGE_API_KEY: str = ""  # Get from: https://www.alphavantage.co/support/#api-key

    # API Rate Limits (requests per minute)
    POLYGON_REQUESTS_PER_MINUTE: int = 5
    FINNHUB_REQUESTS_PER_MINUTE: int = 60
    ALPHA_VANTAGE_REQUESTS_PER_MINUTE: int = 5

    # Outbound timeouts (seconds)
    PROVIDER_TIMEOUT_SECONDS: float = 10.0
    AI_PROVIDER_TIMEOUT_SECONDS: float = 30.0

    # Index generation
    HISTORICAL_POINTS_PER_INDEX: int = 30

    # Application
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Prompt Index"
    LOG_LEVEL: str = "INFO"

    # CORS
    BACKEND_CORS_ORIGINS: list = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
    ]

    @model_validator(mode='after')
    def _fill_empty_from_dotenv(self):
        """
        If an env var exists but is empty (e.g. GROQ_API_KEY=''), fall
        back to the value from .env.  pydantic-settings treats a set-but-empty
        env var as authoritative, but for API keys an empty string is never
        intentional.
        """
        env_file_values = dotenv_values(".env")
        api_key_fields = [
            "ANTHROPIC_API_KEY", "GROQ_API_KEY", "POLYGON_API_KEY",
            "FINNHUB_API_KEY", "ALPHA_VANTAGE_API_KEY",
        ]
        for field in api_key_fields:
            current = getattr(self, field, "")
            dotenv_val = env_file_values.get(field, "")
            if not current and dotenv_val:
                object.__setattr__(self, field, dotenv_val)
        return self

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
