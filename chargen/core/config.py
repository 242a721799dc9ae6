from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from the project root so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    # Chat (OpenRouter or any OpenAI-compatible endpoint)
    openrouter_api_base_url: str = "https://openrouter.ai/api/v1"
    # Used when a request does not send its own X-API-Key header
    openrouter_api_key: str | None = None
    chat_temperature: float = 0.7
    chat_max_tokens: int = 4000
    chat_timeout_seconds: float = 60.0
    chat_max_retries: int = 3

    # Sent to OpenRouter as HTTP-Referer / X-Title for app attribution
    app_url: str = "http://localhost:4000"
    app_title: str = "Eliza Character Generator"

    # Rate limiting (per client IP; multi-instance needs Redis later)
    generate_rate_limit: str = "10/minute"

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 4001

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
