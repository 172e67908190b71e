# settings.py

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from ai.retry import RetryPolicy

COINGECKO_MARKETS_URL = "https://api.coingecko.com/api/v3/coins/markets"


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "y")


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4.1-mini"
    openai_timeout: float = 60.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    market_refresh_seconds: float = 300.0
    sentiment_refresh_seconds: float = 3600.0
    view_refresh_seconds: float = 15.0
    market_data_url: str = COINGECKO_MARKETS_URL
    http_timeout: float = 30.0
    dash_host: str = "127.0.0.1"
    dash_port: int = 8050
    dash_debug: bool = False
    log_level: str = "INFO"


def load_settings():
    """Build Settings from the process environment (and a .env file if present)."""
    load_dotenv()

    retry = RetryPolicy(
        retries=int(os.getenv("LLM_RETRY_ATTEMPTS", "3")),
        initial_delay=float(os.getenv("LLM_RETRY_INITIAL_DELAY", "2.0")),
        backoff_factor=float(os.getenv("LLM_RETRY_BACKOFF_FACTOR", "2.0")),
    )

    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4.1-mini"),
        openai_timeout=float(os.getenv("OPENAI_TIMEOUT", "60")),
        retry=retry,
        market_refresh_seconds=float(os.getenv("MARKET_REFRESH_SECONDS", "300")),
        sentiment_refresh_seconds=float(os.getenv("SENTIMENT_REFRESH_SECONDS", "3600")),
        view_refresh_seconds=float(os.getenv("VIEW_REFRESH_SECONDS", "15")),
        market_data_url=os.getenv("MARKET_DATA_URL", COINGECKO_MARKETS_URL),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "30")),
        dash_host=os.getenv("DASH_HOST", "127.0.0.1"),
        dash_port=int(os.getenv("DASH_PORT", "8050")),
        dash_debug=_env_bool("DASH_DEBUG"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
