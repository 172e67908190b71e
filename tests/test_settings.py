"""
Tests for settings.py - environment driven configuration.
"""
import pytest

import settings as settings_module
from settings import COINGECKO_MARKETS_URL, load_settings

ENV_VARS = [
    "OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_TIMEOUT",
    "LLM_RETRY_ATTEMPTS", "LLM_RETRY_INITIAL_DELAY", "LLM_RETRY_BACKOFF_FACTOR",
    "MARKET_REFRESH_SECONDS", "SENTIMENT_REFRESH_SECONDS", "VIEW_REFRESH_SECONDS",
    "MARKET_DATA_URL", "HTTP_TIMEOUT", "DASH_HOST", "DASH_PORT", "DASH_DEBUG", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the picture
    monkeypatch.setattr(settings_module, "load_dotenv", lambda *args, **kwargs: False)
    return monkeypatch


class TestLoadSettings:

    def test_defaults(self, clean_env):
        settings = load_settings()
        assert settings.openai_api_key is None
        assert settings.openai_model == "gpt-4.1-mini"
        assert settings.retry.retries == 3
        assert settings.retry.initial_delay == 2.0
        assert settings.retry.backoff_factor == 2.0
        assert settings.market_refresh_seconds == 300
        assert settings.sentiment_refresh_seconds == 3600
        assert settings.market_data_url == COINGECKO_MARKETS_URL
        assert settings.dash_debug is False
        assert settings.log_level == "INFO"

    def test_overrides(self, clean_env):
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        clean_env.setenv("LLM_RETRY_ATTEMPTS", "5")
        clean_env.setenv("LLM_RETRY_INITIAL_DELAY", "0.5")
        clean_env.setenv("LLM_RETRY_BACKOFF_FACTOR", "3")
        clean_env.setenv("MARKET_REFRESH_SECONDS", "60")
        clean_env.setenv("DASH_PORT", "9000")
        clean_env.setenv("DASH_DEBUG", "yes")
        clean_env.setenv("LOG_LEVEL", "debug")

        settings = load_settings()
        assert settings.openai_api_key == "sk-test"
        assert settings.retry.retries == 5
        assert settings.retry.delay_for(1) == 1.5
        assert settings.market_refresh_seconds == 60
        assert settings.dash_port == 9000
        assert settings.dash_debug is True
        assert settings.log_level == "DEBUG"
