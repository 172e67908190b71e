import sys
from functools import partial

import requests
from loguru import logger

from ai.llm_engine import create_client
from ai.sentiment import fetch_market_sentiment
from analysis.market_trend import load_market_snapshot
from scheduling.recurring_task import RecurringTask
from settings import load_settings
from ui.dashboard import create_dashboard


def configure_logging(level):
    logger.remove()
    logger.add(sys.stderr, level=level)


def build_pollers(client, settings, session=None):
    market_task = RecurringTask(
        "market",
        settings.market_refresh_seconds,
        partial(load_market_snapshot, session=session,
                url=settings.market_data_url, timeout=settings.http_timeout),
    )
    sentiment_task = RecurringTask(
        "sentiment",
        settings.sentiment_refresh_seconds,
        partial(fetch_market_sentiment, client,
                model=settings.openai_model, policy=settings.retry),
    )
    return market_task, sentiment_task


def main():
    settings = load_settings()
    configure_logging(settings.log_level)

    if not settings.openai_api_key:
        logger.error("OPENAI_API_KEY is not set")
        sys.exit(1)

    client = create_client(settings)
    market_task, sentiment_task = build_pollers(client, settings, session=requests.Session())

    app = create_dashboard(client, settings, market_task, sentiment_task)

    # pollers live exactly as long as the server
    with market_task, sentiment_task:
        app.run(host=settings.dash_host, port=settings.dash_port, debug=settings.dash_debug,
                use_reloader=False)


if __name__ == "__main__":
    main()
