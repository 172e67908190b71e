# ai/sentiment.py

import time

from loguru import logger

from ai.llm_engine import extract_citations, request_json
from ai.prompts import MARKET_SENTIMENT_PROMPT, SENTIMENT_SCHEMA
from ai.retry import RetryPolicy
from models import SentimentAnalysis, SentimentSource

MAX_SOURCES = 5

DEFAULT_SENTIMENT = SentimentAnalysis(
    sentiment="Neutral",
    summary="Error fetching sentiment data.",
    sources=[],
)

WEB_SEARCH_TOOL = {"type": "web_search"}


def fetch_market_sentiment(client, model="gpt-4.1-mini", policy=RetryPolicy(),
                           sleep=time.sleep) -> SentimentAnalysis:
    """
    Grounded market sentiment. Never raises: any failure (after rate-limit
    retries) comes back as a fresh copy of DEFAULT_SENTIMENT.
    """
    try:
        data, response = request_json(
            client, model, MARKET_SENTIMENT_PROMPT,
            schema_name="market_sentiment",
            schema=SENTIMENT_SCHEMA,
            tools=[WEB_SEARCH_TOOL],
            policy=policy,
            sleep=sleep,
        )
        sources = [
            SentimentSource(title=title, uri=uri)
            for title, uri in extract_citations(response, limit=MAX_SOURCES)
        ]
        result = SentimentAnalysis(
            sentiment=data.get("sentiment"),
            summary=data.get("summary"),
            sources=sources,
        )
    except Exception as exc:
        logger.error(f"Failed to fetch market sentiment: {exc}")
        return DEFAULT_SENTIMENT.model_copy(deep=True)

    logger.info(f"Market sentiment: {result.sentiment} ({len(result.sources)} sources)")
    return result
