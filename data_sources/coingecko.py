# data_sources/coingecko.py

import requests
from loguru import logger

from errors import MarketDataError
from models import MarketCoin
from settings import COINGECKO_MARKETS_URL

MARKETS_QUERY = {
    "vs_currency": "usd",
    "order": "market_cap_desc",
    "per_page": 10,
    "page": 1,
    "sparkline": "false",
}


def get_top_coins(session=None, url=COINGECKO_MARKETS_URL, timeout=30):
    """Top 10 coins by market cap. Raises on any failure."""
    http = session or requests
    response = http.get(url, params=MARKETS_QUERY, timeout=timeout)

    if not response.ok:
        raise MarketDataError(
            f"Market data fetch failed: {response.status_code} {response.reason}"
        )

    payload = response.json()
    if not isinstance(payload, list):
        raise MarketDataError(f"Unexpected market payload: {type(payload).__name__}")

    return [MarketCoin.model_validate(item) for item in payload]


def fetch_top_coins(session=None, url=COINGECKO_MARKETS_URL, timeout=30):
    """Like get_top_coins, but an empty list stands in for any error."""
    try:
        coins = get_top_coins(session=session, url=url, timeout=timeout)
    except Exception as e:
        logger.error(f"Failed to fetch market data: {e}")
        return []

    logger.info(f"Fetched {len(coins)} coins from market endpoint")
    return coins
