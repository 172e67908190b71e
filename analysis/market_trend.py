# analysis/market_trend.py

from dataclasses import dataclass, field
from typing import List

from data_sources.coingecko import fetch_top_coins
from models import MarketCoin

STABLECOINS = ["usdt", "usdc", "dai", "fdusd", "tusd", "pyusd", "usdp", "busd", "usde"]


@dataclass(frozen=True)
class MarketSnapshot:
    coins: List[MarketCoin] = field(default_factory=list)
    up_count: int = 0
    down_count: int = 0
    trend: str = "Bullish"


def filter_stablecoins(coins):
    return [coin for coin in coins if coin.symbol.lower() not in STABLECOINS]


def is_up(coin):
    change = coin.price_change_percentage_24h
    return change is not None and change > 0


def summarize_market(coins):
    up_count = sum(1 for coin in coins if is_up(coin))
    down_count = len(coins) - up_count

    # ties count as bullish
    trend = "Bullish" if up_count >= down_count else "Bearish"

    return MarketSnapshot(coins=list(coins), up_count=up_count,
                          down_count=down_count, trend=trend)


def load_market_snapshot(session=None, url=None, timeout=30):
    kwargs = {"session": session, "timeout": timeout}
    if url:
        kwargs["url"] = url
    coins = fetch_top_coins(**kwargs)
    return summarize_market(filter_stablecoins(coins))


def format_price(price):
    if price is None:
        return "-"
    if price < 1:
        return f"${price:.4f}"
    return f"${price:,.2f}"


def format_change(pct):
    if pct is None:
        return "-"
    return f"{pct:+.2f}%"
