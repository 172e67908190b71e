# models.py

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TradeDirection(str, Enum):
    LONG = "Long"
    SHORT = "Short"
    WAIT = "Wait"


class Confidence(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class AnalysisResult(BaseModel):
    # model answers in camelCase
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    trend: str
    direction: TradeDirection
    entry_price: str = Field(alias="entryPrice")
    target_price: str = Field(alias="targetPrice")
    pnl_projection: str = Field(alias="pnlProjection")
    rationale: str
    confidence: Confidence


SentimentLabel = Literal["Bullish", "Bearish", "Neutral"]


class SentimentSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    uri: str


class SentimentAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    sentiment: SentimentLabel
    summary: str
    sources: List[SentimentSource] = Field(default_factory=list, max_length=5)


class MarketCoin(BaseModel):
    # CoinGecko returns many more fields; only these are kept
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    symbol: str
    name: str
    current_price: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    market_cap: Optional[float] = None
    image: Optional[str] = None
