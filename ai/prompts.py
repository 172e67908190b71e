# ai/prompts.py

CHART_ANALYSIS_PROMPT = """
You are an expert crypto analyst. Analyze these two chart screenshots for {token}.
Image 1: 15m timeframe. Image 2: 1h timeframe.

Focus: MACD (12, 26, 9) "Second Half Red Zone" (Receding red bars).
Rule: Recommend LONG if 1H trend confirms or 15m shows bullish momentum receding from red.

Return valid JSON only.
"""

MARKET_SENTIMENT_PROMPT = (
    "Analyze current crypto market sentiment (Thuan Capital, CMC, CoinGecko). "
    "Determine if Bullish, Bearish, or Neutral."
)

ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "trend": {"type": "string"},
        "direction": {"type": "string", "enum": ["Long", "Short", "Wait"]},
        "entryPrice": {"type": "string"},
        "targetPrice": {"type": "string"},
        "pnlProjection": {"type": "string"},
        "rationale": {"type": "string"},
        "confidence": {"type": "string", "enum": ["High", "Medium", "Low"]},
    },
    "required": [
        "trend", "direction", "entryPrice", "targetPrice",
        "pnlProjection", "rationale", "confidence",
    ],
    "additionalProperties": False,
}

SENTIMENT_SCHEMA = {
    "type": "object",
    "properties": {
        "sentiment": {"type": "string", "enum": ["Bullish", "Bearish", "Neutral"]},
        "summary": {"type": "string"},
    },
    "required": ["sentiment", "summary"],
    "additionalProperties": False,
}
