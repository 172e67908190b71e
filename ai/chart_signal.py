# ai/chart_signal.py

import base64
import binascii
import mimetypes
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from ai.llm_engine import request_json
from ai.prompts import ANALYSIS_SCHEMA, CHART_ANALYSIS_PROMPT
from ai.retry import RetryPolicy
from errors import ChartAnalysisError, ChartInputError, MissingChartError
from models import AnalysisResult, TradeDirection

DIRECTION_MAP = {
    "Long": TradeDirection.LONG,
    "Short": TradeDirection.SHORT,
    "Wait": TradeDirection.WAIT,
}


@dataclass(frozen=True)
class ChartImage:
    data: bytes
    mime_type: str
    name: Optional[str] = None

    @classmethod
    def from_upload(cls, contents, filename=None):
        """Build from a browser upload, i.e. ``data:image/png;base64,....``"""
        header, _, encoded = contents.partition(",")
        if not header.startswith("data:") or ";base64" not in header:
            raise ChartInputError(f"Unsupported upload for {filename or 'chart'}.")
        mime_type = header[len("data:"):].split(";", 1)[0]
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ChartInputError(f"Could not read {filename or 'chart'}.") from exc
        return cls(data=data, mime_type=mime_type, name=filename)

    @classmethod
    def from_path(cls, path):
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(data=path.read_bytes(), mime_type=mime_type or "application/octet-stream",
                   name=path.name)

    def validate(self):
        label = self.name or "chart"
        if not self.data:
            raise ChartInputError(f"{label} is empty.")
        if not self.mime_type.startswith("image/"):
            raise ChartInputError(f"{label} is not an image ({self.mime_type}).")

    def to_input_part(self):
        encoded = base64.b64encode(self.data).decode("ascii")
        return {"type": "input_image", "image_url": f"data:{self.mime_type};base64,{encoded}"}


def map_direction(value):
    if not isinstance(value, str):
        return TradeDirection.WAIT
    return DIRECTION_MAP.get(value, TradeDirection.WAIT)


def parse_analysis(data):
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    payload = dict(data)
    payload["direction"] = map_direction(data.get("direction"))
    return AnalysisResult.model_validate(payload)


def build_chart_request(chart_15m, chart_1h, token):
    # 15m entry chart first, then the 1h trend chart, then the instructions
    return [{
        "role": "user",
        "content": [
            chart_15m.to_input_part(),
            chart_1h.to_input_part(),
            {"type": "input_text", "text": CHART_ANALYSIS_PROMPT.format(token=token)},
        ],
    }]


def analyze_charts(client, chart_15m, chart_1h, token, model="gpt-4.1-mini",
                   policy=RetryPolicy(), sleep=time.sleep) -> AnalysisResult:
    if chart_15m is None or chart_1h is None:
        raise MissingChartError()

    token = (token or "").strip()
    if not token:
        raise ChartInputError("Please select a token to analyze.")

    chart_15m.validate()
    chart_1h.validate()

    request = build_chart_request(chart_15m, chart_1h, token)

    logger.info(f"Analyzing 15m/1h charts for {token}")
    try:
        data, _ = request_json(
            client, model, request,
            schema_name="chart_analysis",
            schema=ANALYSIS_SCHEMA,
            policy=policy,
            sleep=sleep,
        )
        result = parse_analysis(data)
    except Exception as exc:
        logger.error(f"Chart analysis for {token} failed: {exc}")
        raise ChartAnalysisError() from exc

    logger.info(f"{token}: {result.direction.value} ({result.confidence.value} confidence)")
    return result
