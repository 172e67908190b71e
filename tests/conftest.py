import base64
import json
from types import SimpleNamespace

import pytest

from ai.chart_signal import ChartImage

PNG_BYTES = b"\x89PNG\r\n\x1a\n fake chart"


class RateLimitError(Exception):
    status_code = 429


class FakeResponses:
    """Stands in for ``client.responses``; replays queued outcomes in order."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeClient:

    def __init__(self, *outcomes):
        self.responses = FakeResponses(outcomes)

    @property
    def calls(self):
        return self.responses.calls


def make_response(payload, annotations=()):
    text = payload if isinstance(payload, str) else json.dumps(payload)
    message = SimpleNamespace(
        type="message",
        content=[SimpleNamespace(type="output_text", text=text, annotations=list(annotations))],
    )
    return SimpleNamespace(output_text=text, output=[message])


def citation(title, url):
    return SimpleNamespace(type="url_citation", title=title, url=url)


class SleepRecorder:

    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def chart_15m():
    return ChartImage(data=PNG_BYTES, mime_type="image/png", name="sui_15m.png")


@pytest.fixture
def chart_1h():
    return ChartImage(data=PNG_BYTES, mime_type="image/png", name="sui_1h.png")


@pytest.fixture
def analysis_payload():
    return {
        "trend": "Higher lows on 1h",
        "direction": "Long",
        "entryPrice": "3.42",
        "targetPrice": "3.80",
        "pnlProjection": "+11%",
        "rationale": "Red MACD bars receding on 15m.",
        "confidence": "High",
    }


@pytest.fixture
def upload_contents():
    return "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")
