# ai/llm_engine.py

import json
import time

from loguru import logger
from openai import OpenAI

from ai.retry import RetryPolicy, call_with_retry


def create_client(settings):
    """One client per dashboard; it is handed to each flow explicitly."""
    return OpenAI(api_key=settings.openai_api_key, timeout=settings.openai_timeout)


def json_schema_format(name, schema):
    return {
        "format": {
            "type": "json_schema",
            "name": name,
            "schema": schema,
            "strict": True,
        }
    }


def request_json(client, model, input, schema_name, schema, tools=None,
                 policy=RetryPolicy(), sleep=time.sleep):
    """
    Send one Responses API request constrained to ``schema`` and decode the
    JSON answer. Returns ``(data, response)`` so callers can read metadata.
    """
    kwargs = {
        "model": model,
        "input": input,
        "text": json_schema_format(schema_name, schema),
    }
    if tools:
        kwargs["tools"] = tools

    def send():
        return client.responses.create(**kwargs)

    logger.info(f"Requesting {schema_name} from {model}")
    response = call_with_retry(send, policy, sleep=sleep)

    return json.loads(response.output_text), response


def extract_citations(response, limit=5):
    """
    Web citations attached to the answer, in order, as ``(title, url)`` pairs.
    Annotations without a URL are skipped and repeated URLs collapse.
    """
    citations = []
    seen = set()

    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            for annotation in getattr(part, "annotations", None) or []:
                if getattr(annotation, "type", None) != "url_citation":
                    continue
                url = getattr(annotation, "url", None)
                if not url or url in seen:
                    continue
                seen.add(url)
                citations.append((getattr(annotation, "title", None) or url, url))
                if len(citations) >= limit:
                    return citations

    return citations
