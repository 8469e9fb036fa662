"""Request body decoding for endpoints that accept an optional payload.

JSON and URL-encoded bodies are decoded; empty bodies and other content
types decode to ``None``. JSON is strict: only an object or array is
accepted at the top level, and ``NaN``/``Infinity`` are rejected. Anything
that claims to be JSON or form data but does not decode raises
``MalformedBodyError`` (HTTP 400) before the endpoint body runs.
"""

import json
from typing import Any
from urllib.parse import parse_qsl

from fastapi import Request

from cloud_server.core.exceptions import MalformedBodyError

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_body(media_type: str, raw: bytes) -> Any:
    """Decode a raw request body according to its media type."""
    if not raw:
        return None

    if media_type == JSON_CONTENT_TYPE or media_type.endswith("+json"):
        try:
            data = json.loads(raw, parse_constant=_reject_constant)
        except ValueError as e:
            raise MalformedBodyError(f"Invalid JSON body: {e}") from e
        if not isinstance(data, (dict, list)):
            raise MalformedBodyError("Invalid JSON body: top-level value must be an object or array")
        return data

    if media_type == FORM_CONTENT_TYPE:
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedBodyError(f"Invalid form body: {e}") from e
        # Bare keys ("flag") map to "", empty pairs ("a=1&") are skipped.
        return dict(parse_qsl(text, keep_blank_values=True))

    return None


async def parse_request_body(request: Request) -> Any:
    """FastAPI dependency returning the decoded body, or None when there is none."""
    raw = await request.body()
    return decode_body(_media_type(request), raw)
