"""HTTP helpers shared by the JSON API views."""

import json

from django.http import HttpRequest


def get_client_ip(request: HttpRequest) -> str:
    """Extract client IP, respecting X-Forwarded-For behind a proxy."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR") or "unknown"


def get_user_agent(request: HttpRequest) -> str:
    return request.META.get("HTTP_USER_AGENT") or "unknown"


def parse_json_body(request: HttpRequest):
    """Decode the request body as JSON. Raises ValueError on malformed input."""
    try:
        return json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise ValueError(f"Invalid JSON body: {exc}") from exc
