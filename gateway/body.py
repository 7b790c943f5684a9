"""Lenient request body parsing."""

import json
from typing import Any
from fastapi import Request


async def read_json_body(request: Request) -> dict[str, Any]:
    """Parse the body as a JSON object; anything else counts as an empty object."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        return {}
    return payload if isinstance(payload, dict) else {}
