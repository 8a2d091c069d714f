from __future__ import annotations

import json
from typing import Any, List

from api_smoke.checks.results import EndpointCheckResult
from api_smoke.models import SmokeCheck

PREVIEW_CHARS = 200


def preview(body: Any, limit: int = PREVIEW_CHARS) -> str:
    text = body if isinstance(body, str) else json.dumps(body, default=str)
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def _data_items(body: Any) -> list | None:
    if not isinstance(body, dict):
        return None
    data = body.get("data")
    return data if isinstance(data, list) else None


def format_result(check: SmokeCheck, result: EndpointCheckResult) -> List[str]:
    label = check.label or check.id
    lines = [f"{label}: GET {result.path}"]
    if result.error is not None:
        lines.append(f"Error: {result.error}")
        return lines

    lines.append(f"Status: {result.status_code}")
    items = _data_items(result.body) if result.parsed else None
    envelope = (
        result.parsed
        and isinstance(result.body, dict)
        and ("success" in result.body or items is not None)
    )
    if check.expect == "raw" or not envelope:
        lines.append(f"Response: {preview(result.body)}")
        return lines

    items = items or []
    lines.append(f"Success: {result.body.get('success')}")
    lines.append(f"{label} found: {len(items)}")
    for i, item in enumerate(items[: check.show_items], start=1):
        title = item.get("title") if isinstance(item, dict) else item
        lines.append(f"  {i}. {title}")
    if result.body.get("error"):
        lines.append(f"Error: {result.body['error']}")
    return lines
