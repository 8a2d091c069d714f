from __future__ import annotations

import logging

import requests

from api_smoke.config import ApiTarget

logger = logging.getLogger(__name__)


def probe(target: ApiTarget) -> bool:
    """Single GET against the health route. Never raises."""
    try:
        resp = requests.get(target.health_url, timeout=target.timeout_s)
    except requests.RequestException as exc:
        logger.debug("Health probe to %s failed: %s", target.health_url, exc)
        return False

    if not 200 <= resp.status_code < 300:
        logger.debug("Health probe got HTTP %s", resp.status_code)
        return False

    try:
        payload = resp.json()
    except ValueError as exc:
        logger.debug("Health probe got invalid JSON: %s", exc)
        return False

    if not isinstance(payload, dict):
        return False
    return payload.get("status") == "ok"
