from __future__ import annotations

import json
import logging
import time

import requests

from api_smoke.checks.results import EndpointCheckResult
from api_smoke.config import ApiTarget

logger = logging.getLogger(__name__)


def check_endpoint(target: ApiTarget, path: str) -> EndpointCheckResult:
    url = target.url_for(path)
    start = time.perf_counter()
    try:
        resp = requests.get(
            url,
            headers={"Content-Type": "application/json"},
            timeout=target.timeout_s,
        )
    except requests.RequestException as exc:
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("GET %s failed: %s", url, exc)
        return EndpointCheckResult(
            path=path,
            status_code=None,
            latency_ms=latency_ms,
            error=f"{exc.__class__.__name__}: {exc}",
        )

    latency_ms = int((time.perf_counter() - start) * 1000)
    text = resp.text
    try:
        body = json.loads(text)
    except ValueError:
        return EndpointCheckResult(
            path=path,
            status_code=resp.status_code,
            body=text,
            latency_ms=latency_ms,
        )

    return EndpointCheckResult(
        path=path,
        status_code=resp.status_code,
        body=body,
        parsed=True,
        latency_ms=latency_ms,
    )
