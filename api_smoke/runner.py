from __future__ import annotations

import logging

from api_smoke.checks.endpoint import check_endpoint
from api_smoke.checks.results import EndpointCheckResult
from api_smoke.config import ApiTarget
from api_smoke.formatting import format_result
from api_smoke.models import SmokeSuite
from api_smoke.orchestrator import ensure_running

logger = logging.getLogger(__name__)


def run_suite(
    target: ApiTarget, suite: SmokeSuite, ensure: bool = False
) -> list[EndpointCheckResult]:
    """Run every check of the suite in order and log what came back.

    Informational only: endpoint failures are logged, never raised.
    """
    if ensure and not ensure_running(target):
        logger.warning("API server did not come up; running checks anyway")

    logger.info("Testing %s (%s)...", suite.name, target.base_url)
    results: list[EndpointCheckResult] = []
    for i, check in enumerate(suite.checks, start=1):
        res = check_endpoint(target, check.path)
        results.append(res)
        lines = format_result(check, res)
        log = logger.error if res.error is not None else logger.info
        log("%d. %s", i, lines[0])
        for line in lines[1:]:
            log("   %s", line)

    ok = sum(1 for r in results if r.status_code is not None and 200 <= r.status_code < 300)
    logger.info("%s: %d/%d checks returned 2xx", suite.name, ok, len(results))
    return results
