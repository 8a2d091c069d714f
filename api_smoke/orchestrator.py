from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Callable

from api_smoke.checks.health import probe as default_probe
from api_smoke.config import ApiTarget
from api_smoke.launcher import LaunchError, ServerProcess
from api_smoke.launcher import launch as default_launch

logger = logging.getLogger(__name__)

Prober = Callable[[ApiTarget], bool]
Launcher = Callable[[ApiTarget], ServerProcess]
Sleeper = Callable[[float], None]


class Phase(str, enum.Enum):
    CHECKING = "CHECKING"
    STARTING = "STARTING"
    SETTLING = "SETTLING"
    RECHECKING = "RECHECKING"
    READY = "READY"
    FAILED = "FAILED"


@dataclass
class EnsureOutcome:
    ok: bool
    phase: Phase
    probes: int
    process: ServerProcess | None = None
    launch_error: str | None = None

    def __bool__(self) -> bool:
        return self.ok


class AvailabilityOrchestrator:
    """Probe the backend, start it once if it is down, then probe again.

    Single pass: one launch at most, no backoff, no cancellation. With the
    ``settle`` strategy the wait between launch and re-probe is a blind
    sleep; with ``poll`` the health route is probed during the wait until it
    answers or ``poll_timeout_s`` runs out.
    """

    def __init__(
        self,
        target: ApiTarget,
        *,
        probe: Prober = default_probe,
        launch: Launcher = default_launch,
        sleep: Sleeper = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.target = target
        self._probe = probe
        self._launch = launch
        self._sleep = sleep
        self._clock = clock
        self.phase = Phase.CHECKING
        self.probes = 0

    def _transition(self, phase: Phase) -> None:
        logger.debug("ensure_running: %s -> %s", self.phase.value, phase.value)
        self.phase = phase

    def _check(self) -> bool:
        self.probes += 1
        return self._probe(self.target)

    def _settle(self) -> None:
        if self.target.wait_strategy == "poll":
            self._poll_until_ready()
            return
        logger.info(
            "Waiting %ss for API server to settle...", self.target.settle_delay_s
        )
        self._sleep(self.target.settle_delay_s)

    def _poll_until_ready(self) -> None:
        deadline = self._clock() + self.target.poll_timeout_s
        logger.info(
            "Polling %s every %ss for up to %ss...",
            self.target.health_url,
            self.target.poll_interval_s,
            self.target.poll_timeout_s,
        )
        while self._clock() < deadline:
            self._sleep(self.target.poll_interval_s)
            if self._check():
                return

    def run(self) -> EnsureOutcome:
        self.phase = Phase.CHECKING
        self.probes = 0
        logger.info("Checking if API server is running at %s...", self.target.base_url)
        if self._check():
            self._transition(Phase.READY)
            logger.info("API server is already running")
            return EnsureOutcome(ok=True, phase=self.phase, probes=self.probes)

        self._transition(Phase.STARTING)
        logger.info("API server is not running, starting it...")
        process: ServerProcess | None = None
        launch_error: str | None = None
        try:
            process = self._launch(self.target)
        except LaunchError as exc:
            launch_error = str(exc)
            logger.error("Failed to spawn API server: %s", exc)

        self._transition(Phase.SETTLING)
        self._settle()

        self._transition(Phase.RECHECKING)
        if self._check():
            self._transition(Phase.READY)
            logger.info("API server started successfully")
            ok = True
        else:
            self._transition(Phase.FAILED)
            logger.error("Failed to start API server")
            ok = False

        return EnsureOutcome(
            ok=ok,
            phase=self.phase,
            probes=self.probes,
            process=process,
            launch_error=launch_error,
        )


def ensure_running(target: ApiTarget, **kwargs) -> bool:
    return AvailabilityOrchestrator(target, **kwargs).run().ok
