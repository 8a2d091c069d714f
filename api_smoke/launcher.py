from __future__ import annotations

import logging
import os
import signal
import subprocess

from api_smoke.config import ApiTarget

logger = logging.getLogger(__name__)


class LaunchError(RuntimeError):
    pass


class ServerProcess:
    """Handle to a backend started in its own session.

    The parent never waits on the child, so exiting the parent leaves the
    backend running. ``stop`` is there for callers that want to tear it down.
    """

    def __init__(self, popen: subprocess.Popen) -> None:
        self._popen = popen

    @property
    def pid(self) -> int:
        return self._popen.pid

    def is_running(self) -> bool:
        return self._popen.poll() is None

    def _signal_group(self, sig: int) -> None:
        # the session leader's pid is also the process group id
        try:
            os.killpg(self._popen.pid, sig)
        except ProcessLookupError:
            pass

    def stop(self, timeout_s: float = 5) -> None:
        """Terminate the whole process group, not just the start command.

        ``npm run api`` forks the real server, so signalling only the direct
        child would leave the server running.
        """
        self._signal_group(signal.SIGTERM)
        if not self.is_running():
            return
        try:
            self._popen.wait(timeout=timeout_s)
        except subprocess.TimeoutExpired:
            logger.warning("Server pid %s ignored SIGTERM, killing it", self.pid)
            self._signal_group(signal.SIGKILL)
            self._popen.wait(timeout=timeout_s)


def launch(target: ApiTarget) -> ServerProcess:
    if not target.start_command:
        raise LaunchError("No API start command configured")
    logger.info("Starting API server: %s (cwd=%s)", " ".join(target.start_command), target.backend_dir)
    try:
        popen = subprocess.Popen(
            target.start_command,
            cwd=target.backend_dir,
            start_new_session=True,
        )
    except OSError as exc:
        raise LaunchError(
            f"Could not start {target.start_command[0]!r} in {target.backend_dir}: {exc}"
        ) from exc
    return ServerProcess(popen)
