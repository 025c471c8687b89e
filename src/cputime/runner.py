"""Child process execution for cputime."""

import logging
import subprocess
import time
from collections.abc import Sequence
from datetime import timedelta

from cputime.collectors import UsageCollector, default_collector
from cputime.models import RunResult

logger = logging.getLogger(__name__)


class RunError(Exception):
    """The child process could not be started or waited upon."""


class ProcessRunner:
    """
    Runs a single command to completion and measures it.

    The child inherits stdin, stdout and stderr, so its output is never
    captured. The runner blocks until the child exits; there is no
    timeout.
    """

    def __init__(self, collector: UsageCollector | None = None) -> None:
        """
        Initialize the ProcessRunner.

        Args:
            collector: Source of resource usage. Defaults to the most
                precise one available on this platform.
        """
        self._collector = collector if collector is not None else default_collector()

    @property
    def collector(self) -> UsageCollector:
        """Get the usage collector in use."""
        return self._collector

    def run(self, command: Sequence[str]) -> RunResult:
        """
        Run ``command`` and return its timing and resource usage.

        A non-zero exit code is a normal completion, not an error.

        Raises:
            RunError: If the command can't be spawned or waited upon.
        """
        command = tuple(command)
        if not command:
            raise RunError("empty command")

        logger.debug("Spawning %s", command)
        start = time.monotonic()
        try:
            proc = subprocess.Popen(command)
        except OSError as e:
            raise RunError(str(e)) from e

        try:
            returncode, usage = self._collector.wait(proc)
        except OSError as e:
            raise RunError(str(e)) from e
        wall = timedelta(seconds=time.monotonic() - start)

        logger.debug("Process %d exited with %d after %s", proc.pid, returncode, wall)
        return RunResult(
            command=command,
            wall_time=wall,
            usage=usage,
            returncode=returncode,
        )
