"""Platform-specific extraction of child resource usage."""

import logging
import os
import subprocess
import sys
from datetime import timedelta
from typing import Protocol, runtime_checkable

import psutil

from cputime.models import ResourceUsage

logger = logging.getLogger(__name__)

# ru_maxrss is reported in bytes on macOS and in kibibytes elsewhere.
_MAXRSS_SCALE = 1 if sys.platform == "darwin" else 1024


@runtime_checkable
class UsageCollector(Protocol):
    """Waits for a child process and reports what it consumed.

    Implementations must reap the child, so that ``proc.returncode``
    is meaningful afterwards, and return the exit code together with
    a normalized ``ResourceUsage``.
    """

    def wait(self, proc: subprocess.Popen) -> tuple[int, ResourceUsage]:
        """Block until ``proc`` exits and collect its usage."""
        ...


class RusageCollector:
    """Collects exact counters from the kernel via ``os.wait4``."""

    def wait(self, proc: subprocess.Popen) -> tuple[int, ResourceUsage]:
        _, status, rusage = os.wait4(proc.pid, 0)
        returncode = os.waitstatus_to_exitcode(status)
        # Tell Popen the child is already reaped.
        proc.returncode = returncode

        usage = ResourceUsage(
            user_cpu=timedelta(seconds=rusage.ru_utime),
            sys_cpu=timedelta(seconds=rusage.ru_stime),
            max_rss=rusage.ru_maxrss * _MAXRSS_SCALE,
        )
        return returncode, usage


class SampledCollector:
    """
    Collects usage by polling the running child with psutil.

    Used where ``os.wait4`` is unavailable. CPU times are those of the
    last sample taken before the child exited, so a short tail of work
    may be missed. Peak memory is only known where psutil exposes a
    peak working set (Windows); elsewhere ``max_rss`` is None.
    """

    def __init__(self, poll_rate: float = 0.1) -> None:
        """
        Initialize the SampledCollector.

        Args:
            poll_rate: How often to sample the child (in seconds). Default 0.1s.
        """
        self._poll_rate = max(0.01, poll_rate)

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    def wait(self, proc: subprocess.Popen) -> tuple[int, ResourceUsage]:
        user = 0.0
        system = 0.0
        peak: int | None = None

        try:
            ps_proc = psutil.Process(proc.pid)
        except psutil.NoSuchProcess:
            ps_proc = None

        while True:
            if ps_proc is not None:
                try:
                    with ps_proc.oneshot():
                        times = ps_proc.cpu_times()
                        mem_info = ps_proc.memory_info()
                    user, system = times.user, times.system
                    peak_wset = getattr(mem_info, "peak_wset", None)
                    if peak_wset is not None:
                        peak = max(peak or 0, peak_wset)
                except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                    # Child is exiting or hidden from us; keep the last sample
                    pass

            try:
                returncode = proc.wait(timeout=self._poll_rate)
                break
            except subprocess.TimeoutExpired:
                continue

        usage = ResourceUsage(
            user_cpu=timedelta(seconds=user),
            sys_cpu=timedelta(seconds=system),
            max_rss=peak,
        )
        return returncode, usage


def default_collector() -> UsageCollector:
    """Pick the most precise collector this platform supports."""
    if hasattr(os, "wait4"):
        return RusageCollector()
    logger.debug("os.wait4 unavailable, sampling child usage with psutil")
    return SampledCollector()
