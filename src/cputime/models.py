"""Data models for cputime."""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True, frozen=True)
class ResourceUsage:
    """Normalized resource usage of a finished child process."""

    user_cpu: timedelta
    sys_cpu: timedelta
    max_rss: int | None = None  # Bytes, None where the platform can't tell

    @property
    def total_cpu(self) -> timedelta:
        """User plus system CPU time."""
        return self.user_cpu + self.sys_cpu


@dataclass(slots=True, frozen=True)
class RunResult:
    """Immutable outcome of one timed command."""

    command: tuple[str, ...]
    wall_time: timedelta
    usage: ResourceUsage
    returncode: int  # Negative when killed by a signal
