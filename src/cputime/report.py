"""Human-readable rendering of run results."""

from datetime import timedelta

from cputime.models import RunResult

KIB = 1 << 10
MIB = 1 << 20
GIB = 1 << 30


def format_bytes(count: int) -> str:
    """
    Format a byte count using the largest readable unit.

    There is no TiB tier: anything from 1 GiB up, including values past
    1 TiB, is rendered in GiB.
    """
    if count < KIB:
        return f"{count} bytes"
    if count < MIB:
        return f"{count / KIB:.2f} KiB"
    if count < GIB:
        return f"{count / MIB:.2f} MiB"
    return f"{count / GIB:.2f} GiB"


def format_duration(duration: timedelta) -> str:
    """Format a duration with Python's standard timedelta representation."""
    return str(duration)


def render_report(result: RunResult) -> str:
    """Render the multi-line usage report, starting with a blank line."""
    usage = result.usage
    lines = [""]
    if usage.max_rss is not None:
        lines.append(f"Max RSS:   {format_bytes(usage.max_rss)}")
    lines += [
        f"Wall time: {format_duration(result.wall_time)}",
        "",
        f"User  CPU: {format_duration(usage.user_cpu)}",
        f"Sys   CPU: {format_duration(usage.sys_cpu)}",
        f"Total CPU: {format_duration(usage.total_cpu)}",
    ]
    return "\n".join(lines) + "\n"
