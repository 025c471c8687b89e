"""Tests for cputime data models."""

from datetime import timedelta

from cputime.models import ResourceUsage, RunResult


def test_resource_usage_creation():
    """Test ResourceUsage dataclass creation."""
    usage = ResourceUsage(
        user_cpu=timedelta(seconds=1.5),
        sys_cpu=timedelta(milliseconds=250),
        max_rss=1024000,
    )

    assert usage.user_cpu == timedelta(seconds=1.5)
    assert usage.sys_cpu == timedelta(milliseconds=250)
    assert usage.max_rss == 1024000


def test_resource_usage_max_rss_optional():
    """Test max_rss defaults to None for reduced records."""
    usage = ResourceUsage(user_cpu=timedelta(0), sys_cpu=timedelta(0))
    assert usage.max_rss is None


def test_total_cpu_is_sum():
    """Test total_cpu is exactly user + sys."""
    usage = ResourceUsage(
        user_cpu=timedelta(microseconds=123457),
        sys_cpu=timedelta(microseconds=876543),
    )
    assert usage.total_cpu == timedelta(seconds=1)


def test_run_result_creation():
    """Test RunResult dataclass creation."""
    usage = ResourceUsage(user_cpu=timedelta(0), sys_cpu=timedelta(0), max_rss=0)
    result = RunResult(
        command=("true",),
        wall_time=timedelta(seconds=2),
        usage=usage,
        returncode=1,
    )

    assert result.command == ("true",)
    assert result.wall_time == timedelta(seconds=2)
    assert result.usage is usage
    assert result.returncode == 1


def test_models_are_frozen():
    """Test that the models are immutable (frozen)."""
    usage = ResourceUsage(user_cpu=timedelta(0), sys_cpu=timedelta(0))

    # Attempting to modify should raise an error
    try:
        usage.max_rss = 999
        raise AssertionError("Should have raised FrozenInstanceError")
    except AttributeError:
        pass  # Expected behavior for frozen dataclass


def test_models_use_slots():
    """Test that the models use __slots__."""
    usage = ResourceUsage(user_cpu=timedelta(0), sys_cpu=timedelta(0))
    result = RunResult(command=("x",), wall_time=timedelta(0), usage=usage, returncode=0)

    # Slots-based dataclasses don't have __dict__
    assert not hasattr(usage, "__dict__")
    assert not hasattr(result, "__dict__")
