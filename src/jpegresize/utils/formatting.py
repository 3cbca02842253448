"""Text and number formatting utilities."""

from __future__ import annotations


def format_bytes(size: int) -> str:
    """Format a byte count with a binary unit.

    Args:
        size: Number of bytes (may be negative for deltas)

    Returns:
        Formatted size string, e.g. "1.5 MiB"
    """
    value = float(size)
    for unit in ("B", "KiB", "MiB"):
        if abs(value) < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"


def format_duration(seconds: float) -> str:
    """Format a duration in milliseconds.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    return f"{seconds * 1000:.2f} ms"
