"""Elapsed-time formatting for menu labels."""

import time


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def format_elapsed(timestamp_ms: int, now: int | None = None) -> str:
    """Format time elapsed since a past timestamp as a compact string.

    Args:
        timestamp_ms: Past epoch timestamp in milliseconds.
        now: Reference time in epoch milliseconds (defaults to now).

    Returns:
        Compact duration like "2d 3h", "3h 12m", "2h", "12m" or "45s".

    Examples:
        >>> format_elapsed(0, now=(3 * 3600 + 12 * 60) * 1000)
        '3h 12m'
    """
    if now is None:
        now = now_ms()

    total_seconds = max(now - timestamp_ms, 0) // 1000

    days, remaining = divmod(total_seconds, 24 * 60 * 60)
    hours, remaining = divmod(remaining, 60 * 60)
    minutes, seconds = divmod(remaining, 60)

    if days > 0:
        return f"{days}d {hours}h" if hours else f"{days}d"
    if hours > 0:
        return f"{hours}h {minutes}m" if minutes else f"{hours}h"
    if minutes > 0:
        return f"{minutes}m"
    return f"{seconds}s"


__all__ = ["format_elapsed", "now_ms"]
