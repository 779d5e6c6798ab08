"""Duration parsing for command line flags."""

import re
from datetime import timedelta

_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "w": 604800,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h|d|w)")


def parse_duration(value: str) -> timedelta:
    """Parse a duration string into a timedelta.

    Supports:
    - Single units: 90s, 30m, 2h, 7d, 1w
    - Combined units: 1h30m, 2d12h
    - Fractions: 1.5h
    - Zero without a unit: 0

    Args:
        value: Duration string to parse

    Returns:
        Parsed timedelta

    Raises:
        ValueError: If the duration format is not recognized
    """
    text = value.strip().lower()
    if text in ("0", ""):
        return timedelta(0)

    position = 0
    total = 0.0
    for match in _COMPONENT.finditer(text):
        if match.start() != position:
            break
        amount, unit = match.groups()
        total += float(amount) * _UNIT_SECONDS[unit]
        position = match.end()

    if position == 0 or position != len(text):
        raise ValueError(
            f"Unable to parse duration '{value}'. "
            f"Use a number followed by a unit (ms, s, m, h, d, w), e.g. 2h or 1h30m"
        )
    return timedelta(seconds=total)


def format_duration(delta: timedelta) -> str:
    """Format a timedelta compactly, e.g. 2h or 1h30m."""
    seconds = int(delta.total_seconds())
    if seconds == 0:
        return "0s"
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs:
        parts.append(f"{secs}s")
    return "".join(parts)
