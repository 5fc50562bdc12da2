"""Display formatters for scores, durations, URLs and file names."""

import math
import re
from datetime import datetime, timezone
from typing import Optional, Union
from urllib.parse import urlsplit

Number = Union[int, float]

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR


def _round_half_up(value: float) -> int:
    # round() would apply banker's rounding to .5
    return math.floor(value + 0.5)


def format_percentage(score: Number) -> str:
    """Convert a 0-1 score to a whole percentage string (0.873 -> "87")."""
    return str(_round_half_up(score * 100))


def _floor_decimals(value: float, digits: int) -> str:
    factor = 10 ** digits
    floored = math.floor(value * factor + 1e-7) / factor
    return f"{floored:.{digits}f}"


def format_duration(milliseconds: Number) -> str:
    """Render milliseconds as a compact duration string.

    Examples:
        0 -> "0ms", 320 -> "320ms", 1234 -> "1.2s", 65000 -> "1m 5s"
    """
    sign = "-" if milliseconds < 0 else ""
    ms = abs(milliseconds)

    parts = []

    def add(value, unit, text=None):
        if value == 0:
            return
        parts.append(f"{text if text is not None else value}{unit}")

    days = int(ms // _MS_PER_DAY)
    add(days // 365, "y")
    add(days % 365, "d")
    add(int(ms // _MS_PER_HOUR) % 24, "h")
    add(int(ms // _MS_PER_MINUTE) % 60, "m")

    if ms < _MS_PER_SECOND:
        rounded = _round_half_up(ms) if ms >= 1 else math.ceil(ms)
        add(rounded, "ms")
    else:
        seconds = (ms / _MS_PER_SECOND) % 60
        seconds_text = re.sub(r"\.0+$", "", _floor_decimals(seconds, 1))
        add(float(seconds_text), "s", seconds_text)

    if not parts:
        return f"{sign}0ms"
    return sign + " ".join(parts)


def humanize_url(url: str) -> str:
    """Strip the scheme and trailing slash from a URL for display.

    "https://Example.com/page/" -> "example.com/page"
    """
    parts = urlsplit(url if "//" in url else f"//{url}")
    host = (parts.hostname or "").lower()
    if parts.port and not (
        (parts.scheme == "http" and parts.port == 80)
        or (parts.scheme == "https" and parts.port == 443)
    ):
        host = f"{host}:{parts.port}"

    humanized = host + parts.path.rstrip("/")
    if parts.query:
        humanized += f"?{parts.query}"
    if parts.fragment:
        humanized += f"#{parts.fragment}"
    return humanized


def sanitize_for_filename(text: str) -> str:
    """Replace path-hostile characters: "." -> "-", "/" -> "--"."""
    return text.replace(".", "-").replace("/", "--")


def compact_timestamp(timestamp: Optional[datetime] = None) -> str:
    """UTC timestamp at second precision with separators removed (YYYYMMDDHHMMSS)."""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    elif timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return re.sub(r"\D", "", timestamp.isoformat(timespec="seconds")[:19])
