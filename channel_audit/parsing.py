"""Tolerant parsers for durations, caption timestamps, counts and dates."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as dateparser

DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")
CAPTION_TIMESTAMP_PATTERN = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2}(?:\.\d+)?)$")

# Fills date parts a partial publish date leaves out
PUBLISHED_AT_DEFAULT = datetime(1970, 1, 1)


def parse_duration(duration_iso: Optional[str]) -> int:
    """
    Parse ISO 8601 duration to seconds.
    Example: PT2M30S = 150 seconds. Anything unparsable is 0.
    """
    if not isinstance(duration_iso, str):
        return 0
    match = DURATION_PATTERN.match(duration_iso.strip())
    if not match:
        return 0

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def parse_timestamp(value: Any) -> float:
    """
    Parse a caption timestamp (h:mm:ss[.fff] or mm:ss[.fff]) to seconds.
    Numbers pass through; malformed input is 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if value >= 0 else 0.0
    if not isinstance(value, str):
        return 0.0

    match = CAPTION_TIMESTAMP_PATTERN.match(value.strip())
    if not match:
        return 0.0

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2))
    seconds = float(match.group(3))
    if minutes >= 60 or seconds >= 60:
        return 0.0
    return hours * 3600 + minutes * 60 + seconds


def safe_int(value: Any) -> int:
    """Coerce API counts (often strings) to a non-negative int."""
    if isinstance(value, bool):
        return 0
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, number)


def safe_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


def parse_published_at(raw_value: Any) -> Optional[datetime]:
    """Parse a publish date to naive UTC, or None."""
    if isinstance(raw_value, datetime):
        parsed = raw_value
    elif isinstance(raw_value, str) and raw_value.strip():
        try:
            parsed = dateparser.parse(raw_value, default=PUBLISHED_AT_DEFAULT)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def clamp_score(value: float) -> float:
    """Clamp any score into [0, 100]."""
    number = safe_float(value)
    return max(0.0, min(100.0, number))
