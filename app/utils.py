"""Utility helpers for the MovieFinder service."""

from __future__ import annotations

import math
from datetime import date
from typing import Any


def coerce_int(value: Any) -> int | None:
    """Return ``value`` as an int, or ``None`` when it cannot be read as one."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def coerce_float(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None``."""

    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_text(value: Any) -> str | None:
    """Return non-empty strings unchanged and everything else as ``None``."""

    if isinstance(value, str) and value:
        return value
    return None


def extract_year(release_date: str | None) -> int | None:
    """Return the year encoded in an ISO ``YYYY-MM-DD`` date string."""

    if not isinstance(release_date, str) or len(release_date) < 4:
        return None
    try:
        return int(release_date[:4])
    except ValueError:
        return None


def format_runtime(minutes: int | None) -> str:
    """Render a runtime in minutes as ``"2h 22m"``."""

    if not minutes:
        return "N/A"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"


def format_release_date(release_date: str | None) -> str:
    """Render an ISO date as ``"July 18, 2008"``."""

    if not release_date:
        return "N/A"
    try:
        parsed = date.fromisoformat(release_date[:10])
    except ValueError:
        return "N/A"
    return f"{parsed:%B} {parsed.day}, {parsed.year}"
