"""Display helpers shared by the UI and the CLI."""

from __future__ import annotations

import math
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

DEFAULT_DISPLAY_TIMEZONE = "America/Sao_Paulo"


def hours_to_hhmm(value: float | None) -> str:
    """``8.5`` → ``"8:30"``; minutes are truncated, not rounded."""
    if value is None:
        return "-"
    sign = "-" if value < 0 else ""
    total_minutes = math.floor(abs(value) * 60)
    hours, minutes = divmod(total_minutes, 60)
    return f"{sign}{hours}:{minutes:02d}"


def _zone(tz: str | tzinfo) -> tzinfo:
    return ZoneInfo(tz) if isinstance(tz, str) else tz


def format_timestamp(value: datetime | None, tz: str | tzinfo = DEFAULT_DISPLAY_TIMEZONE) -> str:
    """Render as ``dd/mm HH:MM`` in the display zone.

    Aware values are converted to ``tz`` first; naive values are shown as-is.
    """
    if value is None:
        return "-"
    if value.tzinfo is not None:
        value = value.astimezone(_zone(tz))
    return value.strftime("%d/%m %H:%M")


def format_pair(
    start: datetime | None,
    end: datetime | None,
    divider: str = " / ",
    tz: str | tzinfo = DEFAULT_DISPLAY_TIMEZONE,
) -> str:
    return f"{format_timestamp(start, tz)}{divider}{format_timestamp(end, tz)}"
