"""Date helpers for post metadata."""

from __future__ import annotations

from datetime import datetime, timezone

UNKNOWN_DATE = "Unknown"

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_FALLBACK_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
)


def parse_date(value: str | None) -> datetime | None:
    """Parse a frontmatter date string into a naive datetime.

    Aware values are converted to UTC before the tzinfo is dropped so that
    every parsed date can be compared with every other one.
    """

    if not value:
        return None
    text = value.strip()
    if not text:
        return None
    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
            except ValueError:
                continue
            break
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_long_date(value: datetime | None) -> str:
    # Month names are fixed English, regardless of locale.
    if value is None:
        return UNKNOWN_DATE
    return f"{_MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"
