"""Display formatting for feed dates."""

from datetime import UTC, datetime

from dateutil import parser as date_parser

INVALID_DATE = "Invalid Date"

# Fills components missing from partial dates, keeps rebuilds deterministic
PARSE_DEFAULT = datetime(1970, 1, 1)

# RFC 822 zone names allowed in pubDate, as UTC offsets in seconds
RFC822_ZONES = {
    "EST": -5 * 3600,
    "EDT": -4 * 3600,
    "CST": -6 * 3600,
    "CDT": -5 * 3600,
    "MST": -7 * 3600,
    "MDT": -6 * 3600,
    "PST": -8 * 3600,
    "PDT": -7 * 3600,
    "UT": 0,
}

# US English, independent of the process locale
MONTH_NAMES = (
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


def parse_date(date_str: str) -> datetime | None:
    """Parse a feed date string into a UTC datetime.

    Naive values are taken as UTC. Returns ``None`` when the string cannot
    be parsed.
    """
    if not date_str or not date_str.strip():
        return None
    try:
        parsed = date_parser.parse(
            date_str, default=PARSE_DEFAULT, tzinfos=RFC822_ZONES
        )
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError, TypeError):
        return None


def format_date(date_str: str, mode: str = "long") -> str:
    """Format a feed date for display.

    ``short`` gives ``"Jan 2026"``, ``long`` gives ``"January 5, 2026"``.
    Unparseable input gives ``"Invalid Date"``.
    """
    date = parse_date(date_str)
    if date is None:
        return INVALID_DATE

    month = MONTH_NAMES[date.month - 1]
    if mode == "short":
        return f"{month[:3]} {date.year}"
    return f"{month} {date.day}, {date.year}"


def to_iso_timestamp(date_str: str) -> str | None:
    """Return a strict UTC timestamp like ``2026-01-05T00:00:00.000Z``."""
    date = parse_date(date_str)
    if date is None:
        return None
    return date.strftime("%Y-%m-%dT%H:%M:%S.") + f"{date.microsecond // 1000:03d}Z"
