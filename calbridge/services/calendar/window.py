import re
from datetime import datetime, timedelta, tzinfo
from typing import Tuple

from dateutil.relativedelta import relativedelta

from calbridge.errors import InvalidInputError

MONTH_TOKEN = re.compile(r"^(\d{4})(\d{2})$")

# Padding so the days of neighbouring months shown on a month grid still get their events
DAYS_BEFORE = 7
DAYS_AFTER = 14


def format_timestamp(value: datetime) -> str:
    """RFC 3339 timestamp with the offset in effect at ``value``."""
    return value.isoformat(timespec="seconds")


def parse_month_token(token: str, tz: tzinfo) -> datetime:
    """Midnight on the first day of the month named by a ``YYYYMM`` token."""
    if not token or not token.strip():
        raise InvalidInputError("invalid request, missing date")

    match = MONTH_TOKEN.match(token.strip())
    if not match:
        raise InvalidInputError(
            "invalid month token", details=[f"Expected format: YYYYMM, got {token!r}"]
        )

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidInputError(
            "invalid month token", details=[f"Month out of range: {match.group(2)}"]
        )
    return datetime(year, month, 1, tzinfo=tz)


def month_window(token: str, tz: tzinfo) -> Tuple[str, str]:
    """
    Fetch window for a month view.

    Returns (start, end) where start is a week before the first of the month
    and end is two weeks after the first of the following month, both as
    timestamps suitable for an events range query.
    """
    first = parse_month_token(token, tz)
    start = first - timedelta(days=DAYS_BEFORE)
    end = first + relativedelta(months=1, days=DAYS_AFTER)
    return format_timestamp(start), format_timestamp(end)
