"""Date utilities"""

from datetime import datetime, date, time, timedelta
from typing import Any, List, Optional, Union
import re

import pytz

SEARCH_TIME = time(8, 0)
DE_DATETIME_FORMAT = "%d.%m.%Y %H:%M:%S"
DEFAULT_TIMEZONE = "Europe/Berlin"


def parse_date(value: Union[date, str]) -> date:
    """Parse a YYYY-MM-DD string (a leading date of an ISO timestamp is accepted)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}")


def generate_dates(start_date: Union[date, str], count: int,
                   tz: Optional[str] = None) -> List[datetime]:
    """
    Build `count` consecutive search timestamps starting at `start_date`.

    Every timestamp falls on 08:00 wall-clock time in `tz`. Days are added
    on the calendar date before localising, so month ends, leap days and
    DST changes never shift the hour.
    """
    zone = pytz.timezone(tz or DEFAULT_TIMEZONE)
    first = parse_date(start_date)
    return [
        zone.localize(datetime.combine(first + timedelta(days=i), SEARCH_TIME))
        for i in range(max(count, 0))
    ]


def date_key(dt: Union[datetime, date]) -> str:
    """ISO calendar date used as the result key"""
    if isinstance(dt, datetime):
        dt = dt.date()
    return dt.isoformat()


def request_timestamp(dt: Union[datetime, date]) -> str:
    """Upstream anfrageZeitpunkt: the search date at 08:00, without offset"""
    return f"{date_key(dt)}T{SEARCH_TIME.strftime('%H:%M:%S')}"


def format_de_datetime(value: Any, tz: Optional[str] = None) -> str:
    """Format an ISO timestamp as DD.MM.YYYY HH:MM:SS (de-DE)"""
    if not value:
        return ""
    text = str(value)
    # fromisoformat only accepts a trailing Z from Python 3.11 on
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return str(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone(pytz.timezone(tz or DEFAULT_TIMEZONE))
    return dt.strftime(DE_DATETIME_FORMAT)


def parse_int(value: Any) -> Optional[int]:
    """
    Lenient integer coercion with parseInt semantics: numbers are
    truncated, strings contribute their leading integer part, anything
    else yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        m = re.match(r"\s*([+-]?\d+)", value)
        if m:
            return int(m.group(1))
    return None
