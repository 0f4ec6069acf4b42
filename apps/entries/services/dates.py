"""
Tolerant timestamp parsing.

Stored and submitted dates come in several shapes. Anything that cannot be
read as a point in time is treated as undecided (None) instead of failing
the whole request.
"""

from datetime import date, datetime, time, timezone as dt_timezone
from typing import Any, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Convert ``value`` to an aware datetime, or None if it is not a timestamp.

    Accepted:
        - aware or naive datetimes (naive ones are read in the current time zone)
        - dates (midnight local time)
        - ISO 8601 strings, date-only strings included
        - int/float epoch seconds
        - mappings with a ``seconds`` key (serialised document-store timestamps)
    """
    if value is None or value == '':
        return None

    if isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _aware(value)

    if isinstance(value, date):
        return _aware(datetime.combine(value, time(0, 0)))

    if isinstance(value, (int, float)):
        return _from_epoch(value)

    if isinstance(value, dict):
        seconds = value.get('seconds', value.get('_seconds'))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return _from_epoch(seconds)
        return None

    if isinstance(value, str):
        text = value.strip()
        try:
            parsed = parse_datetime(text)
            if parsed is not None:
                return _aware(parsed)
            parsed_date = parse_date(text)
        except ValueError:
            return None
        if parsed_date is not None:
            return _aware(datetime.combine(parsed_date, time(0, 0)))

    return None


def _aware(value: datetime) -> datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value, timezone.get_current_timezone())
    return value


def _from_epoch(seconds: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(seconds, tz=dt_timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def local_date(value: Any) -> Optional[date]:
    """Calendar date of ``value`` in the current time zone, or None."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return timezone.localtime(parsed).date()
