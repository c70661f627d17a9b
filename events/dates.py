"""
Normalisation of event date inputs.

Events are stored at day granularity. Clients may send either a plain date
(`2024-03-01`) or a full ISO datetime (`2024-03-01T09:30:00Z`); a datetime
contributes its time of day, in the server time zone, when no explicit time
is given.
"""

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def split_date_value(value):
    """
    Split a date or ISO datetime string into (date, time or None).

    Raises:
        ValueError: when the value is neither
    """
    if not isinstance(value, str):
        raise ValueError("expected a date string")
    value = value.strip()

    if "T" in value or " " in value:
        moment = parse_datetime(value)
        if moment is None:
            raise ValueError(f"invalid datetime: {value}")
        if timezone.is_aware(moment):
            moment = timezone.localtime(moment)
        return moment.date(), moment.time().replace(microsecond=0)

    day = parse_date(value)
    if day is None:
        raise ValueError(f"invalid date: {value}")
    return day, None
