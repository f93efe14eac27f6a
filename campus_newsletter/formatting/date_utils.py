"""German date and time formatting for newsletter events."""
from datetime import datetime, timedelta, tzinfo
from typing import Optional
from dateutil import tz as dateutil_tz
from campus_newsletter.core.constants import WEEKDAY_NAMES_DE
from campus_newsletter.core.types import Event
from campus_newsletter.core.weeks import get_display_timezone


def to_display_tz(value: datetime, zone: Optional[tzinfo] = None) -> datetime:
    """Convert an aware (or UTC-naive) datetime to the display timezone."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=dateutil_tz.UTC)
    return value.astimezone(zone or get_display_timezone())


def format_date(value: datetime, zone: Optional[tzinfo] = None) -> str:
    """Long German date, e.g. 'Dienstag, 21.10.2025'."""
    local = to_display_tz(value, zone)
    return f"{WEEKDAY_NAMES_DE[local.weekday()]}, {local:%d.%m.%Y}"


def format_time(value: datetime, zone: Optional[tzinfo] = None) -> str:
    """24-hour German time, e.g. '18:00'."""
    return f"{to_display_tz(value, zone):%H:%M}"


def format_day_month(value: datetime, zone: Optional[tzinfo] = None) -> str:
    """Short German day and month, e.g. '20.10.'."""
    local = to_display_tz(value, zone)
    return f"{local.day}.{local.month}."


def format_week_range(week_start: datetime, zone: Optional[tzinfo] = None) -> str:
    """Monday to Sunday of the week starting at ``week_start``, e.g. '20.10. - 26.10.'."""
    last_day = to_display_tz(week_start, zone) + timedelta(days=6)
    return f"{format_day_month(week_start, zone)} - {format_day_month(last_day, zone)}"


def _is_midnight(value: datetime, zone: Optional[tzinfo]) -> bool:
    local = to_display_tz(value, zone)
    return local.hour == 0 and local.minute == 0


def is_all_day(event: Event, zone: Optional[tzinfo] = None) -> bool:
    """An event is all-day when it starts, and ends if it has an end, at local midnight."""
    if not _is_midnight(event.start, zone):
        return False
    return event.end is None or _is_midnight(event.end, zone)


def format_time_range(event: Event, zone: Optional[tzinfo] = None) -> Optional[str]:
    """'18:00 - 23:00', or just the start time; ``None`` for all-day events."""
    if is_all_day(event, zone):
        return None
    start = format_time(event.start, zone)
    if event.end is None:
        return start
    return f"{start} - {format_time(event.end, zone)}"
