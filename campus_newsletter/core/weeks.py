"""ISO-8601 week arithmetic and newsletter window resolution.

Every week number shown in the newsletter and every window the bundle is
built from comes out of this module, so the subject line, the header and the
selected events can never disagree about which week is meant.

ISO weeks run Monday to Sunday; week 1 is the week containing the year's
first Thursday (equivalently, the week containing January 4th).
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Mapping, Optional, Sequence, Union
from dateutil import tz as dateutil_tz
from campus_newsletter.config.settings import NEWSLETTER_SETTINGS
from campus_newsletter.core.errors import InvalidWindowError
from campus_newsletter.logging_cfg.logger import setup_logger

logger = setup_logger()

WEEK = timedelta(days=7)


def get_display_timezone(name: Optional[str] = None) -> tzinfo:
    """Return the timezone dates are displayed in (Europe/Berlin by default)."""
    zone = dateutil_tz.gettz(name or NEWSLETTER_SETTINGS['display_timezone'])
    if zone is None:
        raise InvalidWindowError(f"Unknown display timezone: {name}")
    return zone


@dataclass(frozen=True)
class WeekSelector:
    year: int
    iso_week: int


@dataclass(frozen=True)
class WeekWindow:
    """Two contiguous 7-day windows, each starting Monday 00:00 local time."""
    primary_start: datetime
    secondary_start: datetime

    @property
    def primary_end(self) -> datetime:
        return self.primary_start + WEEK

    @property
    def secondary_end(self) -> datetime:
        return self.secondary_start + WEEK

    @property
    def primary_week(self) -> int:
        return iso_week_of(self.primary_start, self.primary_start.tzinfo)

    @property
    def secondary_week(self) -> int:
        return iso_week_of(self.secondary_start, self.secondary_start.tzinfo)


SelectorLike = Union[WeekSelector, Sequence[int], Mapping[str, int], None]


def weeks_in_year(year: int) -> int:
    """Number of ISO weeks in a year: 52, or 53 for long years."""
    # December 28th always lies in the last ISO week of its year
    return date(year, 12, 28).isocalendar()[1]


def monday_of_week_one(year: int) -> date:
    jan4 = date(year, 1, 4)
    return jan4 - timedelta(days=jan4.weekday())


def iso_week_of(value: Union[date, datetime], zone: Optional[tzinfo] = None) -> int:
    """ISO week number of a date, or of a datetime seen in the display timezone.

    Naive datetimes are taken to be UTC, matching the API's timestamps.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=dateutil_tz.UTC)
        value = value.astimezone(zone or get_display_timezone()).date()
    return value.isocalendar()[1]


def monday_of(year: int, iso_week: int) -> date:
    """Monday of the given ISO week.

    Week numbers outside 1..weeks_in_year(year) roll over into the adjacent
    year: week 53 of a 52-week year is week 1 of the following year and
    week 0 is the last week of the previous year.
    """
    if not 1 <= iso_week <= weeks_in_year(year):
        logger.warning(
            f"ISO week {iso_week} is outside {year} "
            f"(1-{weeks_in_year(year)}); rolling over"
        )
    try:
        return monday_of_week_one(year) + (iso_week - 1) * WEEK
    except OverflowError as e:
        raise InvalidWindowError(f"Week {iso_week} of {year} is out of range") from e


def _parse_selector(selector: SelectorLike) -> WeekSelector:
    if isinstance(selector, WeekSelector):
        year, iso_week = selector.year, selector.iso_week
    elif isinstance(selector, Mapping):
        try:
            year, iso_week = selector['year'], selector['iso_week']
        except KeyError as e:
            raise InvalidWindowError(f"Week selector is missing {e.args[0]!r}") from e
    elif isinstance(selector, (tuple, list)) and len(selector) == 2:
        year, iso_week = selector
    else:
        raise InvalidWindowError(f"Unsupported week selector: {selector!r}")

    for label, value in (('year', year), ('iso_week', iso_week)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidWindowError(f"Week selector {label} must be an integer, got {value!r}")
    if not 1 <= year <= 9998:
        raise InvalidWindowError(f"Year {year} is out of range")
    return WeekSelector(year=year, iso_week=iso_week)


def _local_midnight(day: date, zone: tzinfo) -> datetime:
    return datetime.combine(day, time.min).replace(tzinfo=zone)


def resolve_window(
    selector: SelectorLike = None,
    now: Optional[datetime] = None,
    zone: Optional[tzinfo] = None,
) -> WeekWindow:
    """Resolve the primary and secondary (outlook) week windows.

    The selector names the issue week, the calendar week the newsletter goes
    out in. The newsletter covers the week after it, followed by the outlook
    week: issue week 42 of 2025 yields windows starting 2025-10-20 (KW 43)
    and 2025-10-27 (KW 44).

    Args:
        selector: ``WeekSelector``, ``(year, iso_week)`` or
            ``{'year': ..., 'iso_week': ...}``. When omitted, the week
            containing ``now`` is the issue week, so the primary window is
            the next full calendar week.
        now: Pivot instant for the default selector; defaults to the current
            time. Naive values are interpreted in the display timezone.
        zone: Display timezone; defaults to the configured one.

    Returns:
        WeekWindow whose primary start is a Monday 00:00 in ``zone`` and whose
        secondary start is exactly seven days later.
    """
    zone = zone or get_display_timezone()

    if selector is None:
        if now is None:
            now = datetime.now(zone)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=zone)
        today = now.astimezone(zone).date()
        issue_monday = today - timedelta(days=today.weekday())
    else:
        parsed = _parse_selector(selector)
        issue_monday = monday_of(parsed.year, parsed.iso_week)

    try:
        primary_start = _local_midnight(issue_monday + WEEK, zone)
        secondary_start = primary_start + WEEK
    except OverflowError as e:
        raise InvalidWindowError(f"Week after {issue_monday} is out of range") from e
    return WeekWindow(primary_start=primary_start, secondary_start=secondary_start)
