"""Assembly of newsletter bundles from the event and organizer stores."""
import asyncio
import inspect
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, Union
from campus_newsletter.config.settings import NEWSLETTER_SETTINGS
from campus_newsletter.core.errors import ApiError, DataFetchError
from campus_newsletter.core.types import Event, NewsletterBundle, Organizer
from campus_newsletter.core.weeks import WeekWindow, iso_week_of
from campus_newsletter.logging_cfg.logger import setup_logger

logger = setup_logger()

EventsSource = Callable[[datetime, datetime], Union[Iterable[Event], Awaitable[Iterable[Event]]]]
OrganizersSource = Callable[[], Union[Iterable[Organizer], Awaitable[Iterable[Organizer]]]]


def build_subject(window: WeekWindow, name: Optional[str] = None) -> str:
    """Subject line for the issue covering ``window``, e.g. 'Campus Life Newsletter - KW 43'."""
    name = name or NEWSLETTER_SETTINGS['name']
    week = iso_week_of(window.primary_start, window.primary_start.tzinfo)
    return f"{name} - KW {week}"


async def _read(source: Callable, *args) -> List[Any]:
    """Run one external read; blocking callables go to a worker thread."""
    if inspect.iscoroutinefunction(source):
        result = await source(*args)
    else:
        result = await asyncio.to_thread(source, *args)
        if asyncio.iscoroutine(result):
            result = await result
    return list(result)


def _sort_key(event: Event) -> Tuple[datetime, int]:
    return event.start, event.id


def split_events(
    events: Iterable[Event],
    window: WeekWindow,
    organizers: Optional[Dict[int, Organizer]] = None,
) -> Tuple[Tuple[Event, ...], Tuple[Event, ...]]:
    """Sort newsletter events into the primary and secondary week.

    Events without the newsletter flag, and events starting outside both
    windows, are dropped. Each list is ordered by start time.
    """
    organizers = organizers or {}
    primary: List[Event] = []
    secondary: List[Event] = []
    skipped = 0

    for event in events:
        if not event.publish_newsletter:
            skipped += 1
            continue
        if window.primary_start <= event.start < window.primary_end:
            target = primary
        elif window.secondary_start <= event.start < window.secondary_end:
            target = secondary
        else:
            logger.debug(f"Event {event.id} starts outside the newsletter window")
            continue
        target.append(event.with_organizer(organizers.get(event.organizer_id)))

    if skipped:
        logger.debug(f"Skipped {skipped} events not flagged for the newsletter")
    return tuple(sorted(primary, key=_sort_key)), tuple(sorted(secondary, key=_sort_key))


def newsletter_roster(organizers: Iterable[Organizer]) -> Tuple[Organizer, ...]:
    """Organizers listed in the footer, alphabetically."""
    eligible = [o for o in organizers if o.newsletter and o.name]
    return tuple(sorted(eligible, key=lambda o: (o.name.casefold(), o.id)))


async def assemble_bundle(
    window: WeekWindow,
    events_source: EventsSource,
    organizers_source: OrganizersSource,
    newsletter_name: Optional[str] = None,
) -> NewsletterBundle:
    """Load events and organizers for ``window`` and build a bundle.

    Both reads run concurrently. If either fails, a ``DataFetchError`` is
    raised and no bundle is produced.
    """
    try:
        events, organizers = await asyncio.gather(
            _read(events_source, window.primary_start, window.secondary_end),
            _read(organizers_source),
        )
    except ApiError as e:
        logger.error(f"Failed to load newsletter data: {e.message}")
        raise DataFetchError(f"Failed to load newsletter data: {e.message}") from e
    except Exception as e:
        logger.error(f"Failed to load newsletter data: {e}", exc_info=True)
        raise DataFetchError(f"Failed to load newsletter data: {e}") from e

    by_id = {organizer.id: organizer for organizer in organizers}
    primary, secondary = split_events(events, window, by_id)

    bundle = NewsletterBundle(
        subject=build_subject(window, newsletter_name),
        primary_week_start=window.primary_start,
        secondary_week_start=window.secondary_start,
        primary_week_events=primary,
        secondary_week_events=secondary,
        all_organizers=newsletter_roster(organizers),
    )
    logger.info(
        f"Assembled '{bundle.subject}': {len(primary)} events this week, "
        f"{len(secondary)} in the outlook week, {len(bundle.all_organizers)} organizers"
    )
    return bundle
