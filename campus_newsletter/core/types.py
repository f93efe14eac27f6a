"""Type definitions for events, organizers and rendered newsletters."""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse
from dateutil import parser as dateutil_parser
from dateutil import tz as dateutil_tz
from campus_newsletter.core.constants import ALLOWED_URL_SCHEMES
from campus_newsletter.core.weeks import iso_week_of
from campus_newsletter.logging_cfg.logger import setup_logger

logger = setup_logger()

_FORBIDDEN_URL_CHARS = set(' \t\r\n"\'<>`\\')


def validate_url(value: Optional[str]) -> Optional[str]:
    """Return ``value`` if it is a usable link target, otherwise ``None``.

    Only http(s) URLs with a host and mailto addresses are accepted, and never
    with whitespace, quotes or angle brackets in them, so a validated URL can
    sit inside a quoted ``href`` attribute.
    """
    if not value:
        return None
    value = value.strip()
    if not value or any(c in _FORBIDDEN_URL_CHARS for c in value):
        logger.warning(f"Dropping unsafe URL: {value!r}")
        return None
    parsed = urlparse(value)
    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES:
        logger.warning(f"Dropping URL with unsupported scheme: {value!r}")
        return None
    if parsed.scheme.lower() != 'mailto' and not parsed.netloc:
        logger.warning(f"Dropping URL without host: {value!r}")
        return None
    return value


def parse_timestamp(value: Any) -> datetime:
    """Parse an API timestamp into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = dateutil_parser.isoparse(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dateutil_tz.UTC)
    return parsed.astimezone(dateutil_tz.UTC)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def single_line(value: Optional[str]) -> Optional[str]:
    """Collapse whitespace runs, line breaks included, into single spaces."""
    if value is None:
        return None
    return ' '.join(str(value).split())


@dataclass(frozen=True)
class Organizer:
    id: int
    name: str
    website_url: Optional[str] = None
    instagram_url: Optional[str] = None
    newsletter: bool = True  # eligible for the newsletter roster

    def __post_init__(self):
        object.__setattr__(self, 'name', single_line(self.name) or '')
        object.__setattr__(self, 'website_url', validate_url(self.website_url))
        object.__setattr__(self, 'instagram_url', validate_url(self.instagram_url))

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> 'Organizer':
        return cls(
            id=int(payload['id']),
            name=str(payload.get('name') or ''),
            website_url=_optional_text(payload.get('website_url')),
            instagram_url=_optional_text(payload.get('instagram_url')),
            newsletter=bool(payload.get('newsletter', True)),
        )


@dataclass(frozen=True)
class Event:
    """A single campus event as delivered by the event store."""
    id: int
    organizer_id: int
    title_de: str
    start: datetime
    title_en: str = ''
    description_de: Optional[str] = None
    description_en: Optional[str] = None
    end: Optional[datetime] = None
    location: Optional[str] = None
    event_url: Optional[str] = None
    organizer_name: Optional[str] = None
    organizer_website: Optional[str] = None
    publish_app: bool = False
    publish_newsletter: bool = False
    publish_in_ical: bool = False
    publish_web: bool = False

    def __post_init__(self):
        # Single-line fields are stored the way they are displayed
        object.__setattr__(self, 'title_de', single_line(self.title_de) or '')
        object.__setattr__(self, 'title_en', single_line(self.title_en) or '')
        object.__setattr__(self, 'location', single_line(self.location) or None)
        object.__setattr__(self, 'organizer_name', single_line(self.organizer_name) or None)
        object.__setattr__(self, 'start', parse_timestamp(self.start))
        if self.end is not None:
            object.__setattr__(self, 'end', parse_timestamp(self.end))
        object.__setattr__(self, 'event_url', validate_url(self.event_url))
        object.__setattr__(self, 'organizer_website', validate_url(self.organizer_website))

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> 'Event':
        return cls(
            id=int(payload['id']),
            organizer_id=int(payload['organizer_id']),
            title_de=str(payload.get('title_de') or ''),
            title_en=str(payload.get('title_en') or ''),
            description_de=_optional_text(payload.get('description_de')),
            description_en=_optional_text(payload.get('description_en')),
            start=payload['start_date_time'],
            end=payload.get('end_date_time') or None,
            location=_optional_text(payload.get('location')),
            event_url=_optional_text(payload.get('event_url')),
            organizer_name=_optional_text(payload.get('organizer_name')),
            organizer_website=_optional_text(payload.get('organizer_website')),
            publish_app=bool(payload.get('publish_app', False)),
            publish_newsletter=bool(payload.get('publish_newsletter', False)),
            publish_in_ical=bool(payload.get('publish_in_ical', False)),
            publish_web=bool(payload.get('publish_web', False)),
        )

    @property
    def display_title(self) -> str:
        return self.title_de or self.title_en

    @property
    def display_description(self) -> Optional[str]:
        return self.description_de or self.description_en

    def with_organizer(self, organizer: Optional[Organizer]) -> 'Event':
        """Copy of this event with organizer name and website filled in."""
        if organizer is None:
            return self
        return replace(
            self,
            organizer_name=self.organizer_name or organizer.name,
            organizer_website=self.organizer_website or organizer.website_url,
        )


@dataclass(frozen=True)
class NewsletterBundle:
    """Read-only snapshot of everything one newsletter issue shows."""
    subject: str
    primary_week_start: datetime
    secondary_week_start: datetime
    primary_week_events: Tuple[Event, ...] = field(default_factory=tuple)
    secondary_week_events: Tuple[Event, ...] = field(default_factory=tuple)
    all_organizers: Tuple[Organizer, ...] = field(default_factory=tuple)

    @property
    def primary_week_number(self) -> int:
        return iso_week_of(self.primary_week_start, self.primary_week_start.tzinfo)

    @property
    def secondary_week_number(self) -> int:
        return iso_week_of(self.secondary_week_start, self.secondary_week_start.tzinfo)


@dataclass(frozen=True)
class RenderedDocument:
    """HTML and plain-text renderings of one bundle. Never persisted."""
    html: str
    plain_text: str
    subject: str
    primary_week_start: datetime
