"""Core package exports."""
from campus_newsletter.core.types import (
    Event,
    Organizer,
    NewsletterBundle,
    RenderedDocument
)
from campus_newsletter.core.constants import RenderTarget
from campus_newsletter.core.errors import (
    NewsletterError,
    InvalidWindowError,
    ApiError,
    AuthenticationError,
    DataFetchError,
    SinkError
)
from campus_newsletter.core.weeks import (
    WeekSelector,
    WeekWindow,
    resolve_window,
    iso_week_of,
    weeks_in_year
)

__all__ = [
    'Event',
    'Organizer',
    'NewsletterBundle',
    'RenderedDocument',
    'RenderTarget',
    'NewsletterError',
    'InvalidWindowError',
    'ApiError',
    'AuthenticationError',
    'DataFetchError',
    'SinkError',
    'WeekSelector',
    'WeekWindow',
    'resolve_window',
    'iso_week_of',
    'weeks_in_year'
]
