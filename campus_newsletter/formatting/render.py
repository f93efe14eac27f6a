"""Newsletter rendering: bundle in, HTML and plain text out."""
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, Dict, List, Optional, Union
from campus_newsletter.config.settings import NEWSLETTER_SETTINGS
from campus_newsletter.core.constants import LIST_SEPARATOR, RenderTarget
from campus_newsletter.core.types import Event, NewsletterBundle, RenderedDocument
from campus_newsletter.core.weeks import get_display_timezone, iso_week_of
from campus_newsletter.formatting.date_utils import (
    format_date,
    format_time,
    format_time_range,
    format_week_range,
    is_all_day
)
from campus_newsletter.formatting.styles import style_block
from campus_newsletter.formatting.template_renderer import render_template
from campus_newsletter.formatting.text_utils import split_paragraphs, to_plain_text
from campus_newsletter.logging_cfg.logger import setup_logger

logger = setup_logger()


@dataclass(frozen=True)
class EventView:
    """Display-ready strings for one event; the templates do no formatting."""
    title: str
    date_text: str
    time_text: Optional[str] = None
    organizer_name: Optional[str] = None
    organizer_url: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    outlook_meta: str = ''


def build_event_view(event: Event, zone: Optional[tzinfo] = None) -> EventView:
    """Format an event for the full card and the compact outlook row."""
    zone = zone or get_display_timezone()

    # Outlook rows show the start time only, followed by location and organizer
    outlook_parts = []
    if not is_all_day(event, zone):
        outlook_parts.append(format_time(event.start, zone))
    if event.location:
        outlook_parts.append(event.location)
    if event.organizer_name:
        outlook_parts.append(event.organizer_name)

    return EventView(
        title=event.display_title,
        date_text=format_date(event.start, zone),
        time_text=format_time_range(event, zone),
        organizer_name=event.organizer_name,
        organizer_url=event.organizer_website,
        location=event.location,
        description=event.display_description,
        url=event.event_url,
        outlook_meta=LIST_SEPARATOR.join(outlook_parts),
    )


def _newsletter_settings(settings: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    merged = dict(NEWSLETTER_SETTINGS)
    if settings:
        merged.update(settings)
    return merged


def build_context(
    bundle: NewsletterBundle,
    custom_text: Optional[str] = None,
    target: Union[RenderTarget, str] = RenderTarget.HYBRID,
    settings: Optional[Dict[str, Any]] = None,
    zone: Optional[tzinfo] = None,
) -> Dict[str, Any]:
    """Template context for ``newsletter.html``."""
    zone = zone or get_display_timezone()
    newsletter = _newsletter_settings(settings)
    primary: List[EventView] = [build_event_view(e, zone) for e in bundle.primary_week_events]
    outlook: List[EventView] = [build_event_view(e, zone) for e in bundle.secondary_week_events]

    return {
        'subject': bundle.subject,
        'newsletter': newsletter,
        'target': RenderTarget(target).value,
        'week_number': iso_week_of(bundle.primary_week_start, zone),
        'outlook_week_number': iso_week_of(bundle.secondary_week_start, zone),
        'week_range': format_week_range(bundle.primary_week_start, zone),
        'announcement_paragraphs': split_paragraphs(custom_text),
        'primary_events': primary,
        'outlook_events': outlook,
        'organizer_names': [o.name for o in bundle.all_organizers],
        'style_block': style_block(),
    }


def render(
    bundle: NewsletterBundle,
    custom_text: Optional[str] = None,
    target: Union[RenderTarget, str] = RenderTarget.HYBRID,
    settings: Optional[Dict[str, Any]] = None,
    zone: Optional[tzinfo] = None,
) -> str:
    """Render a bundle to a complete HTML email document.

    Every interpolated value is autoescaped. ``custom_text`` becomes one
    announcement paragraph per non-blank line; the section is left out when
    there is none.

    Args:
        bundle: Events and organizers for the issue
        custom_text: Free-form announcement text
        target: Mail renderer family; HYBRID carries both layouts
        settings: Overrides for ``NEWSLETTER_SETTINGS``
        zone: Display timezone; defaults to the configured one

    Returns:
        str: The rendered HTML document
    """
    context = build_context(bundle, custom_text, target, settings, zone)
    html = render_template('newsletter.html', **context)
    logger.debug(
        f"Rendered '{bundle.subject}' ({context['target']}): "
        f"{len(context['primary_events'])} cards, {len(context['outlook_events'])} outlook rows"
    )
    return html


def render_document(
    bundle: NewsletterBundle,
    custom_text: Optional[str] = None,
    target: Union[RenderTarget, str] = RenderTarget.HYBRID,
    settings: Optional[Dict[str, Any]] = None,
    zone: Optional[tzinfo] = None,
) -> RenderedDocument:
    """Render HTML and derive the plain-text part from the same pass."""
    html = render(bundle, custom_text, target, settings, zone)
    return RenderedDocument(
        html=html,
        plain_text=to_plain_text(html),
        subject=bundle.subject,
        primary_week_start=bundle.primary_week_start,
    )
