"""Root package exports."""
from campus_newsletter.core.types import (
    Event,
    Organizer,
    NewsletterBundle,
    RenderedDocument
)
from campus_newsletter.core.constants import RenderTarget
from campus_newsletter.core.weeks import WeekSelector, WeekWindow, resolve_window
from campus_newsletter.api.client import CampusLifeClient
from campus_newsletter.compose import (
    assemble_bundle,
    compile_newsletter,
    render_newsletter_document
)
from campus_newsletter.formatting import render, render_document, to_plain_text
from campus_newsletter.output import OutputDispatcher, RenderDebouncer

__all__ = [
    'Event',
    'Organizer',
    'NewsletterBundle',
    'RenderedDocument',
    'RenderTarget',
    'WeekSelector',
    'WeekWindow',
    'resolve_window',
    'CampusLifeClient',
    'assemble_bundle',
    'compile_newsletter',
    'render_newsletter_document',
    'render',
    'render_document',
    'to_plain_text',
    'OutputDispatcher',
    'RenderDebouncer'
]
