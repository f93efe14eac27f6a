"""Bundle assembly and newsletter compilation."""
from campus_newsletter.compose.bundle import (
    assemble_bundle,
    build_subject,
    newsletter_roster,
    split_events
)
from campus_newsletter.compose.pipeline import (
    compile_newsletter,
    render_newsletter_document
)

__all__ = [
    'assemble_bundle',
    'build_subject',
    'newsletter_roster',
    'split_events',
    'compile_newsletter',
    'render_newsletter_document'
]
