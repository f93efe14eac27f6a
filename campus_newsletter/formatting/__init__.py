"""Formatting package exports."""
from campus_newsletter.formatting.date_utils import (
    format_date,
    format_time,
    format_time_range,
    format_week_range,
    is_all_day
)
from campus_newsletter.formatting.styles import STYLES, css, style_block
from campus_newsletter.formatting.text_utils import (
    escape_html,
    nl2br,
    split_paragraphs,
    to_plain_text
)
from campus_newsletter.formatting.template_renderer import (
    get_template_environment,
    render_template
)
from campus_newsletter.formatting.render import (
    EventView,
    build_event_view,
    render,
    render_document
)

__all__ = [
    # Date handling
    'format_date',
    'format_time',
    'format_time_range',
    'format_week_range',
    'is_all_day',

    # Styles
    'STYLES',
    'css',
    'style_block',

    # Text processing
    'escape_html',
    'nl2br',
    'split_paragraphs',
    'to_plain_text',

    # Template rendering
    'get_template_environment',
    'render_template',
    'EventView',
    'build_event_view',
    'render',
    'render_document'
]
