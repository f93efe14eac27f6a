"""Jinja2 template rendering for newsletter."""
from functools import lru_cache
from pathlib import Path
from typing import Any
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from campus_newsletter.core import constants
from campus_newsletter.formatting.styles import css
from campus_newsletter.formatting.text_utils import nl2br

TEMPLATE_DIR = Path(__file__).parent.parent / 'templates'

# Fixed texts exposed to templates as ``texts.<NAME>``
TEMPLATE_TEXTS = {
    name: getattr(constants, name)
    for name in (
        'ANNOUNCEMENTS_HEADING',
        'EMPTY_OUTLOOK_WEEK_TEXT',
        'EMPTY_PRIMARY_WEEK_TEXT',
        'INTRO_GREETING',
        'INTRO_TEXT',
        'LIST_SEPARATOR',
        'META_ICONS',
        'OUTLOOK_HEADING',
        'PRIMARY_WEEK_HEADING',
        'READ_MORE_LABEL',
        'WEEK_LABEL',
    )
}


@lru_cache(maxsize=1)
def get_template_environment() -> Environment:
    """Create and configure Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(['html', 'xml']),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )

    env.globals['css'] = css
    env.globals['texts'] = TEMPLATE_TEXTS
    env.filters['nl2br'] = nl2br

    return env


def render_template(name: str, **context: Any) -> str:
    """Render one of the package templates with ``context``."""
    template = get_template_environment().get_template(name)
    return template.render(**context)
