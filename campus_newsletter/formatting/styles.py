"""Newsletter style table.

Mail clients disagree about ``<style>`` support, so every element carries its
rules inline as well. Both the inline ``style`` attributes and the ``<style>``
block are generated from ``STYLES`` so the two can never drift apart.
"""
from markupsafe import Markup
from campus_newsletter.config.settings import NEWSLETTER_SETTINGS

BRAND = NEWSLETTER_SETTINGS['brand_color']
FONT_STACK = '-apple-system, BlinkMacSystemFont, Roboto, Helvetica, Arial, sans-serif'

STYLES = {
    'body': f'margin: 0; padding: 0; background-color: #f3f4f6; color: #374151; font-family: {FONT_STACK}; line-height: 1.6;',
    'preheader': 'display: none; max-height: 0; overflow: hidden; mso-hide: all; font-size: 1px; line-height: 1px; color: #f3f4f6;',
    'container': 'max-width: 800px; width: 100%; margin: 0 auto; background-color: #ffffff; border: 1px solid #e5e7eb;',
    'header-image': 'display: block; width: 100%; max-width: 800px; height: auto; border: 0;',
    'header': f'background-color: {BRAND}; color: #ffffff; padding: 32px;',
    'title': 'margin: 0; font-size: 25px; font-weight: bold; color: #ffffff;',
    'week-info': 'margin: 4px 0 0 0; font-size: 15px; color: #ffffff;',
    'content': 'padding: 32px;',
    'intro': 'background-color: #f8fafc; padding: 15px; border-radius: 16px; margin-bottom: 30px;',
    'intro-text': 'margin: 0 0 8px 0; line-height: 1.6; color: #374151;',
    'section-title': f'font-size: 24px; color: {BRAND}; margin: 30px 0 20px 0; padding-bottom: 10px; border-bottom: 2px solid #e5e7eb;',
    'custom-content': 'background-color: #ffffff; border: 1px solid #e5e7eb; border-radius: 8px; padding: 20px; margin-top: 15px;',
    'custom-paragraph': 'margin: 0 0 10px 0; line-height: 1.6; color: #374151;',
    'event-card': 'background-color: #ffffff; border: 1px solid #e5e7eb; border-radius: 12px; padding: 25px; margin-bottom: 20px;',
    'event-title': f'margin: 0 0 8px 0; font-size: 20px; font-weight: bold; line-height: 1.3; color: {BRAND};',
    'event-organizer': 'margin: 0 0 15px 0; font-size: 14px; color: #6b7280;',
    'organizer': 'color: #6b7280; text-decoration: none;',
    'meta-item': 'margin: 0 0 6px 0; font-size: 14px; color: #6b7280;',
    'meta-icon': 'display: inline-block; margin-right: 8px;',
    'meta-text': 'font-weight: 500;',
    'event-description': 'margin: 15px 0 0 0; line-height: 1.6; color: #374151;',
    'event-link-row': 'margin: 15px 0 0 0;',
    'event-link': f'display: inline-block; background-color: {BRAND}; color: #ffffff; padding: 8px 16px; text-decoration: none; border-radius: 6px; font-size: 14px;',
    'button-cell': f'background-color: {BRAND}; border-radius: 6px; padding: 8px 16px;',
    'no-events': 'margin: 0 0 20px 0; color: #6b7280; font-style: italic;',
    'quick-events-list': 'background-color: #f8fafc; border-radius: 16px; padding: 20px; margin-bottom: 20px;',
    'quick-event-item': 'padding: 12px 0; border-bottom: 1px solid #e5e7eb;',
    'quick-event-date': f'margin: 0; font-size: 14px; font-weight: bold; color: {BRAND}; width: 140px; vertical-align: top;',
    'quick-event-details': 'vertical-align: top;',
    'quick-event-title': 'margin: 0 0 4px 0; font-size: 15px; font-weight: 600; color: #374151;',
    'quick-event-meta': 'margin: 0; font-size: 13px; color: #6b7280;',
    'footer': 'background-color: #1f2937; color: #d1d5db; padding: 32px; text-align: center; font-size: 14px; line-height: 1.6;',
    'footer-title': 'margin: 0 0 8px 0; font-size: 20px; font-weight: bold; color: #ffffff;',
    'footer-text': 'margin: 0 0 16px 0; color: #d1d5db;',
    'footer-link': 'color: #60a5fa; text-decoration: none;',
    'unsubscribe': 'margin: 20px 0 0 0; font-size: 12px; color: #9ca3af;',
}

# Rules that only make sense in a stylesheet
EXTRA_CSS = """
@media (prefers-color-scheme: dark) {
    .container, .content { background-color: #111111 !important; }
    .intro, .event-card, .quick-events-list, .custom-content { background-color: #1a1a1a !important; color: #e5e5e5 !important; }
    .event-title, .section-title, .quick-event-date { color: #60a5fa !important; }
    .event-description, .quick-event-title, .custom-paragraph, .intro-text { color: #e5e5e5 !important; }
    .footer { background-color: #000000 !important; }
}
@media (max-width: 600px) {
    .header, .content, .footer { padding: 20px !important; }
    .quick-event-date { display: block !important; width: auto !important; }
}
"""


def css(name: str) -> str:
    """Inline declarations for the element class ``name``."""
    return STYLES[name]


def style_block() -> Markup:
    """The ``<style>`` contents: one class rule per style table entry."""
    rules = [f".{name} {{ {declarations} }}" for name, declarations in STYLES.items()]
    return Markup("\n".join(rules) + EXTRA_CSS)
