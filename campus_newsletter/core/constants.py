"""Constants and fixed texts used in the newsletter."""
from enum import Enum

# German names, Monday first to match date.weekday()
WEEKDAY_NAMES_DE = [
    'Montag',
    'Dienstag',
    'Mittwoch',
    'Donnerstag',
    'Freitag',
    'Samstag',
    'Sonntag',
]

# Placeholders for empty weeks
EMPTY_PRIMARY_WEEK_TEXT = 'Keine Veranstaltungen diese Woche.'
EMPTY_OUTLOOK_WEEK_TEXT = 'Keine Veranstaltungen geplant.'

# Section headings
ANNOUNCEMENTS_HEADING = 'Ankündigungen'
PRIMARY_WEEK_HEADING = 'Events der Vereine'
OUTLOOK_HEADING = 'Ausblick Kalenderwoche'
WEEK_LABEL = 'Kalenderwoche'
READ_MORE_LABEL = 'Mehr erfahren'

INTRO_GREETING = 'Hallo zusammen!'
INTRO_TEXT = (
    'Hier sind die kommenden Veranstaltungen für euch zusammengestellt. '
    'Viel Spaß bei den Events!'
)

# Separator between compact outlook fields and roster names
LIST_SEPARATOR = ' • '

# Icons shown in front of event meta lines
META_ICONS = {
    'date': '📅',
    'time': '🕐',
    'location': '📍',
}

# URL schemes accepted for href targets
ALLOWED_URL_SCHEMES = ('http', 'https', 'mailto')

DOWNLOAD_MIME_TYPE = 'text/html'
CLIPBOARD_MIME_TYPES = ('text/html', 'text/plain')


class RenderTarget(str, Enum):
    """Which mail renderer family the markup is written for."""
    MODERN = 'modern'
    LEGACY = 'legacy'
    HYBRID = 'hybrid'
