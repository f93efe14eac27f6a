"""Output sinks for rendered newsletters."""
from campus_newsletter.output.dispatcher import (
    DispatchResult,
    OutputDispatcher,
    SystemClipboard
)
from campus_newsletter.output.debounce import RenderDebouncer

__all__ = [
    'DispatchResult',
    'OutputDispatcher',
    'SystemClipboard',
    'RenderDebouncer'
]
