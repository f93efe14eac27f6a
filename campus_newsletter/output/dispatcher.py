"""Routing of rendered newsletters to file, clipboard and preview sinks."""
import asyncio
import inspect
import os
import smtplib
from dataclasses import dataclass
from typing import Callable, Dict, Optional
import klembord
from campus_newsletter.config.settings import NEWSLETTER_SETTINGS
from campus_newsletter.core.constants import CLIPBOARD_MIME_TYPES, DOWNLOAD_MIME_TYPE
from campus_newsletter.core.errors import ApiError, SinkError
from campus_newsletter.core.types import RenderedDocument
from campus_newsletter.logging_cfg.logger import setup_logger

logger = setup_logger()

# Failures a sink may report instead of raising
SINK_FAILURES = (SinkError, ApiError, OSError, smtplib.SMTPException)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of handing one document to one sink."""
    sink: str
    ok: bool
    path: Optional[str] = None
    mime_type: Optional[str] = None
    error: Optional[str] = None


class SystemClipboard:
    """System clipboard through klembord.

    Both representations are offered at once; rich-text targets such as mail
    composers paste the HTML, plain-text targets get the text projection.
    """

    def __init__(self):
        self._ready = False

    def write(self, payload: Dict[str, str]) -> None:
        html_type, text_type = CLIPBOARD_MIME_TYPES
        try:
            if not self._ready:
                klembord.init()
                self._ready = True
            klembord.set_with_rich_text(payload[text_type], payload[html_type])
        except Exception as e:
            # X11 display and win32 clipboard errors share no common base
            raise SinkError(f"Clipboard unavailable: {e}") from e


async def _call(func: Callable, *args):
    if inspect.iscoroutinefunction(func):
        return await func(*args)
    result = await asyncio.to_thread(func, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


class OutputDispatcher:
    """Sends one rendered document to any of the three output sinks.

    The sinks are independent: a failure in one is reported through its
    ``DispatchResult`` and leaves the document usable for the others.

    Args:
        download_dir: Directory newsletter files are written to
        clipboard: Object with ``write(payload)``; defaults to the system clipboard
        preview_sender: Object with ``send(subject, html, plain_text)``
    """

    def __init__(self, download_dir: Optional[str] = None, clipboard=None, preview_sender=None):
        self.download_dir = download_dir or NEWSLETTER_SETTINGS['output_dir']
        self.clipboard = clipboard if clipboard is not None else SystemClipboard()
        self.preview_sender = preview_sender

    @staticmethod
    def filename_for(document: RenderedDocument) -> str:
        """e.g. 'campus-life-newsletter-2025-10-20.html'"""
        prefix = NEWSLETTER_SETTINGS['filename_prefix']
        return f"{prefix}-{document.primary_week_start:%Y-%m-%d}.html"

    def download(self, document: RenderedDocument) -> DispatchResult:
        """Write the HTML document into the download directory."""
        path = os.path.join(self.download_dir, self.filename_for(document))
        try:
            os.makedirs(self.download_dir, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(document.html)
        except OSError as e:
            logger.error(f"Failed to save newsletter to {path}: {e}")
            return DispatchResult('download', False, path=path, mime_type=DOWNLOAD_MIME_TYPE, error=str(e))

        logger.info(f"Newsletter HTML saved to {path}")
        return DispatchResult('download', True, path=path, mime_type=DOWNLOAD_MIME_TYPE)

    async def copy_to_clipboard(self, document: RenderedDocument) -> DispatchResult:
        """Put the HTML and plain-text renderings on the clipboard together."""
        html_type, text_type = CLIPBOARD_MIME_TYPES
        payload = {html_type: document.html, text_type: document.plain_text}
        try:
            await _call(self.clipboard.write, payload)
        except SINK_FAILURES as e:
            logger.error(f"Failed to copy newsletter to clipboard: {e}")
            return DispatchResult('clipboard', False, error=str(e))

        logger.info(f"Copied '{document.subject}' to clipboard")
        return DispatchResult('clipboard', True, mime_type=html_type)

    async def send_preview(self, document: RenderedDocument) -> DispatchResult:
        """Deliver a preview email of the document."""
        if self.preview_sender is None:
            logger.error("No preview sender configured")
            return DispatchResult('preview', False, error='No preview sender configured')

        try:
            await _call(self.preview_sender.send, document.subject, document.html, document.plain_text)
        except SINK_FAILURES as e:
            message = e.message if isinstance(e, ApiError) else str(e)
            logger.error(f"Failed to send preview '{document.subject}': {message}")
            return DispatchResult('preview', False, error=message)

        logger.info(f"Preview sent for '{document.subject}'")
        return DispatchResult('preview', True)
