"""End-to-end newsletter compilation: window, bundle, rendering."""
import asyncio
from datetime import datetime, tzinfo
from typing import Any, Dict, Optional, Union
from campus_newsletter.compose.bundle import assemble_bundle
from campus_newsletter.core.constants import RenderTarget
from campus_newsletter.core.types import RenderedDocument
from campus_newsletter.core.weeks import SelectorLike, resolve_window
from campus_newsletter.formatting.render import render_document
from campus_newsletter.logging_cfg.logger import setup_logger

logger = setup_logger()


async def compile_newsletter(
    selector: SelectorLike = None,
    custom_text: Optional[str] = None,
    *,
    client: Any,
    settings: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
    target: Union[RenderTarget, str] = RenderTarget.HYBRID,
    zone: Optional[tzinfo] = None,
) -> RenderedDocument:
    """Resolve the week window, load its bundle and render it.

    Args:
        selector: Week to compile; the next full week when omitted
        custom_text: Announcement text for the issue
        client: Object providing ``list_events_for_window`` and
            ``list_organizers`` (normally a ``CampusLifeClient``)
        settings: Overrides for ``NEWSLETTER_SETTINGS``
        now: Pivot instant for the default week
        target: Mail renderer family
        zone: Display timezone

    Returns:
        RenderedDocument with HTML and plain text from one rendering pass

    Raises:
        InvalidWindowError: If the selector is malformed
        DataFetchError: If events or organizers cannot be loaded
    """
    window = resolve_window(selector, now=now, zone=zone)
    logger.info(
        f"Compiling newsletter for KW {window.primary_week} "
        f"({window.primary_start:%Y-%m-%d} - {window.secondary_end:%Y-%m-%d})"
    )

    name = (settings or {}).get('name')
    bundle = await assemble_bundle(
        window,
        client.list_events_for_window,
        client.list_organizers,
        newsletter_name=name,
    )
    return render_document(bundle, custom_text, target=target, settings=settings, zone=zone)


def render_newsletter_document(
    selector: SelectorLike = None,
    custom_text: Optional[str] = None,
    **kwargs: Any,
) -> RenderedDocument:
    """Blocking wrapper around ``compile_newsletter`` for scripts and the CLI."""
    return asyncio.run(compile_newsletter(selector, custom_text, **kwargs))
