"""Debounced re-rendering while announcement text is being edited."""
import asyncio
from typing import Any, Callable, Optional
from campus_newsletter.config.settings import NEWSLETTER_SETTINGS
from campus_newsletter.logging_cfg.logger import setup_logger

logger = setup_logger()


class RenderDebouncer:
    """Cancel-and-restart scheduling of renders.

    Each ``submit`` cancels the pending render and schedules a new one after
    ``delay`` seconds. A result is handed to ``on_result`` only while its
    submission is still the latest, so a superseded render is never shown.

    Args:
        render: ``render(custom_text)``, called synchronously on the event loop
        on_result: Receives the latest render result; may be a coroutine function
        delay: Quiet period in seconds before rendering
    """

    def __init__(self, render: Callable[[Optional[str]], Any], on_result: Callable[[Any], Any], delay: Optional[float] = None):
        self.render = render
        self.on_result = on_result
        self.delay = NEWSLETTER_SETTINGS['debounce_seconds'] if delay is None else delay
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, custom_text: Optional[str]) -> None:
        """Schedule a render of ``custom_text``; must be called on the running loop."""
        self._generation += 1
        if self.pending:
            self._task.cancel()
        self._task = asyncio.create_task(self._run(self._generation, custom_text))

    async def _run(self, generation: int, custom_text: Optional[str]) -> None:
        await asyncio.sleep(self.delay)
        try:
            result = self.render(custom_text)
        except Exception as e:
            # The last published result stays on display
            logger.error(f"Render {generation} failed: {str(e)}", exc_info=True)
            return

        if generation != self._generation:
            logger.debug(f"Discarding superseded render {generation}")
            return
        published = self.on_result(result)
        if asyncio.iscoroutine(published):
            await published

    async def flush(self) -> None:
        """Wait until the latest submission has been rendered and published."""
        while self.pending:
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                # Superseded by a newer submit; wait for that one instead
                if task is self._task:
                    raise

    def cancel(self) -> None:
        """Drop the pending render, if any."""
        self._generation += 1
        if self.pending:
            self._task.cancel()
        self._task = None
