"""
Campus Life Newsletter Command Line Interface.

This module ties the compiler together for use from a terminal:
1. Week window resolution
2. Event and organizer loading from the Campus Life API
3. Newsletter rendering (HTML and plain text)
4. Output to file, clipboard and preview email

Dates are shown in the display timezone (Europe/Berlin unless DISPLAY_TIMEZONE
says otherwise).

Example Usage:
    # Compile the newsletter for next week
    python -m campus_newsletter render

    # Compile the issue sent in calendar week 42 of 2025 with announcements,
    # copy it and mail a preview
    python -m campus_newsletter render --year 2025 --week 42 \\
        --text-file announcements.txt --copy --send-preview api

Environment Variables:
    CAMPUS_LIFE_API_URL: Base URL of the Campus Life API
    CAMPUS_LIFE_API_TOKEN: Bearer token for the API
    CAMPUS_LIFE_SESSION_COOKIE: Session cookie, as an alternative to the token
    CAMPUS_LIFE_PREVIEW_PATH: Preview mail endpoint of the deployment
    DISPLAY_TIMEZONE: Timezone dates are rendered in
    SMTP_SERVER, SMTP_PORT, SMTP_USERNAME, SMTP_PASSWORD, SMTP_EMAIL: SMTP preview
    PREVIEW_RECIPIENT: Recipient of SMTP previews

For detailed configuration options, see config/settings.py
"""
# Standard library imports
import asyncio
import sys
import time

# Third-party imports
import click

# Local imports
from campus_newsletter.api.client import CampusLifeClient
from campus_newsletter.compose.pipeline import render_newsletter_document
from campus_newsletter.config.settings import NEWSLETTER_SETTINGS
from campus_newsletter.core.constants import RenderTarget
from campus_newsletter.core.errors import NewsletterError
from campus_newsletter.core.weeks import WeekSelector, resolve_window
from campus_newsletter.email.sender import ApiPreviewSender, SmtpPreviewSender
from campus_newsletter.logging_cfg.logger import setup_logger
from campus_newsletter.output.dispatcher import OutputDispatcher

# Set up logger
logger = setup_logger()


def _selector(year, week):
    if year is None and week is None:
        return None
    if year is None or week is None:
        raise click.UsageError("--year and --week must be given together")
    return WeekSelector(year=year, iso_week=week)


def _report(result):
    if result.ok:
        target = f" -> {result.path}" if result.path else ""
        click.echo(f"{result.sink}: ok{target}")
    else:
        click.echo(f"{result.sink}: failed ({result.error})", err=True)
    return result.ok


async def _deliver(dispatcher, document, copy, send_preview):
    results = []
    if copy:
        results.append(await dispatcher.copy_to_clipboard(document))
    if send_preview:
        results.append(await dispatcher.send_preview(document))
    return results


@click.group()
def cli():
    """Compile the weekly Campus Life newsletter."""


@cli.command()
@click.option('--year', type=int, help='ISO year of the issue week')
@click.option('--week', type=int, help='ISO calendar week the newsletter is sent in; it covers the following week')
@click.option('--text-file', type=click.File('r', encoding='utf-8'),
              help='Announcement text, one paragraph per line')
@click.option('--target', type=click.Choice([t.value for t in RenderTarget]),
              default=RenderTarget.HYBRID.value, show_default=True,
              help='Mail client family to render for')
@click.option('--output-dir', type=click.Path(file_okay=False),
              default=lambda: NEWSLETTER_SETTINGS['output_dir'], show_default='NEWSLETTER_OUTPUT_DIR',
              help='Directory the HTML file is written to')
@click.option('--copy', is_flag=True, help='Copy the newsletter to the clipboard')
@click.option('--send-preview', type=click.Choice(['api', 'smtp']),
              help='Mail a preview through the API or directly over SMTP')
def render(year, week, text_file, target, output_dir, copy, send_preview):
    """Render a newsletter issue and save it as HTML."""
    start_time = time.time()
    selector = _selector(year, week)
    custom_text = text_file.read() if text_file else None

    with CampusLifeClient.from_settings() as client:
        try:
            document = render_newsletter_document(selector, custom_text, client=client, target=target)
        except NewsletterError as e:
            logger.error(f"Newsletter compilation failed: {e}")
            raise click.ClickException(str(e))

        preview_sender = None
        if send_preview == 'api':
            preview_sender = ApiPreviewSender(client)
        elif send_preview == 'smtp':
            preview_sender = SmtpPreviewSender()

        dispatcher = OutputDispatcher(output_dir, preview_sender=preview_sender)
        results = [dispatcher.download(document)]
        results.extend(asyncio.run(_deliver(dispatcher, document, copy, send_preview)))

    ok = all([_report(result) for result in results])
    logger.info(f"Finished '{document.subject}' in {time.time() - start_time:.2f}s")
    if not ok:
        sys.exit(1)


@cli.command()
@click.option('--year', type=int, help='ISO year')
@click.option('--week', type=int, help='ISO calendar week of the issue')
def week(year, week):
    """Show the week windows a newsletter would cover."""
    try:
        window = resolve_window(_selector(year, week))
    except NewsletterError as e:
        raise click.ClickException(str(e))

    click.echo(f"KW {window.primary_week}: {window.primary_start:%Y-%m-%d %H:%M %Z} - {window.primary_end:%Y-%m-%d %H:%M %Z}")
    click.echo(f"KW {window.secondary_week} (Ausblick): {window.secondary_start:%Y-%m-%d %H:%M %Z} - {window.secondary_end:%Y-%m-%d %H:%M %Z}")


def main():
    """Main entry point for the CLI"""
    cli(prog_name='campus-newsletter')


if __name__ == "__main__":
    main()
