"""Preview delivery for rendered newsletters."""
import smtplib
import ssl
import time
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr, formatdate
from socket import error as socket_error
from typing import Any, Dict, Optional
import certifi
from campus_newsletter.config.settings import EMAIL_SETTINGS
from campus_newsletter.core.errors import SinkError
from campus_newsletter.formatting.text_utils import to_plain_text
from campus_newsletter.logging_cfg.logger import setup_logger

# Set up logger
logger = setup_logger()

# Constants for retry settings
MAX_RETRIES = 3
RETRY_DELAY = 5
SMTP_TIMEOUT = 30


def create_secure_smtp_context():
    """Create a secure SSL context for SMTP"""
    context = ssl.create_default_context(
        purpose=ssl.Purpose.SERVER_AUTH,
        cafile=certifi.where()
    )
    context.verify_mode = ssl.CERT_REQUIRED
    return context


def create_smtp_connection(smtp_settings: Dict[str, Any], retry_delay: float = RETRY_DELAY):
    """Create and configure SMTP connection with retry logic"""
    retry_count = 0
    while True:
        try:
            context = create_secure_smtp_context()
            server = smtplib.SMTP(
                smtp_settings['smtp_server'],
                smtp_settings['smtp_port'],
                timeout=SMTP_TIMEOUT
            )
            server.starttls(context=context)
            if smtp_settings.get('smtp_username'):
                server.login(smtp_settings['smtp_username'], smtp_settings['smtp_password'])
            return server
        except (socket_error, smtplib.SMTPException) as e:
            retry_count += 1
            if retry_count >= MAX_RETRIES:
                raise
            logger.warning(f"SMTP connection attempt {retry_count} failed: {str(e)}")
            time.sleep(retry_delay)


def build_message(
    subject: str,
    html: str,
    plain_text: Optional[str],
    sender: str,
    sender_name: str,
    recipient: str,
) -> MIMEMultipart:
    """multipart/alternative message with the plain-text part first."""
    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = formataddr((sender_name, sender))
    msg['To'] = recipient
    msg['Date'] = formatdate(localtime=True)

    # Clients show the last alternative they understand
    msg.attach(MIMEText(plain_text if plain_text is not None else to_plain_text(html), 'plain', 'utf-8'))
    msg.attach(MIMEText(html, 'html', 'utf-8'))
    return msg


class SmtpPreviewSender:
    """Mails a preview of the newsletter to a single recipient over SMTP."""

    def __init__(
        self,
        settings: Optional[Dict[str, Any]] = None,
        recipient: Optional[str] = None,
        retry_delay: float = RETRY_DELAY,
    ):
        self.settings = dict(EMAIL_SETTINGS)
        if settings:
            self.settings.update(settings)
        self.recipient = recipient or self.settings.get('preview_recipient')
        self.retry_delay = retry_delay

    def _check_settings(self) -> None:
        missing = [
            key for key in ('smtp_server', 'sender_email')
            if not self.settings.get(key)
        ]
        if not self.recipient:
            missing.append('preview_recipient')
        if missing:
            raise SinkError(f"SMTP preview is not configured; missing {', '.join(missing)}")

    def send(self, subject: str, html: str, plain_text: Optional[str] = None) -> None:
        self._check_settings()
        msg = build_message(
            subject,
            html,
            plain_text,
            sender=self.settings['sender_email'],
            sender_name=self.settings.get('sender_name') or self.settings['sender_email'],
            recipient=self.recipient,
        )

        server = None
        try:
            server = create_smtp_connection(self.settings, self.retry_delay)
            server.send_message(msg)
            logger.info(f"Preview email '{subject}' sent to {self.recipient}")
        except (socket_error, smtplib.SMTPException) as e:
            logger.error(f"Failed to send preview email: {str(e)}")
            raise
        finally:
            if server:
                server.quit()


class ApiPreviewSender:
    """Asks the Campus Life API to mail the preview to the logged-in account."""

    def __init__(self, client):
        self.client = client

    def send(self, subject: str, html: str, plain_text: Optional[str] = None) -> None:
        # The server builds its own plain-text part
        self.client.send_preview_email(subject, html)
