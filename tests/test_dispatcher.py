"""Tests for the output sinks."""
import os
import smtplib
import tempfile
import unittest
from unittest.mock import MagicMock, patch
from datetime import datetime
from dateutil import tz
from campus_newsletter.core.errors import ApiError, SinkError
from campus_newsletter.core.types import RenderedDocument
from campus_newsletter.email.sender import ApiPreviewSender
from campus_newsletter.output.dispatcher import OutputDispatcher, SystemClipboard

BERLIN = tz.gettz('Europe/Berlin')


def make_document():
    return RenderedDocument(
        html='<html><body><p>Hallo &amp; willkommen</p></body></html>',
        plain_text='Hallo & willkommen',
        subject='Campus Life Newsletter - KW 43',
        primary_week_start=datetime(2025, 10, 20, tzinfo=BERLIN),
    )


class TestDownload(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def test_writes_named_utf8_file(self):
        dispatcher = OutputDispatcher(os.path.join(self.tmp.name, 'out'), clipboard=MagicMock())
        document = make_document()

        result = dispatcher.download(document)

        self.assertTrue(result.ok)
        self.assertEqual(result.mime_type, 'text/html')
        self.assertEqual(os.path.basename(result.path), 'campus-life-newsletter-2025-10-20.html')
        with open(result.path, encoding='utf-8') as f:
            self.assertEqual(f.read(), document.html)

    @patch('campus_newsletter.output.dispatcher.logger')
    def test_write_failure_is_reported(self, mock_logger):
        dispatcher = OutputDispatcher(self.tmp.name, clipboard=MagicMock())
        with patch('builtins.open', side_effect=PermissionError('read-only')):
            result = dispatcher.download(make_document())

        self.assertFalse(result.ok)
        self.assertIn('read-only', result.error)
        mock_logger.error.assert_called_once()


class TestClipboard(unittest.IsolatedAsyncioTestCase):
    async def test_dual_payload(self):
        clipboard = MagicMock()
        dispatcher = OutputDispatcher('unused', clipboard=clipboard)
        document = make_document()

        result = await dispatcher.copy_to_clipboard(document)

        self.assertTrue(result.ok)
        clipboard.write.assert_called_once_with({
            'text/html': document.html,
            'text/plain': document.plain_text,
        })

    async def test_async_clipboard(self):
        written = []

        class AsyncClipboard:
            async def write(self, payload):
                written.append(payload)

        result = await OutputDispatcher('unused', clipboard=AsyncClipboard()).copy_to_clipboard(make_document())
        self.assertTrue(result.ok)
        self.assertEqual(len(written), 1)

    @patch('campus_newsletter.output.dispatcher.logger')
    async def test_failure_is_reported_not_raised(self, mock_logger):
        clipboard = MagicMock()
        clipboard.write.side_effect = SinkError('Clipboard unavailable: no display')
        dispatcher = OutputDispatcher('unused', clipboard=clipboard)

        result = await dispatcher.copy_to_clipboard(make_document())

        self.assertFalse(result.ok)
        self.assertEqual(result.sink, 'clipboard')
        self.assertIn('no display', result.error)
        mock_logger.error.assert_called_once()

    @patch('campus_newsletter.output.dispatcher.klembord')
    async def test_system_clipboard_gets_both_representations(self, mock_klembord):
        document = make_document()

        result = await OutputDispatcher('unused').copy_to_clipboard(document)

        self.assertTrue(result.ok)
        mock_klembord.init.assert_called_once()
        mock_klembord.set_with_rich_text.assert_called_once_with(document.plain_text, document.html)
        # Plain-text targets never see markup
        plain = mock_klembord.set_with_rich_text.call_args[0][0]
        self.assertNotIn('<p>', plain)

    @patch('campus_newsletter.output.dispatcher.klembord')
    def test_system_clipboard_initializes_once(self, mock_klembord):
        clipboard = SystemClipboard()
        clipboard.write({'text/html': '<p>x</p>', 'text/plain': 'x'})
        clipboard.write({'text/html': '<p>y</p>', 'text/plain': 'y'})

        mock_klembord.init.assert_called_once()
        self.assertEqual(mock_klembord.set_with_rich_text.call_count, 2)

    @patch('campus_newsletter.output.dispatcher.logger')
    @patch('campus_newsletter.output.dispatcher.klembord')
    async def test_missing_display_is_reported(self, mock_klembord, mock_logger):
        mock_klembord.init.side_effect = RuntimeError('Can\'t connect to display ":0"')

        result = await OutputDispatcher('unused').copy_to_clipboard(make_document())

        self.assertFalse(result.ok)
        self.assertIn('Clipboard unavailable', result.error)
        mock_logger.error.assert_called_once()


class TestPreview(unittest.IsolatedAsyncioTestCase):
    async def test_sends_subject_and_html(self):
        sender = MagicMock()
        dispatcher = OutputDispatcher('unused', clipboard=MagicMock(), preview_sender=sender)
        document = make_document()

        result = await dispatcher.send_preview(document)

        self.assertTrue(result.ok)
        sender.send.assert_called_once_with(document.subject, document.html, document.plain_text)

    async def test_api_sender(self):
        client = MagicMock()
        dispatcher = OutputDispatcher('unused', clipboard=MagicMock(), preview_sender=ApiPreviewSender(client))
        document = make_document()

        result = await dispatcher.send_preview(document)

        self.assertTrue(result.ok)
        client.send_preview_email.assert_called_once_with(document.subject, document.html)

    @patch('campus_newsletter.output.dispatcher.logger')
    async def test_api_failure_is_reported(self, mock_logger):
        client = MagicMock()
        client.send_preview_email.side_effect = ApiError('Mailversand fehlgeschlagen', status_code=502)
        dispatcher = OutputDispatcher('unused', clipboard=MagicMock(), preview_sender=ApiPreviewSender(client))
        document = make_document()

        result = await dispatcher.send_preview(document)

        self.assertFalse(result.ok)
        self.assertEqual(result.error, 'Mailversand fehlgeschlagen')
        # The document is still usable for other sinks
        clipboard_result = await dispatcher.copy_to_clipboard(document)
        self.assertTrue(clipboard_result.ok)

    @patch('campus_newsletter.output.dispatcher.logger')
    async def test_smtp_failure_is_reported(self, mock_logger):
        sender = MagicMock()
        sender.send.side_effect = smtplib.SMTPAuthenticationError(535, b'bad credentials')
        dispatcher = OutputDispatcher('unused', clipboard=MagicMock(), preview_sender=sender)

        result = await dispatcher.send_preview(make_document())
        self.assertFalse(result.ok)

    @patch('campus_newsletter.output.dispatcher.logger')
    async def test_missing_sender(self, mock_logger):
        result = await OutputDispatcher('unused', clipboard=MagicMock()).send_preview(make_document())
        self.assertFalse(result.ok)


if __name__ == '__main__':
    unittest.main()
