"""Tests for HTML escaping and plain-text projection."""
import unittest
from campus_newsletter.formatting.text_utils import (
    escape_html,
    nl2br,
    split_paragraphs,
    to_plain_text
)


class TestEscaping(unittest.TestCase):
    def test_escape_html(self):
        self.assertEqual(str(escape_html('<a href="x">Tom & Jerry\'s</a>')),
                         '&lt;a href=&#34;x&#34;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;')
        self.assertEqual(str(escape_html(None)), '')

    def test_nl2br_escapes_each_line(self):
        self.assertEqual(str(nl2br('a < b\r\nc & d')), 'a &lt; b<br />c &amp; d')

    def test_split_paragraphs(self):
        self.assertEqual(split_paragraphs('Line one\n\nLine two\n'), ['Line one', 'Line two'])
        self.assertEqual(split_paragraphs('  \n\t\n'), [])
        self.assertEqual(split_paragraphs(None), [])


class TestToPlainText(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(to_plain_text(''), '')

    def test_blocks_and_line_breaks(self):
        html = """
        <html><head><title>Subject</title><style>.x { color: red; }</style></head>
        <body>
          <div class="preheader">Hidden preview</div>
          <h2>Events</h2>
          <p>First   line<br/>second
             line</p>
          <p>Tom &amp; Jerry</p>
          <script>var x = 1;</script>
        </body></html>
        """
        self.assertEqual(to_plain_text(html), 'Events\n\nFirst line\nsecond line\n\nTom & Jerry')

    def test_conditional_comments_are_dropped(self):
        html = (
            '<body><!--[if mso]><table><tr><td>Legacy</td></tr></table><![endif]-->'
            '<!--[if !mso]><!--><div><p>Modern</p></div><!--<![endif]--></body>'
        )
        self.assertEqual(to_plain_text(html), 'Modern')

    def test_doctype_is_dropped(self):
        html = '<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" "x.dtd"><html><body><p>Hi</p></body></html>'
        self.assertEqual(to_plain_text(html), 'Hi')

    def test_no_markup_leaks(self):
        text = to_plain_text('<div><p class="a" style="b">x &lt;tag&gt;</p><table><tr><td>y</td></tr></table></div>')
        self.assertEqual(text, 'x <tag>\n\ny')


if __name__ == '__main__':
    unittest.main()
