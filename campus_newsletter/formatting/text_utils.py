"""Text processing utilities."""
import re
from typing import List, Optional
from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, NavigableString
from markupsafe import Markup, escape

# Elements that start a new line in the plain-text projection
BLOCK_TAGS = [
    'p', 'div', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'li', 'ul', 'ol', 'table', 'tr', 'td', 'th', 'section', 'blockquote',
]


def escape_html(text: Optional[str]) -> Markup:
    """Entity-escape ``&``, ``<``, ``>``, ``"`` and ``'``.

    This is the same MarkupSafe escape Jinja's autoescaping applies, so text
    escaped here and text interpolated by the templates always agree.
    """
    return escape(text or '')


def nl2br(text: Optional[str]) -> Markup:
    """Escape ``text`` and turn its line breaks into ``<br />`` tags."""
    lines = (text or '').replace('\r\n', '\n').split('\n')
    return Markup('<br />').join(escape_html(line) for line in lines)


def split_paragraphs(text: Optional[str]) -> List[str]:
    """One entry per non-blank line of ``text``, stripped."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def to_plain_text(html: str) -> str:
    """
    Convert HTML to readable plain text.

    Head, styles, scripts, comments (including Outlook conditional branches)
    and the hidden preheader are dropped. Block elements end up on their own
    lines and paragraphs are separated by a blank line.

    Args:
        html: HTML content to convert

    Returns:
        Plain text version of the HTML content
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, 'html.parser')

    for node in soup.find_all(string=lambda s: isinstance(s, (Comment, Declaration, Doctype))):
        node.extract()
    for element in soup(['head', 'style', 'script', 'title']):
        element.decompose()
    for element in soup.select('.preheader'):
        element.decompose()

    # Source formatting whitespace carries no meaning; line breaks come from
    # <br> and block elements only
    for node in soup.find_all(string=True):
        if type(node) is NavigableString:
            node.replace_with(re.sub(r'\s+', ' ', str(node)))

    for br in soup.find_all('br'):
        br.replace_with('\n')
    for element in soup.find_all(BLOCK_TAGS):
        element.insert_before('\n\n')
        element.insert_after('\n\n')

    text = soup.get_text()

    # Trim every line, then collapse runs of blank lines
    lines = [line.strip() for line in text.splitlines()]
    text = '\n'.join(lines)
    text = re.sub(r'\n{3,}', '\n\n', text)

    return text.strip()
