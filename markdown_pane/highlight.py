"""Syntax highlighting of committed code blocks with Pygments."""

from __future__ import annotations

import html
import re

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from .view import PreviewView

HIGHLIGHT_CSS_CLASS = "highlight"

# Plain blocks as emitted by markdown-it; highlighted blocks no longer match.
CODE_BLOCK_PATTERN = re.compile(
    r'<pre><code(?: class="language-(?P<lang>[^"\s]+)")?>(?P<code>.*?)</code></pre>',
    re.DOTALL,
)


def _lexer_for(lang: str | None, code: str) -> Lexer:
    if lang:
        try:
            return get_lexer_by_name(lang)
        except ClassNotFound:
            return TextLexer()
    try:
        return guess_lexer(code)
    except ClassNotFound:
        return TextLexer()


def highlight_html(body_html: str, style: str = "default") -> str:
    """Replace plain ``<pre><code>`` blocks with Pygments markup.

    Unknown languages fall back to plain text. Running it again on its own
    output changes nothing.

    Args:
        body_html: Rendered document body.
        style: Pygments style name.

    Returns:
        str: Body HTML with highlighted code blocks.

    Examples:
        highlight_html('<pre><code class="language-python">x = 1\\n</code></pre>')
    """
    formatter = HtmlFormatter(cssclass=HIGHLIGHT_CSS_CLASS, style=style)

    def _replace(match: re.Match[str]) -> str:
        code = html.unescape(match.group("code"))
        return highlight(code, _lexer_for(match.group("lang"), code), formatter)

    return CODE_BLOCK_PATTERN.sub(_replace, body_html)


def highlight_all(view: PreviewView, style: str = "default") -> bool:
    """Highlight the code blocks currently committed to `view`, in place.

    Returns:
        bool: True when the view was updated.
    """
    revision = view.revision
    highlighted = highlight_html(view.body_html, style)
    if highlighted == view.body_html:
        return False
    return view.replace_body(highlighted, revision)


def stylesheet(style: str = "default") -> str:
    """CSS rules for highlighted blocks."""
    return HtmlFormatter(cssclass=HIGHLIGHT_CSS_CLASS, style=style).get_style_defs(
        f".{HIGHLIGHT_CSS_CLASS}"
    )
