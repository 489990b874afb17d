"""Markdown transformation backed by markdown-it-py."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from .config import EditorConfig
from .exceptions import TransformError
from .models import ParseEvent

# Inline token types whose content counts as heading text; inline code does not.
TEXT_TOKEN_TYPES = frozenset({"text"})


def heading_level(token: Token) -> int:
    """Return the numeric level of a ``heading_open`` token (``"h2"`` -> 2)."""
    return int(token.tag[1:])


def iter_events(tokens: Sequence[Token]) -> Iterator[ParseEvent]:
    """Flatten markdown-it block tokens into parse events.

    Block tokens become top-level events. The children of ``inline`` tokens
    follow their parent as nested events: they are visible to observers but
    reach HTML emission through the parent token.

    Args:
        tokens: Block-level token stream from `MarkdownIt.parse`.

    Yields:
        ParseEvent: Events in document order.

    Examples:
        list(iter_events(MarkdownIt().parse("# Title")))
    """
    for token in tokens:
        if token.type == "heading_open":
            yield ParseEvent.heading_start(heading_level(token), token=token)
        elif token.type == "heading_close":
            yield ParseEvent.heading_end(token=token)
        else:
            yield ParseEvent.other(token=token)

        if token.type == "inline" and token.children:
            yield from _iter_inline_events(token.children)


def _iter_inline_events(children: Sequence[Token]) -> Iterator[ParseEvent]:
    # images keep their alt text in their own children
    for child in children:
        if child.type in TEXT_TOKEN_TYPES:
            yield ParseEvent.text_fragment(child.content, token=child, nested=True)
        else:
            yield ParseEvent.other(token=child, nested=True)
        if child.children:
            yield from _iter_inline_events(child.children)


class MarkdownTransformer:
    """Parse Markdown into events and emit HTML from forwarded events.

    Args:
        config: Editor configuration; controls raw HTML passthrough.
    """

    def __init__(self, config: EditorConfig | None = None):
        config = config or EditorConfig()
        self._md = MarkdownIt("commonmark", {"html": config.allow_html}).enable(
            ["table", "strikethrough"]
        )

    def parse(self, content: str) -> list[Token]:
        try:
            return self._md.parse(content)
        except Exception as error:
            raise TransformError(f"Could not parse document: {error}") from error

    def events(self, content: str) -> Iterator[ParseEvent]:
        """Yield parse events for `content`.

        Raises:
            TransformError: If markdown-it fails on the document.
        """
        yield from iter_events(self.parse(content))

    def emit(self, events: Iterable[ParseEvent]) -> str:
        """Render HTML from an event stream produced by `events`.

        The stream is consumed completely before rendering starts, so any
        observer tapping it sees every event first.

        Raises:
            TransformError: If an event carries no token or rendering fails.
        """
        tokens: list[Token] = []
        for event in events:
            if event.nested:
                continue
            if not isinstance(event.token, Token):
                raise TransformError(f"Event without a markdown-it token: {event!r}")
            tokens.append(event.token)

        try:
            return self._md.renderer.render(tokens, self._md.options, {})
        except Exception as error:
            raise TransformError(f"Could not render document: {error}") from error

    def render(self, content: str) -> str:
        return self.emit(self.events(content))
