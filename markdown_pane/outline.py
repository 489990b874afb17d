"""Table of contents generation from parse events."""

from __future__ import annotations

import html
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .constants import TOC_LINK_HOVER_CLASS, TOC_LIST_CLOSE, TOC_LIST_OPEN, TOC_PREFIX_CLASS
from .models import (
    BuilderContext,
    BuilderState,
    EventKind,
    HeadingLevel,
    ParseEvent,
    TocEntry,
)
from .slugify import AnchorRegistry, generate_slug


@dataclass(frozen=True)
class LevelStyle:
    """Presentation metadata for one heading level.

    Attributes:
        item_class: Classes on the ``<li>`` element (indent).
        link_class: Classes on the ``<a>`` element (weight and colour).
        prefix: Glyph shown before the link, empty for none.
    """

    item_class: str
    link_class: str
    prefix: str = ""


TOP_LEVEL_STYLE = LevelStyle(
    item_class="mt-3",
    link_class="font-semibold text-sm text-gray-800 dark:text-gray-200",
)
SECONDARY_STYLE = LevelStyle(
    item_class="mt-1",
    link_class="text-sm text-gray-600 dark:text-gray-400",
)
NESTED_STYLE = LevelStyle(
    item_class="mt-1 ml-4",
    link_class="text-sm text-gray-600 dark:text-gray-400",
    prefix=">",
)


def level_style(level: HeadingLevel) -> LevelStyle:
    """Return the style for a heading level; H3 and deeper share one style."""
    if level == HeadingLevel.H1:
        return TOP_LEVEL_STYLE
    if level == HeadingLevel.H2:
        return SECONDARY_STYLE
    return NESTED_STYLE


def render_toc_entry(level: HeadingLevel, text: str, anchor: str) -> str:
    """Render the ``<li>`` markup for one outline entry.

    Args:
        level: Heading level, used to pick the style.
        text: Heading text; HTML-escaped in the output.
        anchor: Fragment identifier the entry links to.

    Returns:
        str: A single ``<li>`` element.

    Examples:
        render_toc_entry(HeadingLevel.H2, "Usage", "usage")
    """
    style = level_style(level)
    prefix_span = ""
    if style.prefix:
        prefix_span = f'<span class="{TOC_PREFIX_CLASS}">{html.escape(style.prefix)}</span>'

    return (
        f'<li class="flex items-center {style.item_class}">'
        f"{prefix_span}"
        f'<a href="#{html.escape(anchor)}" class="{TOC_LINK_HOVER_CLASS} {style.link_class}">'
        f"{html.escape(text, quote=False)}</a></li>"
    )


def join_toc_markup(entries: Iterable[TocEntry]) -> str:
    """Wrap rendered entries into the outline list."""
    return TOC_LIST_OPEN + "".join(entry.rendered_markup for entry in entries) + TOC_LIST_CLOSE


class OutlineBuilder:
    """Accumulate headings from a stream of parse events.

    The builder is a two-state machine. A heading start opens an accumulation
    buffer, text fragments are appended to it verbatim, and a heading end
    closes it into a `TocEntry`. Everything else is ignored, including a
    heading end with no open heading.

    Args:
        registry: Anchors already used in the document. A fresh one is made
            when omitted.
        ascii_anchors: Fold anchors to ASCII.
    """

    def __init__(self, registry: AnchorRegistry | None = None, ascii_anchors: bool = False):
        self.registry = registry if registry is not None else AnchorRegistry()
        self.ascii_anchors = ascii_anchors
        self.ctx = BuilderContext()
        self._entries: list[TocEntry] = []

    @property
    def entries(self) -> tuple[TocEntry, ...]:
        return tuple(self._entries)

    def observe(self, event: ParseEvent) -> ParseEvent:
        """Feed one event to the state machine and return it unchanged."""
        if event.kind is EventKind.HEADING_START:
            self._open_heading(event.level or HeadingLevel.H1)
        elif event.kind is EventKind.TEXT:
            self._append_text(event.text or "")
        elif event.kind is EventKind.HEADING_END:
            self._close_heading()
        return event

    def tap(self, events: Iterable[ParseEvent]) -> Iterator[ParseEvent]:
        """Observe each event on its way through, yielding it unmodified.

        Examples:
            html = transformer.emit(builder.tap(transformer.events(content)))
        """
        for event in events:
            yield self.observe(event)

    def toc_markup(self) -> str:
        return join_toc_markup(self._entries)

    def _open_heading(self, level: HeadingLevel) -> None:
        # a nested start restarts the open heading
        self.ctx.state = BuilderState.ACCUMULATING
        self.ctx.level = level
        self.ctx.buffer = ""

    def _append_text(self, fragment: str) -> None:
        if self.ctx.state is not BuilderState.ACCUMULATING:
            return
        self.ctx.buffer += fragment

    def _close_heading(self) -> None:
        if self.ctx.state is not BuilderState.ACCUMULATING or self.ctx.level is None:
            return

        level, text = self.ctx.level, self.ctx.buffer
        anchor = generate_slug(text, self.registry, ascii_only=self.ascii_anchors)
        self._entries.append(
            TocEntry(
                level=level,
                text=text,
                anchor=anchor,
                rendered_markup=render_toc_entry(level, text, anchor),
            )
        )

        self.ctx.state = BuilderState.IDLE
        self.ctx.level = None
        self.ctx.buffer = ""


def build_outline(
    events: Iterable[ParseEvent], ascii_anchors: bool = False
) -> tuple[TocEntry, ...]:
    """Build outline entries from a complete event stream.

    Args:
        events: Parse events in document order.
        ascii_anchors: Fold anchors to ASCII.

    Returns:
        tuple[TocEntry, ...]: Entries in heading order, with unique anchors.

    Examples:
        build_outline([ParseEvent.heading_start(1), ParseEvent.text_fragment("Intro"),
                       ParseEvent.heading_end()])
    """
    builder = OutlineBuilder(ascii_anchors=ascii_anchors)
    for event in events:
        builder.observe(event)
    return builder.entries
