"""Data models for markdown-pane."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Any


class EventKind(Enum):
    """Kinds of parse events consumed by the outline builder.

    Attributes:
        HEADING_START: Opens a heading; carries its level.
        TEXT: A text fragment; carries the fragment.
        HEADING_END: Closes the currently open heading.
        OTHER: Any other event, opaque to the outline.
    """

    HEADING_START = auto()
    TEXT = auto()
    HEADING_END = auto()
    OTHER = auto()


class HeadingLevel(IntEnum):
    H1 = 1
    H2 = 2
    H3 = 3
    H4 = 4
    H5 = 5
    H6 = 6


@dataclass(frozen=True)
class ParseEvent:
    """A single event produced by the Markdown transformer.

    Attributes:
        kind: What the event represents.
        level: Heading level for ``HEADING_START`` events, otherwise None.
        text: Fragment for ``TEXT`` events, otherwise None.
        token: Opaque transformer payload forwarded to HTML emission.
        nested: True when the event belongs to an inline token's children and
            is emitted through its parent rather than on its own.
    """

    kind: EventKind
    level: HeadingLevel | None = None
    text: str | None = None
    token: Any = field(default=None, compare=False, repr=False)
    nested: bool = False

    @classmethod
    def heading_start(cls, level: int, token: Any = None) -> ParseEvent:
        return cls(EventKind.HEADING_START, level=HeadingLevel(level), token=token)

    @classmethod
    def heading_end(cls, token: Any = None) -> ParseEvent:
        return cls(EventKind.HEADING_END, token=token)

    @classmethod
    def text_fragment(cls, text: str, token: Any = None, nested: bool = False) -> ParseEvent:
        return cls(EventKind.TEXT, text=text, token=token, nested=nested)

    @classmethod
    def other(cls, token: Any = None, nested: bool = False) -> ParseEvent:
        return cls(EventKind.OTHER, token=token, nested=nested)


class BuilderState(Enum):
    """Outline builder states.

    Attributes:
        IDLE: Outside any heading.
        ACCUMULATING: Inside a heading, collecting its text.
    """

    IDLE = auto()
    ACCUMULATING = auto()


@dataclass
class BuilderContext:
    """Encapsulate outline builder state while walking parse events.

    Attributes:
        state: Current builder state.
        level: Level of the open heading, if any.
        buffer: Text accumulated for the open heading.
    """

    state: BuilderState = BuilderState.IDLE
    level: HeadingLevel | None = None
    buffer: str = ""


@dataclass(frozen=True)
class TocEntry:
    """One outline entry, in document order.

    Attributes:
        level: Heading level.
        text: Concatenated heading text.
        anchor: Unique fragment identifier within the document.
        rendered_markup: ``<li>`` markup for the TOC, styled per level.
    """

    level: HeadingLevel
    text: str
    anchor: str
    rendered_markup: str


@dataclass(frozen=True)
class RenderResult:
    """Structured result of rendering one document version.

    Attributes:
        toc_markup: Complete TOC list markup.
        body_html: HTML emitted by the Markdown transformer.
        entries: TOC entries the markup was built from.
    """

    toc_markup: str
    body_html: str
    entries: tuple[TocEntry, ...] = ()
