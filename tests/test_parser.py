from __future__ import annotations

import pytest
from markdown_it import MarkdownIt

from markdown_pane.config import EditorConfig
from markdown_pane.exceptions import TransformError
from markdown_pane.models import EventKind, HeadingLevel, ParseEvent
from markdown_pane.parser import MarkdownTransformer, iter_events


def _kinds(events):
    return [(event.kind, event.nested) for event in events]


def test_iter_events_flattens_heading_and_paragraph():
    events = list(iter_events(MarkdownIt("commonmark").parse("# Title\n\nPara\n")))

    assert _kinds(events) == [
        (EventKind.HEADING_START, False),
        (EventKind.OTHER, False),
        (EventKind.TEXT, True),
        (EventKind.HEADING_END, False),
        (EventKind.OTHER, False),
        (EventKind.OTHER, False),
        (EventKind.TEXT, True),
        (EventKind.OTHER, False),
    ]
    assert events[0].level is HeadingLevel.H1
    assert events[2].text == "Title"


def test_events_split_emphasis_into_text_runs():
    transformer = MarkdownTransformer()

    texts = [
        event.text for event in transformer.events("## Hello *big* world\n") if event.kind is EventKind.TEXT
    ]

    assert texts == ["Hello ", "big", " world"]


def test_inline_code_is_not_heading_text():
    transformer = MarkdownTransformer()

    texts = [event.text for event in transformer.events("### The `render` call\n") if event.text]

    assert texts == ["The ", " call"]


def test_image_alt_text_is_reported_as_nested_text():
    events = list(MarkdownTransformer().events("# Logo ![badge](x.png) Title\n"))

    texts = [(event.text, event.nested) for event in events if event.kind is EventKind.TEXT]
    assert texts == [("Logo ", True), ("badge", True), (" Title", True)]


def test_setext_headings_are_reported():
    events = list(MarkdownTransformer().events("Title\n=====\n\nSub\n---\n"))

    levels = [event.level for event in events if event.kind is EventKind.HEADING_START]
    assert levels == [HeadingLevel.H1, HeadingLevel.H2]


def test_headings_inside_code_blocks_are_not_events():
    events = list(MarkdownTransformer().events("```\n# not a heading\n```\n"))

    assert not [event for event in events if event.kind is EventKind.HEADING_START]


def test_emit_round_trips_forwarded_events():
    transformer = MarkdownTransformer()

    html = transformer.emit(transformer.events("# Title\n\nSome *text*\n"))

    assert html == "<h1>Title</h1>\n<p>Some <em>text</em></p>\n"


def test_emit_rejects_events_without_tokens():
    with pytest.raises(TransformError):
        MarkdownTransformer().emit([ParseEvent.other()])


def test_raw_html_passthrough_is_configurable():
    content = "<div>raw</div>\n"

    assert "<div>raw</div>" in MarkdownTransformer().render(content)
    assert "&lt;div&gt;" in MarkdownTransformer(EditorConfig(allow_html=False)).render(content)


def test_tables_and_strikethrough_are_enabled():
    html = MarkdownTransformer().render("| a |\n|---|\n| b |\n\n~~gone~~\n")

    assert "<table>" in html
    assert "<s>gone</s>" in html
