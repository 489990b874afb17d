from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from markdown_pane.models import ParseEvent
from markdown_pane.outline import build_outline
from markdown_pane.pipeline import RenderPipeline, render_document
from markdown_pane.slugify import AnchorRegistry, generate_slug, slug_candidate


@given(st.text())
def test_slug_candidate_keeps_only_alphanumerics_and_hyphens(title: str):
    candidate = slug_candidate(title)
    assert all(character.isalnum() or character == "-" for character in candidate)
    assert " " not in candidate


@given(st.text())
def test_ascii_candidate_is_ascii(title: str):
    slug_candidate(title, ascii_only=True).encode("ascii")


@given(st.lists(st.text(max_size=12), max_size=30))
def test_registry_hands_out_unique_anchors(titles: list[str]):
    registry = AnchorRegistry()

    anchors = [generate_slug(title, registry) for title in titles]

    assert len(set(anchors)) == len(titles)


title_strategy = st.text(
    alphabet=string.ascii_letters + string.digits + " _-!,",
    min_size=0,
    max_size=24,
)


@given(
    st.lists(
        st.tuples(st.integers(min_value=1, max_value=6), title_strategy), min_size=1, max_size=20
    )
)
def test_outline_has_one_unique_entry_per_heading_in_order(data):
    events = []
    for level, title in data:
        events += [
            ParseEvent.heading_start(level),
            ParseEvent.text_fragment(title),
            ParseEvent.heading_end(),
            ParseEvent.other(),
        ]

    entries = build_outline(events)

    assert [(int(entry.level), entry.text) for entry in entries] == data
    assert len({entry.anchor for entry in entries}) == len(data)


@given(st.text(max_size=300))
def test_render_is_total_and_deterministic(content: str):
    first = render_document(content)
    second = render_document(content)

    assert first == second
    assert first.toc_markup.startswith('<ul class="list-none pl-0">')


@given(st.text(max_size=200))
def test_memoized_render_returns_same_object(content: str):
    pipeline = RenderPipeline()

    assert pipeline.render(content) is pipeline.render(content)
    assert pipeline.recomputations == 1
