"""Render pipeline: one parse per document version, HTML and outline together."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Protocol

from .config import EditorConfig
from .constants import TOC_LIST_CLOSE, TOC_LIST_OPEN
from .models import ParseEvent, RenderResult
from .outline import OutlineBuilder
from .parser import MarkdownTransformer
from .slugify import AnchorRegistry

logger = logging.getLogger(__name__)

EMPTY_TOC = TOC_LIST_OPEN + TOC_LIST_CLOSE


class Transformer(Protocol):
    def events(self, content: str) -> Iterator[ParseEvent]: ...

    def emit(self, events: Iterable[ParseEvent]) -> str: ...


class RenderPipeline:
    """Render documents into a `RenderResult`, memoized on the content.

    Only the most recent content is remembered: rendering the same string
    again returns the cached result without touching the transformer, and
    any different string triggers a full recomputation.

    Args:
        config: Editor configuration.
        transformer: Markdown transformer. Defaults to `MarkdownTransformer`.
    """

    def __init__(self, config: EditorConfig | None = None, transformer: Transformer | None = None):
        self.config = config or EditorConfig()
        self.transformer = transformer or MarkdownTransformer(self.config)
        self._cached: tuple[str, RenderResult] | None = None
        self.recomputations = 0

    def render(self, content: str) -> RenderResult:
        """Return the render result for `content`.

        Never raises for transformer failures; those produce an empty outline
        and empty body.

        Examples:
            result = RenderPipeline().render("# Title")
            result.toc_markup
        """
        if self._cached is not None and self._cached[0] == content:
            return self._cached[1]

        result = self._compute(content)
        self._cached = (content, result)
        return result

    def invalidate(self) -> None:
        self._cached = None

    def _compute(self, content: str) -> RenderResult:
        self.recomputations += 1
        logger.debug("Rendering document (%d characters)", len(content))

        builder = OutlineBuilder(AnchorRegistry(), ascii_anchors=self.config.ascii_anchors)
        try:
            body_html = self.transformer.emit(builder.tap(self.transformer.events(content)))
        except Exception:
            logger.warning("Markdown transformer failed; rendering an empty document", exc_info=True)
            return RenderResult(toc_markup=EMPTY_TOC, body_html="")

        return RenderResult(
            toc_markup=builder.toc_markup(),
            body_html=body_html,
            entries=builder.entries,
        )


def render_document(content: str, config: EditorConfig | None = None) -> RenderResult:
    """Render `content` once, without memoization."""
    return RenderPipeline(config).render(content)
