"""Editor session wiring content, rendering, view and persistence together."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from .config import THEMES, EditorConfig
from .constants import DEFAULT_CONTENT
from .filesystem import export_document, get_max_file_size, import_document
from .highlight import highlight_all, stylesheet
from .models import RenderResult
from .pipeline import RenderPipeline, Transformer
from .scheduler import Highlighter, HighlighterResolver, PostRenderScheduler, TimerLoop
from .storage import Persistence
from .view import PreviewView, StateCell

logger = logging.getLogger(__name__)


class Editor:
    """One editing session.

    The raw document lives in the `content` cell and is the only source of
    truth. Each change re-renders (memoized on the text), commits the result
    to `view`, schedules a deferred highlight pass and persists the text.
    Theme changes are persisted as well.

    Args:
        config: Editor configuration.
        persistence: Where content and theme are loaded from and saved to.
            Nothing is loaded or saved when omitted.
        loop: Event loop for deferred work; defaults to the running loop.
        highlighter_resolver: Overrides how the highlighter is found when a
            deferred pass fires.
        transformer: Overrides the Markdown transformer.
    """

    def __init__(
        self,
        config: EditorConfig | None = None,
        persistence: Persistence | None = None,
        loop: TimerLoop | None = None,
        highlighter_resolver: HighlighterResolver | None = None,
        transformer: Transformer | None = None,
    ):
        self.config = config or EditorConfig()
        self.persistence = persistence

        if persistence is not None:
            content = persistence.load_content(DEFAULT_CONTENT)
            theme = persistence.load_theme(self.config.default_theme)
        else:
            content, theme = DEFAULT_CONTENT, self.config.default_theme

        self.content: StateCell[str] = StateCell(content)
        self.theme: StateCell[str] = StateCell(theme)
        self.view = PreviewView()
        self.pipeline = RenderPipeline(self.config, transformer)
        self.scheduler = PostRenderScheduler(
            highlighter_resolver or self._resolve_highlighter,
            delay=self.config.highlight_delay,
            loop=loop,
        )

        self.content.subscribe(self._on_content_changed)
        self.theme.subscribe(self._on_theme_changed)

    def _resolve_highlighter(self) -> Highlighter | None:
        if not self.config.highlight:
            return None
        return functools.partial(highlight_all, self.view, self.config.pygments_style)

    def _on_content_changed(self, content: str) -> None:
        try:
            self.refresh()
        finally:
            if self.persistence is not None:
                self.persistence.save_content(content)

    def _on_theme_changed(self, theme: str) -> None:
        if self.persistence is not None:
            self.persistence.save_theme(theme)

    @property
    def result(self) -> RenderResult:
        return self.pipeline.render(self.content.get())

    def refresh(self) -> RenderResult:
        """Render the current content, commit it and schedule highlighting."""
        result = self.result
        revision = self.view.commit(result)
        logger.debug("Committed revision %d", revision)
        self.scheduler.after_commit()
        return result

    def start(self) -> RenderResult:
        """Render the initial document; call once the event loop is available."""
        return self.refresh()

    def set_content(self, content: str) -> bool:
        return self.content.set(content)

    def import_file(self, filepath: Path) -> str:
        """Replace the document with the contents of `filepath`.

        Raises:
            DocumentFileError: If the file cannot be imported.
            ValueError: If the size limit environment override is invalid.
        """
        max_size = get_max_file_size(default=self.config.max_file_size)
        content = import_document(filepath, max_size)
        self.set_content(content)
        return content

    def export_markdown(self, filepath: Path) -> Path:
        return export_document(filepath, self.content.get())

    def export_html(self, filepath: Path) -> Path:
        return export_document(filepath, self.result.body_html)

    def set_theme(self, theme: str) -> bool:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r}; expected one of: {', '.join(THEMES)}")
        return self.theme.set(theme)

    def toggle_theme(self) -> str:
        self.set_theme("dark" if self.theme.get() == "light" else "light")
        return self.theme.get()

    def page(self, title: str = "Document") -> str:
        """Standalone HTML page for what is currently committed to the view."""
        css = stylesheet(self.config.pygments_style) if self.config.highlight else ""
        return self.view.render_page(theme=self.theme.get(), css=css, title=title)
