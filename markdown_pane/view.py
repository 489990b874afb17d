"""State cells and the committed preview surface."""

from __future__ import annotations

import html
from collections.abc import Callable
from typing import Generic, TypeVar

from .constants import TOC_HEADER_TEXT
from .models import RenderResult

T = TypeVar("T")


class StateCell(Generic[T]):
    """A single observable value.

    Subscribers are notified synchronously, in subscription order, whenever
    `set` stores a value different from the current one.
    """

    def __init__(self, value: T):
        self._value = value
        self._subscribers: list[Callable[[T], None]] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """Store `value`; return True when it changed and subscribers ran."""
        if value == self._value:
            return False
        self._value = value
        for callback in list(self._subscribers):
            callback(value)
        return True

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register `callback` and return a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe


class PreviewView:
    """The rendered surface: outline markup and body HTML.

    Both strings are stored as trusted markup. Every commit bumps `revision`,
    so later commits always supersede earlier ones.
    """

    def __init__(self) -> None:
        self.toc_markup = ""
        self.body_html = ""
        self.revision = 0

    def commit(self, result: RenderResult) -> int:
        self.toc_markup = result.toc_markup
        self.body_html = result.body_html
        self.revision += 1
        return self.revision

    def replace_body(self, body_html: str, revision: int) -> bool:
        """Swap in transformed body HTML produced from `revision`.

        Returns False, leaving the view untouched, when a newer commit has
        landed since `revision` was read.
        """
        if revision != self.revision:
            return False
        self.body_html = body_html
        return True

    def render_page(self, theme: str = "light", css: str = "", title: str = "Document") -> str:
        """Assemble a standalone HTML page with the outline beside the body.

        Args:
            theme: ``"light"`` or ``"dark"``; dark adds the ``dark`` class.
            css: Extra stylesheet, such as the highlighter's rules.
            title: Page title.

        Returns:
            str: Complete HTML document.
        """
        html_class = ' class="dark"' if theme == "dark" else ""
        style = f"<style>\n{css}</style>\n" if css else ""
        return (
            "<!DOCTYPE html>\n"
            f"<html{html_class}>\n"
            "<head>\n"
            '<meta charset="utf-8">\n'
            f"<title>{html.escape(title)}</title>\n"
            f"{style}"
            "</head>\n"
            "<body>\n"
            '<nav class="toc">\n'
            f'<h3 class="text-lg font-semibold mb-2">{TOC_HEADER_TEXT}</h3>\n'
            f"{self.toc_markup}\n"
            "</nav>\n"
            '<main class="prose dark:prose-invert max-w-none">\n'
            f"{self.body_html}"
            "</main>\n"
            "</body>\n"
            "</html>\n"
        )
