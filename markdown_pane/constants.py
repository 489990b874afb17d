"""Constants used across the markdown-pane package."""

from __future__ import annotations

from .config import EditorConfig

DEFAULT_CONFIG = EditorConfig()

# Persistence keys
CONTENT_KEY = "markdown-pane-content"
THEME_KEY = "markdown-pane-theme"

DEFAULT_CONTENT = "\n".join(
    [
        "# Markdown Pane",
        "## Features",
        "### Code Highlighting",
        "```python",
        "def main():",
        '    print("Hello, world!")',
        "```",
    ]
)

# Outline markup
TOC_LIST_OPEN = '<ul class="list-none pl-0">'
TOC_LIST_CLOSE = "</ul>"
TOC_PREFIX_CLASS = "mr-2 text-gray-400 dark:text-gray-500"
TOC_LINK_HOVER_CLASS = "hover:text-blue-500"
TOC_HEADER_TEXT = "On this page"

# File import/export
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".txt")
HTML_EXTENSIONS = (".html", ".htm")
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
