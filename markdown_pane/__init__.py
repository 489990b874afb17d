"""
markdown-pane: Markdown rendering with a live outline.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    markdown-pane render README.md -o README.html

Library Usage:
    from markdown_pane import RenderPipeline

    pipeline = RenderPipeline()
    result = pipeline.render("# Title\\n\\n## Section\\n")
    result.toc_markup, result.body_html
"""

from .config import ConfigError, EditorConfig, build_config
from .editor import Editor
from .exceptions import DocumentFileError, PaneError, StorageError, TransformError
from .models import EventKind, HeadingLevel, ParseEvent, RenderResult, TocEntry
from .outline import OutlineBuilder, build_outline
from .parser import MarkdownTransformer
from .pipeline import RenderPipeline, render_document
from .scheduler import PostRenderScheduler
from .slugify import AnchorRegistry, generate_slug

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "RenderPipeline",
    "render_document",
    "OutlineBuilder",
    "build_outline",
    "generate_slug",
    "AnchorRegistry",
    "MarkdownTransformer",
    "PostRenderScheduler",
    "Editor",
    # Data models
    "EventKind",
    "HeadingLevel",
    "ParseEvent",
    "RenderResult",
    "TocEntry",
    # Configuration
    "EditorConfig",
    "build_config",
    # Exceptions
    "ConfigError",
    "DocumentFileError",
    "PaneError",
    "StorageError",
    "TransformError",
    # Version
    "__version__",
]
