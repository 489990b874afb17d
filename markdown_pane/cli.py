"""
Command-line entry point: render Markdown with its outline, and manage the
persisted document and theme.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path

import click

from .config import THEMES, ConfigError, EditorConfig, build_config
from .constants import HTML_EXTENSIONS, MARKDOWN_EXTENSIONS
from .editor import Editor
from .exceptions import DocumentFileError
from .filesystem import export_document, get_max_file_size, import_document
from .pipeline import render_document
from .storage import JsonFileStore, Persistence

__all__ = ["cli"]

# Seconds to wait for pending highlight passes before writing the page.
HIGHLIGHT_WAIT_TIMEOUT = 5.0


def _persistence(config: EditorConfig) -> Persistence:
    return Persistence(JsonFileStore(config.storage_path))


def _read_document(filepath: str, config: EditorConfig) -> str:
    try:
        max_size = get_max_file_size(default=config.max_file_size)
        return import_document(Path(filepath), max_size)
    except (DocumentFileError, ValueError) as error:
        raise click.ClickException(str(error)) from error


async def _render_session(
    config: EditorConfig, filepath: str | None, body_only: bool, title: str
) -> str:
    if filepath is not None:
        editor = Editor(config)
        editor.import_file(Path(filepath))
    else:
        editor = Editor(config, persistence=_persistence(config))

    # importing a file identical to the current content triggers no change
    if editor.view.revision == 0:
        editor.start()

    await editor.scheduler.wait_idle(timeout=HIGHLIGHT_WAIT_TIMEOUT)
    return editor.view.body_html if body_only else editor.page(title=title)


@click.group()
@click.version_option(package_name="markdown-pane")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--storage",
    type=click.Path(dir_okay=False),
    help="Storage file for the persisted document and theme",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool = False, storage: str | None = None):
    """
    Render Markdown documents with a generated outline.

    Args:
        verbose: Log debug records to stderr.
        storage: Override for the configured storage file.

    Raises:
        click.BadParameter: If the configuration is invalid.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = build_config(Path.cwd(), storage_path=storage)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error


@cli.command()
@click.argument("filepath", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write to a file")
@click.option("--body-only", is_flag=True, help="Emit only the document body")
@click.option("--no-highlight", is_flag=True, help="Skip syntax highlighting")
@click.option("--title", default="Document", show_default=True, help="Page title")
@click.pass_obj
def render(
    config: EditorConfig,
    filepath: str | None,
    output: str | None,
    body_only: bool,
    no_highlight: bool,
    title: str,
):
    """
    Render FILEPATH (or the stored document) to HTML.

    The page contains the outline and the highlighted body.

    Examples:
        markdown-pane render README.md -o README.html
    """
    if no_highlight:
        config = replace(config, highlight=False)

    try:
        text = asyncio.run(_render_session(config, filepath, body_only, title))
    except (DocumentFileError, ValueError) as error:
        raise click.ClickException(str(error)) from error

    if output is None:
        click.echo(text, nl=False)
        return

    try:
        export_document(Path(output), text)
    except DocumentFileError as error:
        raise click.ClickException(str(error)) from error


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Emit entries as JSON")
@click.pass_obj
def toc(config: EditorConfig, filepath: str, as_json: bool):
    """Print the outline of FILEPATH."""
    result = render_document(_read_document(filepath, config), config)
    if as_json:
        entries = [
            {"level": int(entry.level), "text": entry.text, "anchor": entry.anchor}
            for entry in result.entries
        ]
        click.echo(json.dumps(entries, ensure_ascii=False, indent=2))
    else:
        click.echo(result.toc_markup)


@cli.command(name="import")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def import_command(config: EditorConfig, filepath: str):
    """Replace the stored document with FILEPATH."""
    content = _read_document(filepath, config)
    if not _persistence(config).save_content(content):
        raise click.ClickException(f"Could not save the document to {config.storage_path}")
    click.echo(f"Imported {filepath}", err=True)


@cli.command()
@click.argument("output", type=click.Path(dir_okay=False))
@click.pass_obj
def export(config: EditorConfig, output: str):
    """
    Export the stored document to OUTPUT.

    A Markdown extension writes the raw text; ``.html`` writes the rendered body.
    """
    suffix = Path(output).suffix.lower()
    if suffix not in MARKDOWN_EXTENSIONS + HTML_EXTENSIONS:
        raise click.BadParameter(
            f"unsupported extension {suffix!r}; use one of: "
            f"{', '.join(MARKDOWN_EXTENSIONS + HTML_EXTENSIONS)}",
            param_hint="OUTPUT",
        )

    editor = Editor(config, persistence=_persistence(config))
    try:
        if suffix in HTML_EXTENSIONS:
            written = editor.export_html(Path(output))
        else:
            written = editor.export_markdown(Path(output))
    except DocumentFileError as error:
        raise click.ClickException(str(error)) from error
    click.echo(f"Exported {written}", err=True)


@cli.command()
@click.argument("name", required=False, type=click.Choice(THEMES))
@click.pass_obj
def theme(config: EditorConfig, name: str | None):
    """Set the theme to NAME, or toggle it when omitted."""
    editor = Editor(config, persistence=_persistence(config))
    if name is None:
        editor.toggle_theme()
    else:
        editor.set_theme(name)
    click.echo(editor.theme.get())


if __name__ == "__main__":
    cli()
