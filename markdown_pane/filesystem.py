"""Filesystem helpers for importing and exporting documents."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS
from .exceptions import DocumentFileError, FileTooLargeError

MAX_FILE_SIZE_ENV_VAR = "MARKDOWN_PANE_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed size of an imported document.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["MARKDOWN_PANE_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Raises:
        DocumentFileError: If the path is inaccessible, a symlink, or not a
            regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise DocumentFileError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise DocumentFileError(f"Symlinks are not supported: {filepath}.")

    if not stat.S_ISREG(stat_result.st_mode):
        raise DocumentFileError(f"{filepath} is not a regular file.")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path) -> None:
    if stat_result.st_size > max_size:
        raise FileTooLargeError(filepath, max_size)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Raises:
        DocumentFileError: If the path is missing, inaccessible, or not a file.
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise DocumentFileError(f"Error accessing {filepath}: {error}") from error


def import_document(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a Markdown document to replace the editor content.

    Args:
        filepath: Document to read.
        max_size: Maximum allowed size in bytes.

    Returns:
        str: The document text.

    Raises:
        DocumentFileError: If the file has an unsupported extension, is not a
            regular file, cannot be read, or is not valid UTF-8.
        FileTooLargeError: If the file exceeds `max_size`.

    Examples:
        content = import_document(Path("notes.md"))
    """
    filepath = Path(filepath).expanduser()
    if filepath.suffix.lower() not in MARKDOWN_EXTENSIONS:
        error_message = f"{filepath} is not a Markdown file.\n"
        error_message += f"Supported extensions are: {', '.join(MARKDOWN_EXTENSIONS)}"
        raise DocumentFileError(error_message)

    stat_result = collect_file_stat(filepath)
    enforce_file_size(stat_result, max_size, filepath)

    try:
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise DocumentFileError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error


def atomic_write(filepath: Path, text: str) -> None:
    """Write `text` to `filepath` through a temporary file and `os.replace`.

    Permissions of an existing target are kept; new files get the process
    defaults.

    Raises:
        OSError: If the temporary file cannot be written or moved into place.
    """
    permissions: int | None = None
    try:
        permissions = stat.S_IMODE(os.stat(filepath).st_mode)
    except FileNotFoundError:
        pass

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            if permissions is not None:
                os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass


def export_document(filepath: Path, text: str) -> Path:
    """Write an exported artifact (raw Markdown or rendered HTML).

    Args:
        filepath: Destination file.
        text: Content to write.

    Returns:
        Path: The resolved destination.

    Raises:
        DocumentFileError: If the destination is a directory or cannot be written.

    Examples:
        export_document(Path("out.html"), result.body_html)
    """
    filepath = Path(filepath).expanduser()
    if filepath.is_dir():
        raise DocumentFileError(f"{filepath} is a directory.")
    if filepath.is_symlink():
        raise DocumentFileError(f"Symlinks are not supported: {filepath}.")

    try:
        atomic_write(filepath, text)
    except OSError as error:
        raise DocumentFileError(f"Error writing {filepath}: {error}") from error
    return filepath.resolve()
