"""Configuration loading and management."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

from pygments.styles import get_all_styles

THEMES = ("light", "dark")


@dataclass
class EditorConfig:
    """Configuration for the editor session and render pipeline.

    Attributes:
        storage_path: JSON file backing the persisted document and theme.
        default_theme: Theme used when none is stored (``"light"`` or ``"dark"``).
        highlight: Whether the deferred syntax-highlighting pass runs.
        highlight_delay_ms: Delay before the highlighting pass, in milliseconds.
        pygments_style: Pygments style used for highlighted code blocks.
        allow_html: Whether raw HTML in the document is passed through.
        ascii_anchors: Whether anchors are folded to ASCII.
        max_file_size: Maximum size in bytes of an imported document.

    Examples:
        EditorConfig(default_theme="dark", highlight_delay_ms=5)
    """

    # Persistence
    storage_path: str = "~/.markdown-pane.json"
    default_theme: str = "light"

    # Highlighting
    highlight: bool = True
    highlight_delay_ms: int = 1
    pygments_style: str = "default"

    # Rendering
    allow_html: bool = True
    ascii_anchors: bool = False

    # Limits
    max_file_size: int = 10 * 1024 * 1024

    @property
    def highlight_delay(self) -> float:
        """Highlight delay in seconds, as expected by the event loop."""
        return self.highlight_delay_ms / 1000


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`default_theme` must be one of: light, dark")
    """


def load_config(search_path: Path) -> EditorConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.markdown-pane]`` table from `pyproject.toml` and the
    ``[markdown-pane]`` or ``[tool.markdown-pane]`` table from
    `.markdown-pane.toml` when present. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        EditorConfig: Loaded configuration, or defaults when nothing is found.

    Raises:
        ConfigError: If a matching table is not a mapping or has unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "markdown-pane")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".markdown-pane.toml",
            table_paths=[("markdown-pane",), ("tool", "markdown-pane")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return EditorConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> EditorConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> EditorConfig:
    table_display = ".".join(table_path)

    if raw_config is None or raw_config == {}:
        return EditorConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return EditorConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: EditorConfig) -> None:
    """Validate an `EditorConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a theme or Pygments style is unknown, a flag is not a
            boolean, or a numeric limit is out of range.

    Examples:
        validate_config(EditorConfig(default_theme="dark"))
    """
    _ensure_integers(
        {
            "highlight_delay_ms": config.highlight_delay_ms,
            "max_file_size": config.max_file_size,
        }
    )
    _ensure_booleans(
        {
            "highlight": config.highlight,
            "allow_html": config.allow_html,
            "ascii_anchors": config.ascii_anchors,
        }
    )

    if not isinstance(config.storage_path, str) or not config.storage_path:
        raise ConfigError("`storage_path` must not be empty")
    if config.default_theme not in THEMES:
        raise ConfigError(f"`default_theme` must be one of: {', '.join(THEMES)}")
    if config.pygments_style not in set(get_all_styles()):
        raise ConfigError(f"`pygments_style` is not a known Pygments style: {config.pygments_style}")

    if config.highlight_delay_ms < 0:
        raise ConfigError("`highlight_delay_ms` must be >= 0")
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: EditorConfig, **overrides: object) -> EditorConfig:
    """Apply override values to an `EditorConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by field name; None values are ignored.

    Returns:
        EditorConfig: New configuration, or `config` itself when nothing changes.

    Raises:
        TypeError: If an override name is not defined on `EditorConfig`.

    Examples:
        updated = apply_overrides(config, highlight=False)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> EditorConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        EditorConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), highlight=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be a boolean")
