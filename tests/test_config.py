from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from markdown_pane.config import (
    ConfigError,
    EditorConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".markdown-pane.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-pane]
        storage_path = "store.json"
        default_theme = "dark"
        highlight = false
        highlight_delay_ms = 5
        pygments_style = "monokai"
        allow_html = false
        ascii_anchors = true
        max_file_size = 100
        """,
    )

    config = load_config(tmp_path)

    assert config == EditorConfig(
        storage_path="store.json",
        default_theme="dark",
        highlight=False,
        highlight_delay_ms=5,
        pygments_style="monokai",
        allow_html=False,
        ascii_anchors=True,
        max_file_size=100,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [markdown-pane]
        default_theme = "dark"
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    assert load_config(nested).default_theme == "dark"


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-pane]
        highlight_delay_ms = 7
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    assert load_config(nested).highlight_delay_ms == 7


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-pane]
        default_theme = "dark"
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.markdown-pane]
        """,
    )

    assert load_config(child).default_theme == EditorConfig().default_theme


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.markdown-pane]
        default_theme = "dark"
        """,
    )
    _write_pyproject(
        tmp_path,
        """
        [project]
        name = "other"
        """,
    )

    assert load_config(tmp_path).default_theme == "dark"


def test_load_config_skips_invalid_toml(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.markdown-pane\n", encoding="utf-8")

    assert load_config(tmp_path) == EditorConfig()


def test_unknown_keys_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-pane]
        colour = "blue"
        """,
    )

    with pytest.raises(ConfigError, match="tool.markdown-pane"):
        load_config(tmp_path)


def test_non_table_config_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        markdown-pane = "yes"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"default_theme": "sepia"}, "default_theme"),
        ({"pygments_style": "no-such-style"}, "pygments_style"),
        ({"highlight_delay_ms": -1}, "highlight_delay_ms"),
        ({"highlight_delay_ms": True}, "highlight_delay_ms"),
        ({"max_file_size": 0}, "max_file_size"),
        ({"max_file_size": "10"}, "max_file_size"),
        ({"highlight": "yes"}, "highlight"),
        ({"ascii_anchors": 1}, "ascii_anchors"),
        ({"storage_path": ""}, "storage_path"),
    ],
)
def test_validate_config_rejects_invalid_values(overrides, message):
    with pytest.raises(ConfigError, match=message):
        validate_config(EditorConfig(**overrides))


def test_validate_config_accepts_defaults():
    validate_config(EditorConfig())


def test_highlight_delay_in_seconds():
    assert EditorConfig(highlight_delay_ms=250).highlight_delay == 0.25


def test_apply_overrides_ignores_none():
    config = EditorConfig()

    assert apply_overrides(config, storage_path=None) is config
    assert apply_overrides(config, highlight=False).highlight is False


def test_apply_overrides_rejects_unknown_fields():
    with pytest.raises(TypeError):
        apply_overrides(EditorConfig(), colour="blue")


def test_build_config_applies_and_validates(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-pane]
        default_theme = "dark"
        """,
    )

    config = build_config(tmp_path, storage_path="custom.json")

    assert config.default_theme == "dark"
    assert config.storage_path == "custom.json"

    with pytest.raises(ConfigError):
        build_config(tmp_path, default_theme="sepia")
