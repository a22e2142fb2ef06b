"""Unit tests for loading ``article.yaml`` via ``draft_pages.config``.

Each test writes a small YAML file into ``tmp_path`` and checks how the
loader overlays it on the built-in defaults or rejects it.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from draft_pages.config import (
    ExportConfig,
    RenderConfig,
    RenderConfigError,
    RenderStyle,
    load_render_config,
    resolve_render_config,
)


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "article.yaml"
    path.write_text(body.strip() + "\n", encoding="utf-8")
    return path


def test_overrides_reach_dataclasses(tmp_path: Path) -> None:
    """Configured values replace defaults while omitted keys keep them."""
    path = _write_config(
        tmp_path,
        """
defaults:
  output_dir: dist/articles
  highlight_code: true
  export_format: doc
  fallback_title: Draft
styles:
  paragraph: "  lead   text-lg "
  table:
    - w-full
    - border
""",
    )
    config = load_render_config(path)
    assert config.export.output_dir == Path("dist/articles")
    assert config.export.highlight_code is True
    assert config.export.export_format == "doc"
    assert config.export.fallback_title == "Draft"
    assert config.export.pygments_style == ExportConfig().pygments_style
    assert config.style.paragraph == "lead text-lg"
    assert config.style.table == "w-full border"
    assert config.style.blockquote == RenderStyle().blockquote


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    """An empty document yields the default configuration."""
    config = load_render_config(_write_config(tmp_path, ""))
    assert config == RenderConfig()


def test_unknown_style_key_is_rejected(tmp_path: Path) -> None:
    """Style keys must name RenderStyle fields."""
    path = _write_config(tmp_path, "styles:\n  sidebar: hidden\n")
    with pytest.raises(RenderConfigError, match="sidebar"):
        load_render_config(path)


def test_unsupported_export_format_is_rejected(tmp_path: Path) -> None:
    """Only html and doc exports are available."""
    path = _write_config(tmp_path, "defaults:\n  export_format: pdf\n")
    with pytest.raises(RenderConfigError, match="pdf"):
        load_render_config(path)


def test_unknown_pygments_style_is_rejected(tmp_path: Path) -> None:
    """A misspelt highlight style fails at load time, not at render time."""
    path = _write_config(tmp_path, "defaults:\n  pygments_style: monokia\n")
    with pytest.raises(RenderConfigError, match="monokia"):
        load_render_config(path)


def test_known_pygments_style_is_kept(tmp_path: Path) -> None:
    """Installed Pygments styles pass validation unchanged."""
    path = _write_config(tmp_path, "defaults:\n  pygments_style: friendly\n")
    assert load_render_config(path).export.pygments_style == "friendly"


def test_section_must_be_mapping(tmp_path: Path) -> None:
    """Sections given as lists are rejected."""
    path = _write_config(tmp_path, "styles:\n  - paragraph\n")
    with pytest.raises(RenderConfigError, match="styles"):
        load_render_config(path)


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    """A YAML list at the top level raises TypeError."""
    path = _write_config(tmp_path, "- defaults\n- styles\n")
    with pytest.raises(TypeError):
        load_render_config(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    """An explicit path that does not exist raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_render_config(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        resolve_render_config(tmp_path / "missing.yaml")


def test_resolve_without_default_file_uses_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """No path and no ``config/article.yaml`` means built-in defaults."""
    monkeypatch.chdir(tmp_path)
    assert resolve_render_config(None) == RenderConfig()


def test_resolve_reads_default_location(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without a path the loader falls back to ``config/article.yaml``."""
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "article.yaml").write_text(
        "defaults:\n  fallback_title: From Default\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    assert resolve_render_config(None).export.fallback_title == "From Default"
