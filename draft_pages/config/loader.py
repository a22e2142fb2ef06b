"""Load render configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _build_export_config, _build_style, _require_mapping
from .models import RenderConfig

DEFAULT_CONFIG_PATH = Path("config/article.yaml")


def load_render_config(path: Path) -> RenderConfig:
    """Load the YAML configuration describing output and style choices.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/article.yaml``).

    Returns
    -------
    RenderConfig
        Parsed configuration with export defaults and the element class theme.
        Keys left out of the file keep their built-in defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    RenderConfigError
        If a section is not a mapping, a style key is unknown, or the export
        format is unsupported.

    Examples
    --------
    >>> from pathlib import Path
    >>> from draft_pages.config import load_render_config
    >>> config = load_render_config(Path("config/article.yaml"))  # doctest: +SKIP
    >>> config.export.export_format  # doctest: +SKIP
    'html'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    defaults = _require_mapping(raw.get("defaults"), "defaults")
    styles = _require_mapping(raw.get("styles"), "styles")
    return RenderConfig(
        export=_build_export_config(defaults),
        style=_build_style(styles),
    )


def resolve_render_config(path: Path | None) -> RenderConfig:
    """Return the config at ``path``, falling back to defaults when unset.

    An absent file at the default location yields the built-in configuration;
    an explicitly requested file that is missing still raises.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return RenderConfig()
    return load_render_config(path)


__all__ = ["DEFAULT_CONFIG_PATH", "load_render_config", "resolve_render_config"]
