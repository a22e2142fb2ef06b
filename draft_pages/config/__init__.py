"""Load and validate render configuration YAML for draft_pages builds.

This subpackage parses the project's ``article.yaml`` file, overlays its
values on the built-in defaults, and produces typed dataclasses
(:class:`RenderConfig`, :class:`ExportConfig`, :class:`RenderStyle`) that the
renderer and the page builders consume. The primary entry point is
:func:`load_render_config`.

Examples
--------
>>> from pathlib import Path
>>> from draft_pages.config import load_render_config
>>> config = load_render_config(Path("config/article.yaml"))  # doctest: +SKIP
>>> config.style.heading(2)  # doctest: +SKIP
'mt-8 mb-4 text-2xl font-bold text-indigo-400'
"""

from .loader import DEFAULT_CONFIG_PATH, load_render_config, resolve_render_config
from .models import (
    EXPORT_FORMATS,
    ExportConfig,
    RenderConfig,
    RenderConfigError,
    RenderStyle,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "EXPORT_FORMATS",
    "ExportConfig",
    "RenderConfig",
    "RenderConfigError",
    "RenderStyle",
    "load_render_config",
    "resolve_render_config",
]
