"""Utility helpers shared by the draft_pages configuration loader."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .models import EXPORT_FORMATS, ExportConfig, RenderConfigError, RenderStyle

STYLE_FIELDS: frozenset[str] = frozenset(field.name for field in dc.fields(RenderStyle))


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_classes(value: str | list[object] | None) -> str:
    """Normalize a class definition (string or list) into a space-joined string."""
    if isinstance(value, str):
        return " ".join(segment for segment in value.split() if segment)
    if isinstance(value, list):
        normalized: list[str] = []
        for segment in value:
            text = str(segment).strip()
            if text:
                normalized.append(text)
        return " ".join(normalized)
    return ""


def _require_mapping(value: object, section: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    match value:
        case None:
            return {}
        case dict():
            return value
        case _:
            msg = f"The '{section}' section must be a mapping."
            raise RenderConfigError(msg)


def _build_style(payload: typ.Mapping[str, typ.Any]) -> RenderStyle:
    """Overlay configured class names on the default RenderStyle."""
    unknown = sorted(set(payload) - STYLE_FIELDS)
    if unknown:
        msg = f"Unknown style keys: {', '.join(unknown)}."
        raise RenderConfigError(msg)
    overrides = {key: _normalize_classes(value) for key, value in payload.items()}
    return dc.replace(RenderStyle(), **overrides)


def _build_export_config(payload: typ.Mapping[str, typ.Any]) -> ExportConfig:
    """Build an ExportConfig from the ``defaults`` mapping."""
    base = ExportConfig()
    export_format = _optional_str(payload.get("export_format")) or base.export_format
    if export_format not in EXPORT_FORMATS:
        msg = (
            f"Unsupported export_format '{export_format}'; "
            f"expected one of {', '.join(EXPORT_FORMATS)}."
        )
        raise RenderConfigError(msg)
    pygments_style = _optional_str(payload.get("pygments_style")) or base.pygments_style
    try:
        get_style_by_name(pygments_style)
    except ClassNotFound as exc:
        msg = f"Unknown pygments_style '{pygments_style}'."
        raise RenderConfigError(msg) from exc
    output_dir = _optional_str(payload.get("output_dir"))
    return ExportConfig(
        output_dir=Path(output_dir) if output_dir else base.output_dir,
        pygments_style=pygments_style,
        highlight_code=bool(payload.get("highlight_code", base.highlight_code)),
        export_format=export_format,
        fallback_title=_optional_str(payload.get("fallback_title"))
        or base.fallback_title,
    )


__all__ = [
    "STYLE_FIELDS",
    "_build_export_config",
    "_build_style",
    "_normalize_classes",
    "_optional_str",
    "_require_mapping",
]
