"""Typed dataclasses describing draft_pages configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

EXPORT_FORMATS: tuple[str, ...] = ("html", "doc")


class RenderConfigError(ValueError):
    """Raised when the render configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class RenderStyle:
    """CSS classes attached to every element the renderer emits.

    The defaults reproduce the dark preview theme of the drafting studio.
    The export document ships its own stylesheet keyed on tag names, so the
    same classes are harmless there.
    """

    paragraph: str = "mb-4 leading-relaxed text-slate-300"
    heading_primary: str = "mb-6 text-4xl font-extrabold"
    heading_secondary: str = "mt-8 mb-4 text-2xl font-bold text-indigo-400"
    heading_tertiary: str = "mt-8 mb-4 text-xl font-semibold text-slate-200"
    unordered_list: str = "list-disc list-inside ml-1 space-y-2 my-4 text-slate-300"
    ordered_list: str = "list-decimal list-inside ml-1 space-y-2 my-4 text-slate-300"
    list_item: str = "mb-1 pl-1"
    table_wrapper: str = "overflow-x-auto my-6 rounded-lg border border-slate-700 shadow-sm"
    table: str = "table-auto w-full border-collapse text-left"
    table_header_cell: str = (
        "border border-slate-600 bg-slate-800/60 px-4 py-3 text-left font-bold "
        "text-slate-200"
    )
    table_cell: str = "border border-slate-700 px-4 py-3 text-slate-300 text-sm"
    table_row_even: str = "bg-slate-900/20"
    table_row_odd: str = "bg-slate-800/20"
    blockquote: str = (
        "border-l-4 border-indigo-500 pl-4 py-1 my-6 bg-slate-800/30 rounded-r "
        "italic text-slate-400"
    )
    code_block: str = (
        "bg-slate-950/50 p-4 rounded-lg overflow-x-auto my-4 border border-slate-800"
    )
    code_block_code: str = "text-sm font-mono text-slate-300"
    inline_code: str = (
        "bg-slate-700/50 text-amber-300 rounded-sm px-1 py-0.5 text-sm font-mono"
    )
    strong: str = "text-slate-100 font-bold"
    link: str = "text-indigo-400 hover:underline"
    preview_container: str = "prose prose-invert max-w-none"

    def heading(self, level: int) -> str:
        """Return the class tier for a heading of ``level`` (1-6)."""
        if level == 1:
            return self.heading_primary
        if level == 2:
            return self.heading_secondary
        return self.heading_tertiary


@dc.dataclass(slots=True)
class ExportConfig:
    """Output settings shared by the preview and export builders."""

    output_dir: Path = dc.field(default_factory=lambda: Path("public"))
    pygments_style: str = "monokai"
    highlight_code: bool = False
    export_format: str = "html"
    fallback_title: str = "Untitled article"


@dc.dataclass(slots=True)
class RenderConfig:
    """Top-level configuration loaded from ``config/article.yaml``."""

    export: ExportConfig = dc.field(default_factory=ExportConfig)
    style: RenderStyle = dc.field(default_factory=RenderStyle)


__all__ = [
    "EXPORT_FORMATS",
    "ExportConfig",
    "RenderConfig",
    "RenderConfigError",
    "RenderStyle",
]
