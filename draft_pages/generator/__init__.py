"""Utilities for rendering article Markdown and building preview/export pages."""

from .inline import InlineFormatter, slugify
from .lines import classify_line
from .models import BlockMode, LineKind, ListKind, RenderedElement, TocEntry
from .page_generator import (
    ArticleExporter,
    PreviewPageBuilder,
    export_filename,
    fetch_markdown,
)
from .renderer import MarkdownRenderer, render_markdown

__all__ = [
    "ArticleExporter",
    "BlockMode",
    "InlineFormatter",
    "LineKind",
    "ListKind",
    "MarkdownRenderer",
    "PreviewPageBuilder",
    "RenderedElement",
    "TocEntry",
    "classify_line",
    "export_filename",
    "fetch_markdown",
    "render_markdown",
    "slugify",
]
