"""Render AI-drafted article Markdown into preview and export HTML.

This package exposes the Markdown renderer used for live previews and
document exports, plus the CLI entry points used by ``uv run pages``.

Exports
-------
- ``MarkdownRenderer``: block/inline renderer producing HTML fragments.
- ``render_markdown``: render a block with the default theme.
- ``slugify``: heading anchor ids shared with the table of contents.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from draft_pages import render_markdown
>>> render_markdown("Plain text")
'<p class="mb-4 leading-relaxed text-slate-300">Plain text</p>'
>>> from draft_pages import slugify
>>> slugify("Getting Started")
'getting-started'
"""

from __future__ import annotations

from .cli import app, main
from .generator import MarkdownRenderer, render_markdown, slugify

__all__ = ["MarkdownRenderer", "app", "main", "render_markdown", "slugify"]
