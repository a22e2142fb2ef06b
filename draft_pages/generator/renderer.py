"""Render loosely structured Markdown blocks into HTML fragments.

The renderer walks a block line by line with a small state machine. Each line
is classified by :func:`draft_pages.generator.lines.classify_line`; the
resulting :class:`LineKind` selects a transition that either extends the open
accumulator (paragraph, list, table or code block) or flushes it and switches
to a new one. Input is never rejected: anything that is not recognised ends
up as paragraph text, and unterminated fences or tables are closed at the end
of the block.

Example
-------
>>> from draft_pages.generator.renderer import MarkdownRenderer
>>> renderer = MarkdownRenderer()
>>> renderer.render_html("## Getting Started")[:36]
'<h2 id="getting-started" class="mt-8'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ
from html import escape

from markupsafe import Markup
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from draft_pages.config.models import RenderStyle

from .inline import InlineFormatter, class_attr, slugify
from .lines import (
    BLOCKQUOTE_PATTERN,
    FENCE_MARKER,
    HEADING_PATTERN,
    LIST_ITEM_PATTERN,
    classify_line,
    is_fence,
    is_table_continuation,
    list_kind,
)
from .models import BlockMode, LineKind, ListKind, RenderedElement

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from draft_pages.config.models import RenderConfig

logger = logging.getLogger(__name__)

FENCE_LANGUAGE_PATTERN = re.compile(r"[A-Za-z0-9_+#.-]+")
_CODE_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#039;"}
)


def escape_code(code: str) -> str:
    """Entity-escape ``code`` for display inside a ``<pre>`` block."""
    return code.translate(_CODE_ESCAPES)


def parse_table_row(row: str) -> list[str]:
    """Split a pipe-delimited row into trimmed cells.

    One layer of outer pipes is removed when the row both starts and ends with
    ``|``; rows written without outer pipes are split as they are.
    """
    trimmed = row.strip()
    if trimmed.startswith("|") and trimmed.endswith("|"):
        trimmed = trimmed[1:-1]
    return [cell.strip() for cell in trimmed.split("|")]


@dc.dataclass(slots=True)
class _BlockState:
    """Open accumulator of the block state machine."""

    mode: BlockMode = BlockMode.NONE
    list_kind: ListKind | None = None
    lines: list[str] = dc.field(default_factory=list)
    language: str | None = None

    def switch(
        self,
        mode: BlockMode,
        *,
        kind: ListKind | None = None,
        language: str | None = None,
    ) -> None:
        self.mode = mode
        self.list_kind = kind
        self.language = language
        self.lines = []


class MarkdownRenderer:
    """Render Markdown text blocks into HTML with a configurable class theme."""

    def __init__(
        self,
        style: RenderStyle | None = None,
        *,
        highlight_code: bool = False,
        pygments_style: str = "monokai",
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        style : RenderStyle, optional
            CSS classes applied to emitted elements; defaults to the preview
            theme.
        highlight_code : bool, optional
            Highlight fenced code whose opening fence names a language known
            to Pygments. Defaults to ``False``.
        pygments_style : str, optional
            Pygments style used by :attr:`stylesheet`. Defaults to
            ``"monokai"``.
        """
        self.style = style or RenderStyle()
        self.highlight_code = highlight_code
        self.inline = InlineFormatter(self.style)
        self._formatter = HtmlFormatter(style=pygments_style, nowrap=True)
        self._transitions: dict[
            LineKind, cabc.Callable[[_BlockState, str], list[RenderedElement]]
        ] = {
            LineKind.FENCE: self._open_code_block,
            LineKind.HEADING: self._heading,
            LineKind.TABLE_ROW: self._open_table,
            LineKind.LIST_ITEM: self._list_item,
            LineKind.BLOCKQUOTE: self._blockquote,
            LineKind.BLANK: self._blank,
            LineKind.TEXT: self._text,
        }

    @classmethod
    def from_config(cls, config: RenderConfig) -> MarkdownRenderer:
        """Build a renderer from the loaded YAML configuration."""
        return cls(
            config.style,
            highlight_code=config.export.highlight_code,
            pygments_style=config.export.pygments_style,
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render_elements(self, text: str) -> list[RenderedElement]:
        """Return the ordered elements rendered from a single text block."""
        source = text.replace("\r\n", "\n").strip()
        if not source:
            return []

        lines = source.split("\n")
        state = _BlockState()
        elements: list[RenderedElement] = []
        for index, line in enumerate(lines):
            if state.mode is BlockMode.CODE_BLOCK:
                if is_fence(lines, index):
                    elements.extend(self._flush(state))
                else:
                    state.lines.append(line)
                continue
            if state.mode is BlockMode.TABLE:
                if is_table_continuation(line):
                    state.lines.append(line)
                    continue
                elements.extend(self._flush(state))
            kind = classify_line(lines, index)
            elements.extend(self._transitions[kind](state, line))

        if state.mode is BlockMode.CODE_BLOCK:
            logger.debug("auto-closing unterminated code fence")
        elements.extend(self._flush(state))
        return elements

    def render_html(self, text: str) -> str:
        """Render ``text`` into an HTML fragment string; empty input gives ``""``."""
        return "".join(element.html for element in self.render_elements(text))

    def render_preview(self, text: str) -> Markup:
        """Render ``text`` into markup wrapped in the preview prose container."""
        body = self.render_html(text)
        return Markup(f"<div{class_attr(self.style.preview_container)}>{body}</div>")

    def _flush(self, state: _BlockState) -> list[RenderedElement]:
        """Emit whatever the open accumulator holds and reset the state."""
        match state.mode:
            case BlockMode.PARAGRAPH:
                elements = [self._paragraph(" ".join(state.lines))]
            case BlockMode.LIST if state.list_kind is not None:
                elements = [self._list(state.lines, state.list_kind)]
            case BlockMode.TABLE:
                elements = self._table(state.lines)
            case BlockMode.CODE_BLOCK:
                elements = [self._code_block(state.lines, state.language)]
            case _:
                elements = []
        state.switch(BlockMode.NONE)
        return elements

    def _open_code_block(self, state: _BlockState, line: str) -> list[RenderedElement]:
        elements = self._flush(state)
        label = line.strip()[len(FENCE_MARKER) :].strip()
        match = FENCE_LANGUAGE_PATTERN.match(label)
        state.switch(BlockMode.CODE_BLOCK, language=match.group(0) if match else None)
        return elements

    def _heading(self, state: _BlockState, line: str) -> list[RenderedElement]:
        elements = self._flush(state)
        match = HEADING_PATTERN.match(line.strip())
        if match is None:  # pragma: no cover - guarded by classify_line
            return elements
        level = len(match.group(1))
        text = match.group(2)
        tag = f"h{level}"
        anchor = escape(slugify(text), quote=True)
        html = (
            f'<{tag} id="{anchor}"{class_attr(self.style.heading(level))}>'
            f"{self.inline(text)}</{tag}>"
        )
        elements.append(RenderedElement(tag, html))
        return elements

    def _open_table(self, state: _BlockState, line: str) -> list[RenderedElement]:
        elements = self._flush(state)
        state.switch(BlockMode.TABLE)
        state.lines.append(line)
        return elements

    def _list_item(self, state: _BlockState, line: str) -> list[RenderedElement]:
        match = LIST_ITEM_PATTERN.match(line.strip())
        if match is None:  # pragma: no cover - guarded by classify_line
            return self._text(state, line)
        kind = list_kind(match.group(1))
        elements: list[RenderedElement] = []
        if state.mode is not BlockMode.LIST or state.list_kind is not kind:
            elements = self._flush(state)
            state.switch(BlockMode.LIST, kind=kind)
        state.lines.append(match.group(2))
        return elements

    def _blockquote(self, state: _BlockState, line: str) -> list[RenderedElement]:
        elements = self._flush(state)
        match = BLOCKQUOTE_PATTERN.match(line.strip())
        text = match.group(1) if match else line.strip()
        html = (
            f"<blockquote{class_attr(self.style.blockquote)}>"
            f"<p>{self.inline(text)}</p></blockquote>"
        )
        elements.append(RenderedElement("blockquote", html))
        return elements

    def _blank(self, state: _BlockState, _line: str) -> list[RenderedElement]:
        return self._flush(state)

    def _text(self, state: _BlockState, line: str) -> list[RenderedElement]:
        elements: list[RenderedElement] = []
        if state.mode is not BlockMode.PARAGRAPH:
            elements = self._flush(state)
            state.switch(BlockMode.PARAGRAPH)
        state.lines.append(line.strip())
        return elements

    def _paragraph(self, text: str) -> RenderedElement:
        html = f"<p{class_attr(self.style.paragraph)}>{self.inline(text)}</p>"
        return RenderedElement("p", html)

    def _list(self, items: cabc.Sequence[str], kind: ListKind) -> RenderedElement:
        tag = kind.value
        list_class = (
            self.style.ordered_list
            if kind is ListKind.ORDERED
            else self.style.unordered_list
        )
        item_attr = class_attr(self.style.list_item)
        body = "".join(f"<li{item_attr}>{self.inline(item)}</li>" for item in items)
        return RenderedElement(tag, f"<{tag}{class_attr(list_class)}>{body}</{tag}>")

    def _table(self, lines: cabc.Sequence[str]) -> list[RenderedElement]:
        """Render table rows, degrading to paragraphs below two lines."""
        if len(lines) < 2:
            logger.debug("rendering %d-line table as paragraphs", len(lines))
            return [self._paragraph(line.strip()) for line in lines]

        header = parse_table_row(lines[0])
        header_attr = class_attr(self.style.table_header_cell)
        cell_attr = class_attr(self.style.table_cell)
        head_cells = "".join(
            f"<th{header_attr}>{self.inline(cell)}</th>" for cell in header
        )
        rows: list[str] = []
        for idx, row in enumerate(lines[2:]):
            cells = parse_table_row(row)
            cells += [""] * (len(header) - len(cells))
            row_class = (
                self.style.table_row_even if idx % 2 == 0 else self.style.table_row_odd
            )
            body_cells = "".join(
                f"<td{cell_attr}>{self.inline(cell)}</td>"
                for cell in cells[: len(header)]
            )
            rows.append(f"<tr{class_attr(row_class)}>{body_cells}</tr>")
        html = (
            f"<div{class_attr(self.style.table_wrapper)}>"
            f"<table{class_attr(self.style.table)}>"
            f"<thead><tr>{head_cells}</tr></thead>"
            f"<tbody>{''.join(rows)}</tbody>"
            "</table></div>"
        )
        return [RenderedElement("table", html)]

    def _code_block(
        self, lines: cabc.Sequence[str], language: str | None
    ) -> RenderedElement:
        code = "\n".join(lines)
        code_class = self.style.code_block_code
        body = escape_code(code)
        language_attr = ""
        if self.highlight_code and language:
            try:
                lexer = get_lexer_by_name(language)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                body = highlight(code, lexer, self._formatter).rstrip("\n")
                code_class = f"{code_class} codehilite".strip()
                language_attr = f' data-language="{escape(language, quote=True)}"'
        html = (
            f"<pre{class_attr(self.style.code_block)}>"
            f"<code{class_attr(code_class)}{language_attr}>{body}</code></pre>"
        )
        return RenderedElement("pre", html)


_DEFAULT_RENDERER = MarkdownRenderer()


def render_markdown(text: str) -> str:
    """Render ``text`` with the default preview theme."""
    return _DEFAULT_RENDERER.render_html(text)


__all__ = [
    "MarkdownRenderer",
    "escape_code",
    "parse_table_row",
    "render_markdown",
]
