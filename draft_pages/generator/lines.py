"""Line classification for the block renderer.

Every physical line is tested against an ordered list of predicates; the first
predicate that accepts the line decides its :class:`LineKind`. Table detection
needs one line of context in each direction, so predicates receive the whole
line sequence and the index under test rather than a lone string.

Example
-------
>>> from draft_pages.generator.lines import classify_line
>>> classify_line(["| A | B |", "|---|---|"], 0)
<LineKind.TABLE_ROW: 'table_row'>
>>> classify_line(["- item"], 0)
<LineKind.LIST_ITEM: 'list_item'>
"""

from __future__ import annotations

import collections.abc as cabc
import re

from .models import LineKind, ListKind

FENCE_MARKER = "```"
TABLE_SEPARATOR = "---"
HEADING_PATTERN = re.compile(r"^(#{1,6})\s*(.*)$")
LIST_ITEM_PATTERN = re.compile(r"^([*-]|\d+\.)\s+(.*)$")
BLOCKQUOTE_PATTERN = re.compile(r"^>\s?(.*)$")

LinePredicate = cabc.Callable[[cabc.Sequence[str], int], bool]


def is_fence(lines: cabc.Sequence[str], index: int) -> bool:
    """Return True when the line opens or closes a fenced code block."""
    return lines[index].strip().startswith(FENCE_MARKER)


def is_heading(lines: cabc.Sequence[str], index: int) -> bool:
    """Return True for ATX headings with one to six leading hashes."""
    return HEADING_PATTERN.match(lines[index].strip()) is not None


def is_table_row(lines: cabc.Sequence[str], index: int) -> bool:
    """Return True when a piped line sits next to (or is) a separator row."""
    trimmed = lines[index].strip()
    if "|" not in trimmed:
        return False
    if index + 1 < len(lines) and TABLE_SEPARATOR in lines[index + 1].strip():
        return True
    if index > 0 and TABLE_SEPARATOR in lines[index - 1].strip():
        return True
    return TABLE_SEPARATOR in trimmed


def is_table_continuation(line: str) -> bool:
    """Return True when ``line`` can extend a table that is already open."""
    return "|" in line.strip()


def is_list_item(lines: cabc.Sequence[str], index: int) -> bool:
    """Return True for ``*``, ``-`` or ``N.`` items followed by content."""
    return LIST_ITEM_PATTERN.match(lines[index].strip()) is not None


def is_blockquote(lines: cabc.Sequence[str], index: int) -> bool:
    """Return True for lines introduced by ``>``."""
    return BLOCKQUOTE_PATTERN.match(lines[index].strip()) is not None


def is_blank(lines: cabc.Sequence[str], index: int) -> bool:
    """Return True for empty or whitespace-only lines."""
    return not lines[index].strip()


LINE_CLASSIFIERS: tuple[tuple[LineKind, LinePredicate], ...] = (
    (LineKind.FENCE, is_fence),
    (LineKind.HEADING, is_heading),
    (LineKind.TABLE_ROW, is_table_row),
    (LineKind.LIST_ITEM, is_list_item),
    (LineKind.BLOCKQUOTE, is_blockquote),
    (LineKind.BLANK, is_blank),
)


def classify_line(lines: cabc.Sequence[str], index: int) -> LineKind:
    """Return the kind of ``lines[index]`` using the first matching predicate.

    Parameters
    ----------
    lines : Sequence[str]
        Every line of the block being rendered.
    index : int
        Position of the line to classify.

    Returns
    -------
    LineKind
        ``LineKind.TEXT`` when no predicate accepts the line.
    """
    for kind, predicate in LINE_CLASSIFIERS:
        if predicate(lines, index):
            return kind
    return LineKind.TEXT


def list_kind(marker: str) -> ListKind:
    """Map a list marker (``*``, ``-`` or ``N.``) onto its list family."""
    if marker in ("*", "-"):
        return ListKind.UNORDERED
    return ListKind.ORDERED


__all__ = [
    "BLOCKQUOTE_PATTERN",
    "FENCE_MARKER",
    "HEADING_PATTERN",
    "LINE_CLASSIFIERS",
    "LIST_ITEM_PATTERN",
    "TABLE_SEPARATOR",
    "classify_line",
    "is_blank",
    "is_blockquote",
    "is_fence",
    "is_heading",
    "is_list_item",
    "is_table_continuation",
    "is_table_row",
    "list_kind",
]
