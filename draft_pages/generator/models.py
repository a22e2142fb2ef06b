"""Shared types used by the Markdown rendering pipeline."""

from __future__ import annotations

import dataclasses as dc
import enum


class LineKind(enum.Enum):
    """Classification assigned to a single physical line of Markdown."""

    FENCE = "fence"
    HEADING = "heading"
    TABLE_ROW = "table_row"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    BLANK = "blank"
    TEXT = "text"


class ListKind(enum.Enum):
    """Marker family of a flat list; the value doubles as the HTML tag."""

    UNORDERED = "ul"
    ORDERED = "ol"


class BlockMode(enum.Enum):
    """Accumulator the block state machine is currently filling."""

    NONE = enum.auto()
    PARAGRAPH = enum.auto()
    LIST = enum.auto()
    TABLE = enum.auto()
    CODE_BLOCK = enum.auto()


@dc.dataclass(frozen=True, slots=True)
class RenderedElement:
    """One HTML fragment emitted by the renderer.

    Attributes
    ----------
    tag : str
        Enclosing element name (``p``, ``h2``, ``ul``, ``table``, ``pre``...).
    html : str
        Complete markup for the element, including the enclosing tag.
    """

    tag: str
    html: str


@dc.dataclass(frozen=True, slots=True)
class TocEntry:
    """Table-of-contents entry pointing at a rendered heading anchor."""

    level: int
    text: str
    id: str


@dc.dataclass(frozen=True, slots=True)
class ImageBlock:
    """Block consisting of a single Markdown image, shown as a figure in previews."""

    alt: str
    src: str


__all__ = [
    "BlockMode",
    "ImageBlock",
    "LineKind",
    "ListKind",
    "RenderedElement",
    "TocEntry",
]
