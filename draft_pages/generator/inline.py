"""Inline span formatting and heading slugs for rendered Markdown.

Inline spans are converted in a fixed order: image syntax is dropped, then
links, bold, italic and inline code are turned into HTML. Tags produced by an
earlier step are parked behind opaque tokens until the end, so later patterns
never see them (an underscore inside a link target or a class name must not
become emphasis).
"""

from __future__ import annotations

import re
from html import escape

from draft_pages.config.models import RenderStyle

IMAGE_PATTERN = re.compile(r"!\[(.*?)\]\((.*?)\)")
LINK_PATTERN = re.compile(r"\[(.*?)\]\((.*?)\)")
BOLD_PATTERN = re.compile(r"(\*\*|__)(.*?)\1")
ITALIC_PATTERN = re.compile(r"(\*|_)(.*?)\1")
INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
_TOKEN_PATTERN = re.compile("\x00(\\d+)\x00")


def slugify(text: str) -> str:
    """Return the anchor id used for a heading with ``text``.

    The text is lowercased and trimmed, whitespace runs become single hyphens,
    anything that is neither a word character nor a hyphen is removed, and
    repeated hyphens collapse to one. Identical headings share a slug.
    Word characters are matched with Unicode semantics, so accented letters
    stay in the slug (``"Café Überblick"`` becomes ``"café-überblick"``);
    table-of-contents links use the same function and still resolve.

    Examples
    --------
    >>> slugify("Getting Started")
    'getting-started'
    >>> slugify("A  B--C")
    'a-b-c'
    """
    slug = text.lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w\-]+", "", slug)
    return re.sub(r"-{2,}", "-", slug)


def class_attr(value: str) -> str:
    """Return a ``class`` attribute fragment, or nothing for empty classes."""
    if not value:
        return ""
    return f' class="{escape(value, quote=True)}"'


class InlineFormatter:
    """Apply inline Markdown spans to a single run of display text."""

    def __init__(self, style: RenderStyle | None = None) -> None:
        self.style = style or RenderStyle()

    def format(self, text: str) -> str:
        """Return ``text`` with images stripped and spans converted to HTML."""
        parked: list[str] = []

        def _park(markup: str) -> str:
            parked.append(markup)
            return f"\x00{len(parked) - 1}\x00"

        def _link(match: re.Match[str]) -> str:
            href = escape(match.group(2), quote=True)
            opening = (
                f'<a href="{href}" target="_blank" rel="noopener noreferrer"'
                f"{class_attr(self.style.link)}>"
            )
            return _park(opening) + match.group(1) + _park("</a>")

        def _strong(match: re.Match[str]) -> str:
            opening = f"<strong{class_attr(self.style.strong)}>"
            return _park(opening) + match.group(2) + _park("</strong>")

        def _emphasis(match: re.Match[str]) -> str:
            return _park("<em>") + match.group(2) + _park("</em>")

        def _code(match: re.Match[str]) -> str:
            opening = f"<code{class_attr(self.style.inline_code)}>"
            return _park(opening) + match.group(1) + _park("</code>")

        processed = text.replace("\x00", "")
        processed = IMAGE_PATTERN.sub("", processed)
        processed = LINK_PATTERN.sub(_link, processed)
        processed = BOLD_PATTERN.sub(_strong, processed)
        processed = ITALIC_PATTERN.sub(_emphasis, processed)
        processed = INLINE_CODE_PATTERN.sub(_code, processed)
        return _TOKEN_PATTERN.sub(lambda match: parked[int(match.group(1))], processed)

    __call__ = format


__all__ = [
    "BOLD_PATTERN",
    "IMAGE_PATTERN",
    "INLINE_CODE_PATTERN",
    "ITALIC_PATTERN",
    "LINK_PATTERN",
    "InlineFormatter",
    "class_attr",
    "slugify",
]
