r"""Split AI-drafted articles into a title, renderable blocks, and a TOC.

The renderer treats every call as a self-contained region, so callers first
break a draft into blocks. This module owns that caller-side work: pulling the
``#`` title off the draft, splitting the body on blank lines without tearing
fenced code or tables apart, and scanning level 2-6 headings into
table-of-contents entries whose ids match the anchors the renderer emits.

Example
-------
>>> from draft_pages.markdown_parser import parse_article
>>> article = parse_article("# Title\n\n## Intro\nBody text", "Fallback")
>>> article.title
'Title'
>>> [entry.id for entry in article.toc]
['intro']
"""

from __future__ import annotations

import dataclasses as dc
import re

from draft_pages.generator.inline import slugify
from draft_pages.generator.lines import FENCE_MARKER
from draft_pages.generator.models import ImageBlock, TocEntry

TOC_HEADING_PATTERN = re.compile(r"^(#{2,6})\s*(.*)")
TITLE_PREFIX = "# "
IMAGE_BLOCK_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^()\s]+)\)")


@dc.dataclass(slots=True)
class ArticleDocument:
    """Draft split into the parts the preview and export pages need.

    Attributes
    ----------
    title : str
        Text of the first ``#`` heading, or the fallback title.
    body : str
        Markdown following the title line.
    blocks : list[str]
        Body split into independently renderable blocks.
    toc : list[TocEntry]
        Level 2-6 headings found in the body.
    """

    title: str
    body: str
    blocks: list[str]
    toc: list[TocEntry]


def extract_title(markdown_text: str, fallback: str) -> tuple[str, str]:
    """Return ``(title, body)`` for a draft.

    The first line whose trimmed form starts with ``"# "`` supplies the title
    and everything after it becomes the body. Drafts without such a line keep
    their full text as the body and use ``fallback`` as the title.
    """
    lines = markdown_text.split("\n")
    for idx, line in enumerate(lines):
        if line.strip().startswith(TITLE_PREFIX):
            title = re.sub(r"^#\s*", "", line.strip()).strip()
            body = "\n".join(lines[idx + 1 :]).strip()
            return title, body
    return fallback, markdown_text


def split_blocks(markdown_text: str) -> list[str]:
    """Split markdown into blocks on blank lines, keeping fences and tables whole.

    Parameters
    ----------
    markdown_text : str
        Article body to split.

    Returns
    -------
    list[str]
        Trimmed, non-empty blocks in document order. A fenced code block
        (blank lines included) is always one block; a run of lines starting
        with ``|`` forms its own block; a heading starts a new block.
    """
    blocks: list[str] = []
    current: list[str] = []
    in_code = False
    in_table = False

    def _push() -> None:
        content = "\n".join(current).strip()
        if content:
            blocks.append(content)
        current.clear()

    for line in markdown_text.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith(FENCE_MARKER):
            if in_code:
                current.append(line)
                _push()
                in_code = False
            else:
                _push()
                in_table = False
                in_code = True
                current.append(line)
            continue
        if in_code:
            current.append(line)
            continue

        if trimmed.startswith("|"):
            if not in_table:
                _push()
                in_table = True
            current.append(line)
            continue
        if in_table:
            _push()
            in_table = False
            if not trimmed:
                continue

        if not trimmed:
            _push()
            continue
        if trimmed.startswith("#") and current:
            _push()
        current.append(line)
    _push()
    return blocks


def build_toc(markdown_text: str) -> list[TocEntry]:
    """Collect level 2-6 headings as table-of-contents entries.

    Lines inside fenced code blocks are skipped because the renderer never
    turns them into headings; ids come from :func:`slugify`, the same function
    the renderer uses for heading anchors.
    """
    entries: list[TocEntry] = []
    in_code = False
    for line in markdown_text.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith(FENCE_MARKER):
            in_code = not in_code
            continue
        if in_code:
            continue
        match = TOC_HEADING_PATTERN.match(trimmed)
        if match:
            text = match.group(2).strip()
            entries.append(
                TocEntry(level=len(match.group(1)), text=text, id=slugify(text))
            )
    return entries


def match_image_block(block: str) -> ImageBlock | None:
    """Return the image when ``block`` is nothing but one Markdown image.

    The renderer strips inline image syntax, so callers that display images
    check each block here first. Images embedded in surrounding text are not
    matched.

    Examples
    --------
    >>> match_image_block("![Chart](data:image/png;base64,AAAA)")
    ImageBlock(alt='Chart', src='data:image/png;base64,AAAA')
    >>> match_image_block("See ![Chart](chart.png)") is None
    True
    """
    match = IMAGE_BLOCK_PATTERN.fullmatch(block.strip())
    if match is None:
        return None
    return ImageBlock(alt=match.group(1).strip(), src=match.group(2))


def parse_article(markdown_text: str, fallback_title: str) -> ArticleDocument:
    """Split a full draft into title, body, renderable blocks, and TOC entries."""
    title, body = extract_title(markdown_text, fallback_title)
    blocks = split_blocks(body)
    return ArticleDocument(
        title=title,
        body=body,
        blocks=blocks,
        toc=build_toc("\n\n".join(blocks)),
    )


__all__ = [
    "IMAGE_BLOCK_PATTERN",
    "ArticleDocument",
    "build_toc",
    "extract_title",
    "match_image_block",
    "parse_article",
    "split_blocks",
]
