"""Unit tests for the article helpers in ``draft_pages.markdown_parser``.

The helpers run before the renderer: they pull the title off a draft, split
the body into independently renderable blocks, and scan headings into
table-of-contents entries. The TOC tests also check that every entry id
matches an anchor the renderer actually emits.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from draft_pages.generator import MarkdownRenderer, TocEntry
from draft_pages.generator.models import ImageBlock
from draft_pages.markdown_parser import (
    build_toc,
    extract_title,
    match_image_block,
    parse_article,
    split_blocks,
)


def test_extract_title_uses_first_h1() -> None:
    """The first ``# `` line becomes the title; the rest is the body."""
    title, body = extract_title("Preamble\n#  My Article \n\nBody text\n", "Fallback")
    assert title == "My Article"
    assert body == "Body text"


def test_extract_title_ignores_deeper_headings() -> None:
    """``##`` headings are never mistaken for the title."""
    source = "## Section\nText"
    title, body = extract_title(source, "Fallback")
    assert title == "Fallback"
    assert body == source


def test_split_blocks_on_blank_lines_and_structure() -> None:
    """Blocks split on blank lines, tables, headings, and fences."""
    source = (
        "Intro para\n"
        "| A | B |\n"
        "|---|---|\n"
        "| 1 | 2 |\n"
        "After table\n"
        "\n"
        "## Heading\n"
        "Text\n"
        "```\n"
        "code\n"
        "\n"
        "more\n"
        "```\n"
    )
    assert split_blocks(source) == [
        "Intro para",
        "| A | B |\n|---|---|\n| 1 | 2 |",
        "After table",
        "## Heading\nText",
        "```\ncode\n\nmore\n```",
    ]


def test_split_blocks_heading_starts_new_block() -> None:
    """A heading directly below text opens a new block."""
    assert split_blocks("Text\n### Next\nMore") == ["Text", "### Next\nMore"]


def test_split_blocks_drops_empty_content() -> None:
    """Whitespace-only input yields no blocks."""
    assert split_blocks("\n  \n\n") == []


def test_build_toc_levels_and_ids() -> None:
    """Level 2-6 headings become entries; the title level is skipped."""
    source = "# Title\n## First Part\ntext\n### Deep  Dive--Now\n###### Six"
    assert build_toc(source) == [
        TocEntry(level=2, text="First Part", id="first-part"),
        TocEntry(level=3, text="Deep  Dive--Now", id="deep-dive-now"),
        TocEntry(level=6, text="Six", id="six"),
    ]


def test_build_toc_skips_fenced_code() -> None:
    """Headings inside fenced code are not TOC entries."""
    source = "## Real\n```bash\n## not a heading\n```\n## Also Real"
    assert [entry.text for entry in build_toc(source)] == ["Real", "Also Real"]


def test_toc_ids_match_rendered_heading_ids() -> None:
    """Every TOC id resolves to a heading id produced by the renderer."""
    article = parse_article(
        "# Guide\n\n## Why **It** Matters\nText\n\n### Step 1: Plan & Ship\n",
        "Fallback",
    )
    renderer = MarkdownRenderer()
    html = "".join(renderer.render_html(block) for block in article.blocks)
    soup = BeautifulSoup(html, "html.parser")
    heading_ids = [tag["id"] for tag in soup.find_all(["h2", "h3", "h4", "h5", "h6"])]
    assert [entry.id for entry in article.toc] == heading_ids


@pytest.mark.parametrize(
    ("block", "expected"),
    [
        (
            "![Chart](data:image/png;base64,AAAA)",
            ImageBlock(alt="Chart", src="data:image/png;base64,AAAA"),
        ),
        (
            "  ![ A cat ](https://img.example/cat.jpg)\n",
            ImageBlock(alt="A cat", src="https://img.example/cat.jpg"),
        ),
        ("See ![Chart](chart.png) here", None),
        ("![one](a.png)\n![two](b.png)", None),
        ("[link](https://example.com)", None),
    ],
)
def test_match_image_block(block: str, expected: ImageBlock | None) -> None:
    """Only blocks consisting of a single image are matched."""
    assert match_image_block(block) == expected


def test_parse_article_assembles_parts() -> None:
    """parse_article combines title, body, blocks, and TOC."""
    article = parse_article("# Hello\n\n## Intro\nBody\n\nMore", "Fallback")
    assert article.title == "Hello"
    assert article.body == "## Intro\nBody\n\nMore"
    assert article.blocks == ["## Intro\nBody", "More"]
    assert article.toc == [TocEntry(level=2, text="Intro", id="intro")]
