"""Unit tests for inline spans and slugs in ``draft_pages.generator.inline``."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from draft_pages.config import RenderStyle
from draft_pages.generator.inline import InlineFormatter, class_attr, slugify


@pytest.fixture
def formatter() -> InlineFormatter:
    """Return a formatter with the default theme."""
    return InlineFormatter()


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Getting Started", "getting-started"),
        ("A  B--C", "a-b-c"),
        ("  Why It Matters?  ", "why-it-matters"),
        ("Step 1: Plan & Ship", "step-1-plan-ship"),
        ("snake_case stays", "snake_case-stays"),
        ("Café Überblick", "café-überblick"),
        ("", ""),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    """Slugs lowercase, hyphenate whitespace, and drop punctuation."""
    assert slugify(text) == expected


def test_images_are_stripped(formatter: InlineFormatter) -> None:
    """Image syntax is removed entirely."""
    assert formatter("see ![chart](chart.png) here") == "see  here"


def test_links_open_in_new_context(formatter: InlineFormatter) -> None:
    """Links target a new browsing context without opener or referrer."""
    anchor = BeautifulSoup(formatter("[Docs](https://example.com)"), "html.parser").a
    assert anchor["href"] == "https://example.com"
    assert anchor["target"] == "_blank"
    assert anchor["rel"] == ["noopener", "noreferrer"]
    assert anchor.get_text() == "Docs"


def test_underscores_in_link_target_survive(formatter: InlineFormatter) -> None:
    """Emphasis patterns never rewrite markup produced by earlier steps."""
    html = formatter("[x](https://example.com/a_b_c) and _em_")
    soup = BeautifulSoup(html, "html.parser")
    assert soup.a["href"] == "https://example.com/a_b_c"
    assert [em.get_text() for em in soup.find_all("em")] == ["em"]


def test_link_href_is_attribute_escaped(formatter: InlineFormatter) -> None:
    """Quotes in a link target cannot break out of the attribute."""
    html = formatter('[x](https://e.com/"onmouseover)')
    assert 'href="https://e.com/&quot;onmouseover"' in html


def test_bold_variants(formatter: InlineFormatter) -> None:
    """Both ``**`` and ``__`` produce strong emphasis."""
    soup = BeautifulSoup(formatter("**one** and __two__"), "html.parser")
    assert [tag.get_text() for tag in soup.find_all("strong")] == ["one", "two"]
    assert soup.find("em") is None


def test_italic_variants(formatter: InlineFormatter) -> None:
    """Both ``*`` and ``_`` produce emphasis."""
    soup = BeautifulSoup(formatter("*one* and _two_"), "html.parser")
    assert [tag.get_text() for tag in soup.find_all("em")] == ["one", "two"]


def test_bold_inside_link_text(formatter: InlineFormatter) -> None:
    """Link text keeps its own inline spans."""
    soup = BeautifulSoup(formatter("[**Guide**](/guide)"), "html.parser")
    assert soup.a.strong.get_text() == "Guide"


def test_inline_code_uses_configured_class() -> None:
    """Inline code spans use the configured class names."""
    formatter = InlineFormatter(RenderStyle(inline_code="mono"))
    assert formatter("run `make`") == 'run <code class="mono">make</code>'


def test_class_attr_omits_empty_values() -> None:
    """Empty class strings produce no attribute at all."""
    assert class_attr("") == ""
    assert class_attr('a "b"') == ' class="a &quot;b&quot;"'
