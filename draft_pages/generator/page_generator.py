"""Preview and export documents for rendered articles.

This module holds the two call sites of the renderer. :class:`PreviewPageBuilder`
renders every block through :meth:`MarkdownRenderer.render_preview` into a
standalone preview page with table-of-contents navigation, and
:class:`ArticleExporter` concatenates :meth:`MarkdownRenderer.render_html`
fragments into a minimal, Word-compatible HTML document suitable for
print-to-PDF or a ``.doc`` download. :func:`fetch_markdown` downloads drafts
served over HTTP.

Example
-------
>>> from draft_pages.config import RenderConfig
>>> from draft_pages.generator import ArticleExporter
>>> from draft_pages.markdown_parser import parse_article
>>> exporter = ArticleExporter(RenderConfig())
>>> article = parse_article("# Hello\n\nWorld", "Untitled")
>>> "<h1>Hello</h1>" in exporter.build_document(article)
True
"""

from __future__ import annotations

import logging
import re
import typing as typ
from pathlib import Path

import requests
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from draft_pages._constants import (
    DEFAULT_EXPORT_STEM,
    EXPORT_SUFFIXES,
    EXPORT_TEMPLATE,
    PREVIEW_FILENAME,
    PREVIEW_TEMPLATE,
    WORD_BOM,
)
from draft_pages.markdown_parser import match_image_block

from .renderer import MarkdownRenderer

if typ.TYPE_CHECKING:
    from draft_pages.config import RenderConfig
    from draft_pages.markdown_parser import ArticleDocument

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def _build_environment(templates_dir: Path) -> Environment:
    """Return the Jinja environment shared by the preview and export builders."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def export_filename(title: str, fmt: str) -> str:
    """Return the download filename for ``title`` in export format ``fmt``.

    Whitespace characters (and path separators) become hyphens; an empty
    title falls back to ``article``.

    Raises
    ------
    ValueError
        If ``fmt`` is not a supported export format.
    """
    suffix = EXPORT_SUFFIXES.get(fmt)
    if suffix is None:
        msg = f"Unsupported export format '{fmt}'."
        raise ValueError(msg)
    stem = re.sub(r"[\s/\\]", "-", title.strip()) or DEFAULT_EXPORT_STEM
    return f"{stem}{suffix}"


class ArticleExporter:
    """Compose rendered article blocks into a standalone export document."""

    def __init__(
        self,
        config: RenderConfig,
        *,
        templates_dir: Path | None = None,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        """Initialize the exporter with configuration and template context.

        Parameters
        ----------
        config : RenderConfig
            Loaded configuration providing the output folder, export format,
            and element styles.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        renderer : MarkdownRenderer, optional
            Renderer override; defaults to one built from ``config``.
        """
        self.config = config
        self.renderer = renderer or MarkdownRenderer.from_config(config)
        self.env = _build_environment(templates_dir or DEFAULT_TEMPLATES_DIR)
        self.template = self.env.get_template(EXPORT_TEMPLATE)

    def build_document(
        self, article: ArticleDocument, *, image_url: str | None = None
    ) -> str:
        """Render ``article`` into a complete HTML document string."""
        body = "".join(self.renderer.render_html(block) for block in article.blocks)
        context = {
            "title": article.title,
            "image_url": image_url,
            "body": Markup(body),
            "code_css": self._code_css(),
        }
        return self.template.render(**context)

    def write(
        self,
        article: ArticleDocument,
        *,
        fmt: str | None = None,
        output_dir: Path | None = None,
        image_url: str | None = None,
    ) -> Path:
        """Write the export document to disk and return its path.

        Parameters
        ----------
        article : ArticleDocument
            Parsed draft to export.
        fmt : str, optional
            ``"html"`` (print-to-PDF) or ``"doc"`` (Word); defaults to the
            configured export format.
        output_dir : Path, optional
            Destination folder; defaults to the configured output folder.
        image_url : str, optional
            Header image placed above the title.

        Returns
        -------
        Path
            Location of the written document.

        Raises
        ------
        ValueError
            If ``fmt`` is not a supported export format.
        """
        export_format = fmt or self.config.export.export_format
        filename = export_filename(article.title, export_format)
        out_dir = output_dir or self.config.export.output_dir
        out_dir.mkdir(parents=True, exist_ok=True)
        html = self.build_document(article, image_url=image_url)
        if export_format == "doc":
            html = WORD_BOM + html
        output_path = out_dir / filename
        output_path.write_text(html, encoding="utf-8")
        logger.info("wrote %s export to %s", export_format, output_path)
        return output_path

    def _code_css(self) -> str:
        if not self.config.export.highlight_code:
            return ""
        return self.renderer.stylesheet


class PreviewPageBuilder:
    """Render the live-preview page for an article draft."""

    def __init__(
        self,
        config: RenderConfig,
        *,
        templates_dir: Path | None = None,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment."""
        self.config = config
        self.renderer = renderer or MarkdownRenderer.from_config(config)
        self.env = _build_environment(templates_dir or DEFAULT_TEMPLATES_DIR)
        self.template = self.env.get_template(PREVIEW_TEMPLATE)

    def build(self, article: ArticleDocument, *, image_url: str | None = None) -> str:
        """Render the preview page HTML for ``article``.

        Blocks made of a single Markdown image are shown as figures; every
        other block goes through :meth:`MarkdownRenderer.render_preview`.
        """
        context = {
            "title": article.title,
            "image_url": image_url,
            "toc": article.toc,
            "blocks": [self._preview_block(block) for block in article.blocks],
            "code_css": self.renderer.stylesheet
            if self.config.export.highlight_code
            else "",
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    def _preview_block(self, block: str) -> dict[str, typ.Any]:
        image = match_image_block(block)
        if image is not None:
            return {"image": image, "html": None}
        return {"image": None, "html": self.renderer.render_preview(block)}

    def write(
        self,
        article: ArticleDocument,
        *,
        output_dir: Path | None = None,
        image_url: str | None = None,
    ) -> Path:
        """Render and write the preview page, returning the output path."""
        out_dir = output_dir or self.config.export.output_dir
        out_dir.mkdir(parents=True, exist_ok=True)
        output_path = out_dir / PREVIEW_FILENAME
        output_path.write_text(self.build(article, image_url=image_url), encoding="utf-8")
        logger.info("wrote preview to %s", output_path)
        return output_path


def fetch_markdown(url: str, *, timeout: float = 30) -> str:
    """Download markdown from ``url`` with retries on transient server errors.

    Raises
    ------
    requests.HTTPError
        If the final response carries an error status.
    """
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    try:
        logger.debug("fetching markdown from %s", url)
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.text
    finally:
        session.close()


__all__ = [
    "ArticleExporter",
    "PreviewPageBuilder",
    "export_filename",
    "fetch_markdown",
]
