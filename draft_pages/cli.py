"""Cyclopts CLI entrypoint for rendering, previewing, and exporting article drafts.

The ``pages`` console script defined here renders AI-drafted Markdown into
HTML fragments, builds a live-preview page with table-of-contents navigation,
exports print/Word-ready documents, and lists heading anchors. Sources may be
local files, ``-`` for standard input, or ``http(s)`` URLs.

Examples
--------
Render a draft into an HTML fragment on stdout:

>>> from draft_pages.cli import app
>>> app(["render", "draft.md"])  # doctest: +SKIP

Export a Word document into a custom directory:

>>> app(
...     ["export", "draft.md", "--format", "doc", "--output-dir", "dist"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import sys
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json as msgspec_json
from cyclopts import App, Parameter

from .config import resolve_render_config
from .generator import (
    ArticleExporter,
    MarkdownRenderer,
    PreviewPageBuilder,
    fetch_markdown,
)
from .markdown_parser import build_toc, parse_article, split_blocks

LOG_LEVEL_ENV = "DRAFT_PAGES_LOG_LEVEL"

app = App(name="pages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _read_source(source: str) -> str:
    """Return markdown from a file path, ``-`` (stdin), or an http(s) URL."""
    if source == "-":
        return sys.stdin.read()
    if source.startswith(("http://", "https://")):
        return fetch_markdown(source)
    path = Path(source)
    if not path.exists():
        msg = f"Markdown source '{source}' not found."
        raise FileNotFoundError(msg)
    return path.read_text(encoding="utf-8")


@app.command(help="Render Markdown into an HTML fragment, block by block.")
def render(
    source: typ.Annotated[str, Parameter(help="Markdown file, '-' or URL")],
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Write the fragment here instead of stdout")
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to render config", env_var="INPUT_CONFIG")
    ] = None,
) -> None:
    """Render ``source`` into an HTML fragment.

    Parameters
    ----------
    source : str
        Markdown file path, ``-`` for stdin, or an ``http(s)`` URL.
    output : Path or None, optional
        Destination file; the fragment is printed to stdout when omitted.
    config : Path or None, optional
        Render configuration file; built-in defaults apply when omitted and
        ``config/article.yaml`` is absent.
    """
    render_config = resolve_render_config(config)
    renderer = MarkdownRenderer.from_config(render_config)
    markdown_text = _read_source(source)
    html = "".join(renderer.render_html(block) for block in split_blocks(markdown_text))
    if output is None:
        print(html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html + "\n", encoding="utf-8")
    print(f"wrote {_format_path(output)}")


@app.command(help="Build the live-preview page for an article draft.")
def preview(
    source: typ.Annotated[str, Parameter(help="Markdown file, '-' or URL")],
    *,
    title: typ.Annotated[
        str | None, Parameter(help="Override the article title")
    ] = None,
    image_url: typ.Annotated[
        str | None, Parameter(help="Header image URL", env_var="INPUT_IMAGE_URL")
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to render config", env_var="INPUT_CONFIG")
    ] = None,
) -> None:
    """Write ``preview.html`` for the draft at ``source``."""
    render_config = resolve_render_config(config)
    article = parse_article(_read_source(source), render_config.export.fallback_title)
    if title:
        article.title = title
    path = PreviewPageBuilder(render_config).write(
        article, output_dir=output_dir, image_url=image_url
    )
    print(f"wrote {_format_path(path)}")


@app.command(help="Export an article draft as a print-ready HTML or Word document.")
def export(
    source: typ.Annotated[str, Parameter(help="Markdown file, '-' or URL")],
    *,
    fmt: typ.Annotated[
        str | None,
        Parameter(name="--format", help="Export format: html or doc"),
    ] = None,
    title: typ.Annotated[
        str | None, Parameter(help="Override the article title")
    ] = None,
    image_url: typ.Annotated[
        str | None, Parameter(help="Header image URL", env_var="INPUT_IMAGE_URL")
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to render config", env_var="INPUT_CONFIG")
    ] = None,
) -> None:
    """Export the draft at ``source`` into a standalone document.

    Parameters
    ----------
    source : str
        Markdown file path, ``-`` for stdin, or an ``http(s)`` URL.
    fmt : str or None, optional
        ``html`` for print-to-PDF or ``doc`` for Word; defaults to the
        configured export format.
    title : str or None, optional
        Title override; otherwise the first ``#`` heading or the configured
        fallback title is used.
    image_url : str or None, optional
        Header image placed above the title.
    output_dir : Path or None, optional
        Destination folder override.
    config : Path or None, optional
        Render configuration file.

    Raises
    ------
    ValueError
        If ``fmt`` is not a supported export format.
    """
    render_config = resolve_render_config(config)
    article = parse_article(_read_source(source), render_config.export.fallback_title)
    if title:
        article.title = title
    path = ArticleExporter(render_config).write(
        article, fmt=fmt, output_dir=output_dir, image_url=image_url
    )
    print(f"wrote {_format_path(path)}")


@app.command(help="List the table-of-contents entries for a draft.")
def toc(
    source: typ.Annotated[str, Parameter(help="Markdown file, '-' or URL")],
    *,
    as_json: typ.Annotated[
        bool, Parameter(name="--json", help="Emit entries as JSON")
    ] = False,
) -> None:
    """Print the level 2-6 headings of ``source`` with their anchor ids."""
    entries = build_toc(_read_source(source))
    if as_json:
        print(msgspec_json.encode(entries).decode("utf-8"))
        return
    for entry in entries:
        print(f"{entry.level} {entry.text} #{entry.id}")


def main() -> None:
    """Invoke the Cyclopts application that powers the `pages` console command.

    Logging is configured from ``DRAFT_PAGES_LOG_LEVEL`` (default
    ``WARNING``) before the requested subcommand runs.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    logging.basicConfig(
        level=os.getenv(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
