"""Common literal values used across draft_pages.

These constants keep filenames and format metadata centralized so the
builders, CLI, and tests can import the same values without drifting. Intended
for internal use within the draft_pages package.

Examples
--------
>>> from draft_pages import _constants
>>> _constants.EXPORT_SUFFIXES["doc"]
'.doc'
>>> _constants.PREVIEW_FILENAME
'preview.html'
"""

EXPORT_SUFFIXES: dict[str, str] = {"html": ".html", "doc": ".doc"}
EXPORT_TEMPLATE = "export_document.jinja"
PREVIEW_TEMPLATE = "preview_page.jinja"
PREVIEW_FILENAME = "preview.html"
WORD_BOM = "\ufeff"
DEFAULT_EXPORT_STEM = "article"
