from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from turtle_preview_core.assemble import wrap_turtle
from turtle_preview_core.config import Settings, load_settings
from turtle_preview_core.filetype import TURTLE_MIME_TYPE, mime_for_filename
from turtle_preview_core.models import PreviewDocument, SetupScript
from turtle_preview_core.util import as_text, base64_text, escape_html

logger = logging.getLogger(__name__)

_UNSAFE_HTML_RE = re.compile(r"<script|<i?frame|<object", re.I)
_SVG_XMLNS_RE = re.compile(r"<(?:\w+:)?svg[^>]+xmlns")
_HAS_BASE_RE = re.compile(r"<base", re.I)
_FIRST_CONTENT_TAG_RE = re.compile(
    r"(?:<link|<script|<style|<body|<img|<iframe|<frame|<meta|<a)\b", re.I
)
_BASE_INSERT_AFTER = (
    re.compile(r"<head\b[^>]*>\n?", re.I),
    re.compile(r"<html\b[^>]*>\n?", re.I),
    re.compile(r"<!doctype\b[^>]*>\n?", re.I),
)

SVG_XMLNS_WARNING = (
    "<pre>To use this svg as an image, add xmlns:\n"
    '&lt;svg <mark>xmlns="http://www.w3.org/2000/svg"</mark>&gt;</pre>'
)


def _image_document(mime_type: str, data: str | bytes, checker_image_url: str) -> str:
    src = "data:" + re.sub(r"\s", "", mime_type) + ";base64," + base64_text(data)
    return "\n".join(
        [
            "<!doctype html>",
            '<html style="min-height:100%">',
            "<body>",
            f'<img src="{src}" style="position:absolute;top:0;bottom:0;left:0;right:0;'
            f'margin:auto;background:url({checker_image_url})">',
            "</body>",
            "</html>",
        ]
    )


def insert_base_href(text: str, target_url: str) -> str:
    """
    Insert `<base href>` right after the first of `<head>`, `<html>` or
    `<!doctype>` that precedes any tag whose URLs the base would affect.
    Falls back to the very start of the text.
    """
    first_content = _FIRST_CONTENT_TAG_RE.search(text)
    insert_at = 0
    for pattern in _BASE_INSERT_AFTER:
        match = pattern.search(text)
        if match and (first_content is None or match.start() < first_content.start()):
            insert_at = match.end()
            break
    return text[:insert_at] + f'<base href="{escape_html(target_url)}" />\n' + text[insert_at:]


def modify_for_preview(
    doc: PreviewDocument,
    domain: str | None,
    filename: str | None,
    target_url: str | None = None,
    *,
    pragmas_only: bool = False,
    setup_scripts: Sequence[SetupScript] | None = None,
    settings: Settings | None = None,
) -> str:
    """
    Render a stored file into something a preview frame can display.

    Turtle programs are assembled into a full document; images and plain text
    are wrapped; HTML gets a `<base>` pointing at `target_url`. An empty string
    means there is nothing safe to show (in pragmas-only mode only script-free
    HTML and SVG are shown).
    """
    settings = settings or load_settings()
    mime_type = mime_for_filename(filename)
    data = doc.data

    if mime_type.startswith(TURTLE_MIME_TYPE):
        data = wrap_turtle(
            doc,
            domain if domain is not None else settings.site_domain,
            pragmas_only=pragmas_only,
            setup_scripts=setup_scripts,
        )
        mime_type = mime_type.replace("/x-pencilcode", "/html", 1)
    elif pragmas_only:
        safe = mime_type.startswith("text/html") and not _UNSAFE_HTML_RE.search(as_text(data))
        if mime_type.startswith("image/svg"):
            safe = True
        if not safe:
            logger.debug("refusing pragmas-only preview filename=%s mime=%s", filename, mime_type)
            return ""

    if not data:
        return ""

    logger.debug("preview filename=%s mime=%s", filename, mime_type)

    if "image/svg" in mime_type:
        text = as_text(data)
        if not _SVG_XMLNS_RE.search(text):
            return text + SVG_XMLNS_WARNING
    if mime_type.startswith("image/"):
        return _image_document(mime_type, data, settings.checker_image_url)

    text = as_text(data)
    if not mime_type.startswith("text/html"):
        return "<PLAINTEXT>" + text
    if target_url and not _HAS_BASE_RE.search(text):
        return insert_base_href(text, target_url)
    return text
