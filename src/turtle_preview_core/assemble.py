from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from turtle_preview_core.filetype import infer_script_type
from turtle_preview_core.head_scan import scan_html_top
from turtle_preview_core.meta import DocumentMeta, LibraryScript, effective_meta
from turtle_preview_core.models import PreviewDocument, SetupScript
from turtle_preview_core.util import as_text, escape_html

logger = logging.getLogger(__name__)

_SCRIPT_TAG_RE = re.compile(r"</?script", re.I)

# Startup hooks evaluated before the program text, per script language.
JS_PREAMBLE = "eval(this._start_ide_js_);\n\n"
CS_PREAMBLE = "eval(this._start_ide_cs_)\n\n"
BLANK_PREAMBLE = "\n\n"


def _library_tag(lib: LibraryScript, domain: str) -> str:
    src = lib.src
    attrs = "".join(
        f' {name}="{escape_html(value)}"' for name, value in (lib.attrs or {}).items()
    )
    if "{site}" in src:
        src = src.replace("{site}", domain)
        # CORS load: script errors from our own site keep their detail
        return f'<script src="{src}" crossorigin="anonymous"{attrs}></script>'
    return f'<script src="{src}"{attrs}></script>'


def _setup_tag(script: SetupScript) -> str | None:
    if script.source:
        script_type = script.type or infer_script_type(script.source)
        return f'<script src="{script.source}" type="{script_type}">\n</script>'
    if script.code:
        type_attr = f' type="{script.type}"' if script.type else ""
        return f"<script{type_attr}>\n{script.code}\n</script>"
    return None


def _preamble(script_type: str) -> str:
    if "javascript" in script_type:
        return JS_PREAMBLE
    if "coffeescript" in script_type:
        return CS_PREAMBLE
    return BLANK_PREAMBLE


def wrap_turtle(
    doc: PreviewDocument,
    domain: str,
    *,
    pragmas_only: bool = False,
    setup_scripts: Sequence[SetupScript] | None = None,
) -> str:
    """
    Merge a turtle program, its markup and its stylesheet into one HTML document.

    The markup (`meta.html`) keeps its own head content; a doctype, `<html>`,
    `<head>` and `<body>` are only synthesized where the markup lacks them. The
    stylesheet lands at the end of the existing head. Library scripts, setup
    scripts and the program script follow the markup.

    In pragmas-only mode markup that carries script is dropped, and the program
    script contains only its startup hook.
    """
    meta: DocumentMeta = effective_meta(doc.meta)
    html = meta.html or ""
    if pragmas_only and _SCRIPT_TAG_RE.search(html):
        logger.debug("dropping markup with script in pragmas-only mode chars=%d", len(html))
        html = ""

    top = scan_html_top(html)
    prefix: list[str] = []
    suffix: list[str] = []

    if "!doctype" not in top.positions:
        prefix.append("<!doctype html>")
        if "html" not in top.positions:
            prefix.append("<html>")
            suffix.insert(0, "</html>")

    if meta.css:
        head_needed = top.body_pos == 0
        if head_needed:
            prefix.append("<head>")
        else:
            split = top.body_pos
            end_head = top.positions.get("/head")
            if end_head is not None:
                split = min(split, end_head.offset)
            if split > 0:
                newline = 1 if html[split : split + 1] == "\n" else 0
                prefix.append(html[: split - newline])
                html = html[split:]
        prefix.extend(["<style>", meta.css, "</style>"])
        if head_needed:
            prefix.append("</head>")
            if not top.has_body:
                prefix.append("<body>")
                suffix.insert(0, "</body>")
    elif top.body_pos == 0 and not top.has_body:
        prefix.append("<body>")
        suffix.insert(0, "</body>")
    elif not html[top.body_pos :].strip():
        suffix.insert(0, "<body></body>")

    # a library without a source has nothing to load
    scripts = [_library_tag(lib, domain or "") for lib in meta.libs if lib.src]
    for script in setup_scripts or ():
        tag = _setup_tag(script)
        if tag is not None:
            scripts.append(tag)

    main_script = f'<script type="{meta.type}">\n' + _preamble(meta.type)
    if not pragmas_only:
        main_script += as_text(doc.data)
    main_script += "\n</script>"

    return "\n".join(prefix) + html + "".join(scripts) + main_script + "".join(suffix)
