from __future__ import annotations

import re

TURTLE_MIME_TYPE = "text/x-pencilcode"

MIME_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "png": "image/png",
    "svg": "image/svg+xml",
    "bmp": "image/x-ms-bmp",
    "ico": "image/x-icon",
    "htm": "text/html",
    "html": "text/html",
    "txt": "text/plain",
    "text": "text/plain",
    "css": "text/css",
    "coffee": "text/coffeescript",
    "js": "text/javascript",
    "xml": "text/xml",
}

_PARAMS_RE = re.compile(r";.*$", re.S)


def mime_for_filename(filename: str | None) -> str:
    """
    MIME type for a stored file name.

    Anything without a known extension is a turtle program. Text types carry
    an explicit utf-8 charset.
    """
    result = None
    if filename and filename.find(".") > 0:
        result = MIME_TYPES.get(filename.rsplit(".", 1)[1])
    if not result:
        result = TURTLE_MIME_TYPE
    if result.startswith("text/"):
        result += ";charset=utf-8"
    return result


def infer_script_type(filename: str | None) -> str:
    mime = mime_for_filename(filename)
    if mime.startswith(TURTLE_MIME_TYPE):
        mime = "text/coffeescript"
    # script type attributes do not take parameters
    return _PARAMS_RE.sub("", mime)
