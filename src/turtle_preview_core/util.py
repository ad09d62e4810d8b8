from __future__ import annotations

import base64
import html


def escape_html(value: object) -> str:
    return html.escape(str(value), quote=True)


def base64_text(data: str | bytes) -> str:
    """
    Base64 for a data: URI.

    Strings are treated as binary strings (one byte per code point) when they
    fit in latin-1, otherwise they are UTF-8 encoded.
    """
    if isinstance(data, str):
        try:
            raw = data.encode("latin-1")
        except UnicodeEncodeError:
            raw = data.encode("utf-8")
    else:
        raw = bytes(data)
    return base64.b64encode(raw).decode("ascii")


def as_text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data or ""
