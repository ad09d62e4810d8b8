from __future__ import annotations

import re

from turtle_preview_core.models import ScanResult, TagPosition

_HEAD_TAGS = frozenset(
    {"!doctype", "html", "head", "link", "meta", "base", "title", "script", "style"}
)
# Content of these elements is skipped up to the matching end tag.
_RAW_TEXT_TAGS = frozenset({"title", "script", "style"})
_END_TAG_NAME_RE = re.compile(r"/\w+")
_WORD_RE = re.compile(r"\w")


def _is_space(ch: str) -> bool:
    # U+FEFF counts as whitespace, so a leading byte order mark is skipped
    return ch.isspace() or ch == "\ufeff"


def _skip_space(html: str, pos: int) -> int:
    while pos < len(html) and _is_space(html[pos]):
        pos += 1
    return pos


def _skip_run(html: str, pos: int, stops: str) -> int:
    """Advance past characters that are neither whitespace nor in `stops`."""
    while pos < len(html) and not _is_space(html[pos]) and html[pos] not in stops:
        pos += 1
    return pos


def _is_head_tag(name: str) -> bool:
    return name in _HEAD_TAGS or _END_TAG_NAME_RE.fullmatch(name) is not None


def _match_tag(html: str, pos: int) -> tuple[str, int] | None:
    """
    Read one `<name attr=value ...>` token starting at `pos`.

    Returns the tag name as written and the offset just past `>`, or None when
    the text there is not such a token (no `>`, or an attribute without `=`).
    Every attribute needs a value, which may be bare, '...' or "...".
    """
    if not html.startswith("<", pos):
        return None
    name_start = pos + 1
    name_end = _skip_run(html, name_start, ">")
    # The name ends on a word boundary; trailing punctuation starts the attributes.
    while name_end > name_start and not _WORD_RE.match(html[name_end - 1]):
        name_end -= 1
    if name_end == name_start:
        return None

    pos = name_end
    while True:
        pos = _skip_space(html, pos)
        if pos >= len(html):
            return None
        if html[pos] == ">":
            return html[name_start:name_end], pos + 1

        attr_end = _skip_run(html, pos, "=>")
        if attr_end == pos:
            return None
        pos = _skip_space(html, attr_end)
        if not html.startswith("=", pos):
            return None
        pos = _skip_space(html, pos + 1)
        if pos >= len(html):
            return None

        quote = html[pos]
        if quote in "'\"":
            close = html.find(quote, pos + 1)
            value = html[pos + 1 : close] if close >= 0 else ""
            if close >= 0 and any(_is_space(ch) or ch == ">" for ch in value):
                pos = close + 1
                continue
        value_end = _skip_run(html, pos, ">")
        if value_end == pos:
            return None
        pos = value_end


def _match_end_tag(html: str, name: str, pos: int) -> tuple[int, int] | None:
    """Find the nearest `</name ...>` at or after `pos`, ignoring case."""
    opening = re.compile(rf"</{re.escape(name)}\b", re.I).search(html, pos)
    if opening is None:
        return None
    close = html.find(">", opening.end())
    if close < 0:
        return None
    return opening.start(), close + 1


def scan_html_top(html: str) -> ScanResult:
    """
    Scan the head-level markup at the top of an HTML fragment.

    Walks whitespace, comments and recognized head tags (`<!doctype>`, `<html>`,
    `<head>`, `<link>`, `<meta>`, `<base>`, `<title>`, `<script>`, `<style>`, and
    any end tag), remembering where each tag name first appears. Scanning stops
    at `<body>` or at the first thing that is not head markup; `body_pos` is that
    offset, or 0 when nothing at all was recognized.

    Runs in linear time and never raises: unrecognized or malformed markup just
    ends the head region.
    """
    html = html or ""
    positions: dict[str, TagPosition] = {}
    pos = 0
    scanned = False
    has_body = False

    while True:
        pos = _skip_space(html, pos)

        if html.startswith("<!--", pos):
            comment_end = html.find("-->", pos + 4)
            if comment_end >= 0:
                scanned = True
                pos = comment_end + 3
                continue

        tag = _match_tag(html, pos)
        name = tag[0].lower() if tag else ""

        if tag and _is_head_tag(name):
            scanned = True
            positions.setdefault(name, TagPosition(offset=pos, length=tag[1] - pos))
            pos = tag[1]
            if name not in _RAW_TEXT_TAGS:
                continue
            end_tag = _match_end_tag(html, name, pos)
            if end_tag:
                start, end = end_tag
                positions.setdefault("/" + name, TagPosition(offset=start, length=end - start))
                pos = end
            continue

        if name == "body":
            scanned = True
            has_body = True

        return ScanResult(
            positions=positions,
            has_body=has_body,
            body_pos=pos if scanned else 0,
        )
