from __future__ import annotations

import base64

import pytest

from turtle_preview_core.config import Settings
from turtle_preview_core.models import PreviewDocument
from turtle_preview_core.preview import SVG_XMLNS_WARNING, insert_base_href, modify_for_preview


@pytest.fixture()
def settings() -> Settings:
    return Settings.model_validate({})


def test_preview_plain_text(settings: Settings) -> None:
    out = modify_for_preview(PreviewDocument(data="a < b"), "example.com", "a.txt", settings=settings)
    assert out == "<PLAINTEXT>a < b"


def test_preview_svg_without_namespace_gets_warning(settings: Settings) -> None:
    svg = "<svg><rect/></svg>"
    out = modify_for_preview(PreviewDocument(data=svg), "example.com", "a.svg", settings=settings)
    assert out == svg + SVG_XMLNS_WARNING
    assert 'xmlns="http://www.w3.org/2000/svg"' in out


def test_preview_svg_with_namespace_is_an_image(settings: Settings) -> None:
    svg = '<svg xmlns="http://www.w3.org/2000/svg"><rect/></svg>'
    out = modify_for_preview(PreviewDocument(data=svg), "example.com", "a.svg", settings=settings)
    assert "data:image/svg+xml;base64," in out


def test_preview_png_is_single_image_document(settings: Settings) -> None:
    data = b"\x89PNG\r\n"
    out = modify_for_preview(PreviewDocument(data=data), "example.com", "a.png", settings=settings)
    assert out.startswith("<!doctype html>\n")
    assert out.count("<img ") == 1
    assert f'src="data:image/png;base64,{base64.b64encode(data).decode()}"' in out
    assert "url(/image/checker.png)" in out


def test_preview_turtle_program_is_assembled(settings: Settings) -> None:
    out = modify_for_preview(PreviewDocument(data="fd 100"), None, "main", settings=settings)
    assert out.startswith("<!doctype html>")
    assert "//pencilcode.net/turtlebits.js" in out
    assert "fd 100" in out


def test_preview_turtle_pragmas_only(settings: Settings) -> None:
    out = modify_for_preview(
        PreviewDocument(data="fd 100"), "example.com", "main", pragmas_only=True, settings=settings
    )
    assert "eval(this._start_ide_cs_)" in out
    assert "fd 100" not in out


def test_preview_pragmas_only_safety(settings: Settings) -> None:
    def render(data: str, filename: str) -> str:
        return modify_for_preview(
            PreviewDocument(data=data), "example.com", filename, pragmas_only=True, settings=settings
        )

    assert render("<p>x</p>", "a.html") == "<p>x</p>"
    assert render("<p>x</p><SCRIPT>x()</SCRIPT>", "a.html") == ""
    assert render("<iframe src=x></iframe>", "a.html") == ""
    assert render("hello", "a.txt") == ""
    assert render("<svg><rect/></svg>", "a.svg").startswith("<svg><rect/></svg><pre>")


def test_preview_empty_content(settings: Settings) -> None:
    assert modify_for_preview(PreviewDocument(data=""), "example.com", "a.html", settings=settings) == ""


def test_preview_inserts_base_after_head(settings: Settings) -> None:
    html = "<html><head></head><body><a href='x'>y</a></body></html>"
    out = modify_for_preview(
        PreviewDocument(data=html), "example.com", "a.html", "https://example.com/u/", settings=settings
    )
    assert out == (
        '<html><head><base href="https://example.com/u/" />\n'
        "</head><body><a href='x'>y</a></body></html>"
    )
    assert out.index("<base") < out.index("<a ")


def test_preview_keeps_existing_base(settings: Settings) -> None:
    html = '<head><base href="/x/"></head>'
    out = modify_for_preview(PreviewDocument(data=html), "example.com", "a.html", "https://e/", settings=settings)
    assert out == html


def test_insert_base_without_wrappers_goes_first() -> None:
    assert insert_base_href("<p>hi</p>", "u") == '<base href="u" />\n<p>hi</p>'


def test_insert_base_after_doctype_before_content() -> None:
    html = "<!doctype html>\n<link rel=x><p>"
    assert insert_base_href(html, "u") == '<!doctype html>\n<base href="u" />\n<link rel=x><p>'


def test_insert_base_skips_head_after_content() -> None:
    html = "<html><meta charset=utf-8><head></head>"
    assert insert_base_href(html, "u") == '<html><base href="u" />\n<meta charset=utf-8><head></head>'
