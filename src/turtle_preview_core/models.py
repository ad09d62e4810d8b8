from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from turtle_preview_core.meta import DocumentMeta


@dataclass(frozen=True)
class TagPosition:
    offset: int
    length: int


@dataclass(frozen=True)
class ScanResult:
    positions: dict[str, TagPosition] = field(default_factory=dict)
    has_body: bool = False
    body_pos: int = 0


@dataclass(frozen=True)
class SetupScript:
    src: str | None = None
    url: str | None = None
    type: str | None = None
    code: str | None = None

    @property
    def source(self) -> str | None:
        return self.url or self.src


@dataclass(frozen=True)
class PreviewDocument:
    """
    A stored file as the editor sees it.

    `data` is the program text for turtle documents, or the raw file content
    (text, or bytes for images). `meta` is the raw metadata mapping, an already
    normalized `DocumentMeta`, or None.
    """

    data: str | bytes = ""
    meta: Mapping[str, Any] | DocumentMeta | None = None
