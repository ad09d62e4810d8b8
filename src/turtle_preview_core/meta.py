from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT_TYPE = "text/coffeescript"


def _as_optional_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return str(value)


class LibraryScript(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = None
    src: str = ""
    # dict keeps insertion order, which is the serialization order
    attrs: dict[str, Any] | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_text(cls, value: Any) -> Any:
        return _as_optional_text(value)

    @field_validator("src", mode="before")
    @classmethod
    def _src_text(cls, value: Any) -> Any:
        return "" if value is None else _as_optional_text(value)

    @field_validator("attrs", mode="before")
    @classmethod
    def _attr_mapping(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return None
        return {str(key): item for key, item in value.items()}


DEFAULT_LIBS: tuple[LibraryScript, ...] = (
    LibraryScript(name="turtle", src="//{site}/turtlebits.js"),
)


class DocumentMeta(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    type: str = DEFAULT_SCRIPT_TYPE
    libs: tuple[LibraryScript, ...] = Field(default=DEFAULT_LIBS)
    css: str | None = None
    html: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value: Any) -> Any:
        return _as_optional_text(value) or DEFAULT_SCRIPT_TYPE

    @field_validator("libs", mode="before")
    @classmethod
    def _default_libs(cls, value: Any) -> Any:
        # an explicit empty list means "no libraries"; only a missing list defaults
        if value is None:
            return DEFAULT_LIBS
        if not isinstance(value, (list, tuple)):
            return ()
        return [lib for lib in value if isinstance(lib, (Mapping, LibraryScript))]

    @field_validator("css", "html", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _as_optional_text(value)


DEFAULT_META = DocumentMeta()

_DEFAULT_META_DUMP: dict[str, Any] = {
    "type": DEFAULT_SCRIPT_TYPE,
    "libs": [{"name": "turtle", "src": "//{site}/turtlebits.js"}],
}


def effective_meta(meta: DocumentMeta | Mapping[str, Any] | None) -> DocumentMeta:
    """
    Normalize raw document metadata, filling in the script type and library list.

    Odd values are coerced rather than rejected: non-string scalars become
    strings, a `libs` value that is not a list means no libraries, and library
    entries that are not objects are dropped. The result is immutable;
    `DEFAULT_META` is shared by every document that carries no metadata of its own.
    """
    if isinstance(meta, DocumentMeta):
        return meta
    if not isinstance(meta, Mapping):
        return DEFAULT_META
    try:
        return DocumentMeta.model_validate(dict(meta))
    except ValidationError as exc:
        logger.warning("unusable document metadata, using defaults: %s", exc)
        return DEFAULT_META


def is_default_meta(meta: DocumentMeta | Mapping[str, Any] | None) -> bool:
    if meta is None:
        return True
    dumped = effective_meta(meta).model_dump(mode="json", exclude_none=True)
    return dumped == _DEFAULT_META_DUMP
