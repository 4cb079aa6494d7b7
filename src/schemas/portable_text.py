"""Portable Text (structured rich-text) schemas.

A document is an ordered list of blocks. Each block carries a style, an
optional list membership, a list of inline spans and the annotation
definitions its spans refer to by key.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return ""


def _text_or_none(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _mapping_list(value: Any) -> list[Any]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, (dict, BaseModel))]


def _level(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return 1


class Span(BaseModel):
    """An inline run of text with decorator names or annotation keys."""

    type: Annotated[str, BeforeValidator(_text)] = Field(default="span", alias="_type")
    text: Annotated[str, BeforeValidator(_text)] = ""
    marks: Annotated[list[str], BeforeValidator(_string_list)] = []

    model_config = {"extra": "allow", "populate_by_name": True}


class MarkDef(BaseModel):
    """An annotation definition, e.g. a link with its href."""

    key: Annotated[str, BeforeValidator(_text)] = Field(default="", alias="_key")
    type: Annotated[str, BeforeValidator(_text)] = Field(default="", alias="_type")
    href: Annotated[str | None, BeforeValidator(_text_or_none)] = None

    model_config = {"extra": "allow", "populate_by_name": True}


class Block(BaseModel):
    """A block of rich text."""

    type: Annotated[str, BeforeValidator(_text)] = Field(default="block", alias="_type")
    style: Annotated[str, BeforeValidator(_text)] = "normal"
    list_item: Annotated[str | None, BeforeValidator(_text_or_none)] = Field(
        default=None, alias="listItem"
    )
    level: Annotated[int, BeforeValidator(_level)] = 1
    children: Annotated[list[Span], BeforeValidator(_mapping_list)] = []
    mark_defs: Annotated[list[MarkDef], BeforeValidator(_mapping_list)] = Field(
        default=[], alias="markDefs"
    )

    model_config = {"extra": "allow", "populate_by_name": True}

    def mark_def(self, key: str) -> MarkDef | None:
        """Look up an annotation definition by key."""
        for mark_def in self.mark_defs:
            if mark_def.key == key:
                return mark_def
        return None
