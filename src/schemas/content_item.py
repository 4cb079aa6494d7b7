"""Headless CMS content item schemas.

The content API imposes no completeness guarantee, so every field is
optional and text fields degrade to None when the upstream sends something
other than a string.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field


def _text_or_none(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


def _mapping_or_none(value: Any) -> Any:
    if isinstance(value, dict) or isinstance(value, BaseModel):
        return value
    return None


def _blocks_or_none(value: Any) -> list[dict] | None:
    if not isinstance(value, list):
        return None
    return [block for block in value if isinstance(block, dict)]


OptionalText = Annotated[str | None, BeforeValidator(_text_or_none)]


class SlugRef(BaseModel):
    """Sanity slug object: ``{"current": "my-post"}``."""

    current: OptionalText = None

    model_config = {"extra": "allow"}


def _slug_value(value: Any) -> Any:
    if isinstance(value, (str, dict, SlugRef)):
        return value
    return None


class AssetRef(BaseModel):
    """Resolved image asset."""

    url: OptionalText = None

    model_config = {"extra": "allow"}


class ImageRef(BaseModel):
    """Image field with a dereferenced asset: ``{"asset": {"url": ...}}``."""

    asset: Annotated[AssetRef | None, BeforeValidator(_mapping_or_none)] = None

    model_config = {"extra": "allow"}


class Author(BaseModel):
    """Post author as projected by the detail query."""

    name: OptionalText = None
    image: OptionalText = None
    bio: OptionalText = None

    model_config = {"extra": "allow"}


class ContentItem(BaseModel):
    """A post record as returned by the content API.

    Different queries project the same post differently: the listing
    query resolves ``slug`` to a string and the cover to ``image``, the
    teaser query returns the raw ``slug`` object and ``mainImage``, and
    the detail query names the cover ``coverImage``.
    """

    title: OptionalText = None
    excerpt: OptionalText = None
    slug: Annotated[str | SlugRef | None, BeforeValidator(_slug_value)] = None

    # Cover image in its various projections
    image: OptionalText = None
    cover_image: OptionalText = Field(default=None, alias="coverImage")
    main_image: Annotated[ImageRef | None, BeforeValidator(_mapping_or_none)] = Field(
        default=None, alias="mainImage"
    )

    published_at: OptionalText = Field(default=None, alias="publishedAt")
    author: Annotated[Author | None, BeforeValidator(_mapping_or_none)] = None
    body: Annotated[list[dict] | None, BeforeValidator(_blocks_or_none)] = None

    model_config = {"extra": "allow", "populate_by_name": True}

    @property
    def slug_value(self) -> str | None:
        """The slug as a plain string, preferring the resolved form."""
        if isinstance(self.slug, str):
            return self.slug.strip() or None
        if self.slug is not None and self.slug.current:
            return self.slug.current.strip() or None
        return None

    @property
    def cover_url(self) -> str | None:
        """The resolved cover image URL, whichever projection carried it."""
        for candidate in (self.image, self.cover_image):
            if candidate and candidate.strip():
                return candidate.strip()
        if self.main_image and self.main_image.asset and self.main_image.asset.url:
            return self.main_image.asset.url.strip() or None
        return None

    @classmethod
    def from_raw(cls, raw: Any) -> "ContentItem":
        """Decode an upstream record, treating non-mappings as empty items."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, dict):
            return cls()
        return cls.model_validate(raw)


# The detail page consumes the full record directly.
Post = ContentItem
