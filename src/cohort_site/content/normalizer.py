"""Normalize partial content records into blog cards.

The mapping is total: whatever subset of fields a record carries (or
whatever garbage stands in for a record), the result is a card with all
four fields set.
"""

from typing import Any, Iterable
from urllib.parse import quote, urlencode

from pydantic import ValidationError

from schemas.card import CardViewModel
from schemas.content_item import ContentItem

UNTITLED = "Untitled"
BLOG_PREFIX = "/blog/"
FALLBACK_LINK = f"{BLOG_PREFIX}post"

PLACEHOLDER_HOST = "https://placehold.co"
PLACEHOLDER_WIDTH = 600
PLACEHOLDER_HEIGHT = 400
PLACEHOLDER_BACKGROUND = "e2e8f0"
PLACEHOLDER_FOREGROUND = "0f172a"
PLACEHOLDER_TEXT = "The Plan"


def placeholder_image(
    text: str = PLACEHOLDER_TEXT,
    width: int = PLACEHOLDER_WIDTH,
    height: int = PLACEHOLDER_HEIGHT,
    background: str = PLACEHOLDER_BACKGROUND,
    foreground: str = PLACEHOLDER_FOREGROUND,
) -> str:
    """Build a placeholder image URL.

    Examples:
        >>> placeholder_image()
        'https://placehold.co/600x400/e2e8f0/0f172a?text=The+Plan'
    """
    query = urlencode({"text": text})
    return f"{PLACEHOLDER_HOST}/{width}x{height}/{background}/{foreground}?{query}"


def post_link(slug: str | None) -> str:
    """Internal path of a post, or the fallback path when there is no slug."""
    if not slug:
        return FALLBACK_LINK
    return BLOG_PREFIX + quote(slug, safe="-_.~")


def normalize_card(raw: Any) -> CardViewModel:
    """Map one content record (decoded or raw) to a card."""
    try:
        item = ContentItem.from_raw(raw)
    except ValidationError:
        item = ContentItem()

    return CardViewModel(
        title=item.title or UNTITLED,
        excerpt=(item.excerpt or "").strip(),
        link=post_link(item.slug_value),
        image=item.cover_url or placeholder_image(),
    )


def normalize_cards(items: Iterable[Any] | None) -> list[CardViewModel]:
    """Map content records to cards, one card per record."""
    return [normalize_card(item) for item in items or []]
