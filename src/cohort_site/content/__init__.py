"""Content reads and card normalization."""

from .defaults import DEFAULT_CARDS
from .normalizer import normalize_card, normalize_cards, placeholder_image, post_link
from .service import ContentService, clamp_limit, newest_first

__all__ = [
    "ContentService",
    "DEFAULT_CARDS",
    "clamp_limit",
    "newest_first",
    "normalize_card",
    "normalize_cards",
    "placeholder_image",
    "post_link",
]
