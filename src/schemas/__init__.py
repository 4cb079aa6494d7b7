"""Schema definitions for the Cohort site."""

from .card import CardViewModel
from .content_item import AssetRef, Author, ContentItem, ImageRef, Post, SlugRef
from .portable_text import Block, MarkDef, Span

__all__ = [
    "AssetRef",
    "Author",
    "Block",
    "CardViewModel",
    "ContentItem",
    "ImageRef",
    "MarkDef",
    "Post",
    "SlugRef",
    "Span",
]
