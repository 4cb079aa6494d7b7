"""Rendering of pages and rich text to HTML."""

from .filters import FILTERS
from .page_renderer import PageRenderer
from .portable_text import PortableTextRenderer, reading_time, render_portable_text

__all__ = [
    "FILTERS",
    "PageRenderer",
    "PortableTextRenderer",
    "reading_time",
    "render_portable_text",
]
