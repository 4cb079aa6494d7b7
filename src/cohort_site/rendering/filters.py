"""Jinja2 filters for page templates.

These filters are used in the page templates to format post data. Each
one accepts missing values and returns something printable.
"""

import logging
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from cohort_site.content.service import parse_timestamp

from .portable_text import reading_time, render_portable_text

logger = logging.getLogger(__name__)

DISPLAY_TIMEZONE = "Europe/London"
DEFAULT_BYLINE = "Cohort AI Team"
DEFAULT_AUTHOR_BIO = "Contributor, The Plan"


def format_date(iso_string: str | None) -> str | None:
    """Format an ISO timestamp as a British long-form date.

    Args:
        iso_string: Timestamp such as "2026-01-29T06:51:50Z"

    Returns:
        Formatted date like "29 January 2026", or None when the value is
        missing or unparseable (the template then omits the date).

    Examples:
        >>> format_date("2026-01-29T06:51:50Z")
        '29 January 2026'
    """
    parsed = parse_timestamp(iso_string)
    if parsed is None:
        return None
    try:
        parsed = parsed.astimezone(ZoneInfo(DISPLAY_TIMEZONE))
    except ZoneInfoNotFoundError:
        logger.warning(f"Time zone {DISPLAY_TIMEZONE} not available; showing the date in UTC")
    return f"{parsed.day} {parsed.strftime('%B %Y')}"


def byline(author: Any) -> str:
    """Author name for the meta line, or the team label.

    Examples:
        >>> byline({"name": "Ada"})
        'Ada'
        >>> byline(None)
        'Cohort AI Team'
    """
    return _attr(author, "name") or DEFAULT_BYLINE


def author_bio(author: Any) -> str:
    """Author bio, or the contributor label."""
    return _attr(author, "bio") or DEFAULT_AUTHOR_BIO


def _attr(obj: Any, name: str) -> str:
    if obj is None:
        return ""
    if isinstance(obj, dict):
        value = obj.get(name)
    else:
        value = getattr(obj, name, None)
    return value if isinstance(value, str) else ""


# Registry of all filters for registration with Jinja2
FILTERS = {
    "format_date": format_date,
    "reading_time": reading_time,
    "portable_text": render_portable_text,
    "byline": byline,
    "author_bio": author_bio,
}
