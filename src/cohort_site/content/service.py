"""Content reads for the site's pages and API.

This is the boundary where upstream failures stop: every read either
returns content or an empty result (``[]`` or ``None``), and logs why.
"""

import logging
from datetime import datetime, timezone

from cohort_site.clients import APIError, ClientError, ContentClient
from cohort_site.config import SiteConfig
from schemas.card import CardViewModel
from schemas.content_item import ContentItem, Post

from .normalizer import normalize_cards

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 3
MAX_LIMIT = 50
TEASER_LIMIT = 6

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO timestamp; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def newest_first(items: list[ContentItem]) -> list[ContentItem]:
    """Order items by publish time, newest first, undated items last."""
    return sorted(
        items,
        key=lambda item: parse_timestamp(item.published_at) or _OLDEST,
        reverse=True,
    )


def clamp_limit(value: str | int | None, default: int = DEFAULT_LIMIT) -> int:
    """Coerce a requested limit into 1..MAX_LIMIT, falling back to default."""
    try:
        limit = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if limit < 1:
        return default
    return min(limit, MAX_LIMIT)


class ContentService:
    """Read posts from the content API without ever raising.

    Attributes:
        config: Site configuration
        client: Content API client, or None when the CMS is unconfigured
    """

    def __init__(self, config: SiteConfig, client: ContentClient | None = None):
        self.config = config
        if client is None and config.content_configured:
            client = ContentClient(config.content_client_config())
        self.client = client

    @property
    def configured(self) -> bool:
        return self.client is not None

    def close(self) -> None:
        if self.client is not None:
            self.client.close()

    def list_cards(self, limit: int = DEFAULT_LIMIT) -> list[CardViewModel]:
        """Newest posts with a slug and cover image, as cards."""
        if self.client is None:
            logger.error("Content API not configured (project id or dataset missing)")
            return []

        try:
            items = self.client.fetch_posts(limit)
        except ClientError as e:
            self._log_failure("Post listing", e)
            return []

        return normalize_cards(newest_first(items)[:limit])

    def teaser_cards(self, limit: int = TEASER_LIMIT) -> list[CardViewModel]:
        """Newest posts for the home page grid, as cards."""
        if self.client is None:
            logger.info("Content API not configured; no teasers")
            return []

        try:
            items = self.client.fetch_teasers(limit)
        except ClientError as e:
            self._log_failure("Teaser listing", e)
            return []

        cards = normalize_cards(newest_first(items)[:limit])
        logger.info(f"Loaded {len(cards)} teaser posts")
        return cards

    def get_post(self, slug: str) -> Post | None:
        """A single post by slug, or None if it cannot be had."""
        if self.client is None:
            logger.error("Content API not configured (project id or dataset missing)")
            return None

        try:
            post = self.client.fetch_post(slug)
        except ClientError as e:
            self._log_failure(f"Post {slug!r}", e)
            return None

        if post is None:
            logger.info(f"No post with slug {slug!r}")
        return post

    def _log_failure(self, what: str, error: ClientError) -> None:
        if isinstance(error, APIError):
            logger.error(f"{what} failed with status {error.status_code}: {error.body[:500]}")
        else:
            logger.error(f"{what} failed: {error}")
