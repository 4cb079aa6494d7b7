"""Content API client for the blog's headless CMS."""

import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from schemas.content_item import ContentItem, Post

from .client import Client
from .exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)


class ContentClient(Client):
    """Client for a Sanity-style GROQ query endpoint.

    Queries are sent as ``GET {base_url}{query_path}?query=...`` with each
    bound parameter encoded as ``$name=<json>``. The response envelope is
    ``{"result": ...}``; only ``result`` is returned.

    Example:
        config = SiteConfig().content_client_config()
        with ContentClient(config) as client:
            items = client.fetch_posts(limit=3)
    """

    LISTING_QUERY = """*[_type == "post" && defined(slug.current) && defined(mainImage)] | order(publishedAt desc)[0...$limit]{
  title,
  excerpt,
  "slug": slug.current,
  "image": mainImage.asset->url,
  publishedAt
}"""

    TEASER_QUERY = """*[_type == "post" && defined(slug.current)] | order(publishedAt desc)[0...$limit]{
  title,
  "excerpt": coalesce(pt::text(body)[0..180], description),
  slug,
  mainImage{asset->{url}},
  publishedAt
}"""

    DETAIL_QUERY = """*[_type == "post" && slug.current == $slug][0]{
  title,
  excerpt,
  "slug": slug.current,
  "coverImage": mainImage.asset->url,
  body,
  publishedAt,
  author->{
    name,
    "image": image.asset->url,
    bio
  }
}"""

    def __init__(self, config: dict):
        super().__init__(config)
        if not config.get("query_path"):
            raise ConfigurationError("config must include 'query_path'")

    @property
    def query_path(self) -> str:
        return str(self._config["query_path"])

    @staticmethod
    def build_params(query: str, params: dict[str, Any] | None = None) -> dict[str, str]:
        """Build the query-string parameters for a GROQ request.

        Bound parameters are JSON-encoded and prefixed with ``$``, so a
        slug ``my post`` is sent as ``$slug="my post"``.
        """
        request_params = {"query": query}
        for name, value in (params or {}).items():
            request_params[f"${name}"] = json.dumps(value)
        return request_params

    def fetch(self, query: str, params: dict[str, Any] | None = None) -> Any:
        """Run a GROQ query and return the ``result`` field.

        Args:
            query: GROQ query expression
            params: Values bound to ``$name`` placeholders in the query

        Returns:
            The decoded ``result`` value (None if the envelope has none)

        Raises:
            APIError: If the API returns a non-2xx response
            ConnectionError: If the network connection fails
            ValidationError: If the body is not a JSON object
        """
        response = self.get(self.query_path, params=self.build_params(query, params))

        try:
            data = response.json()
        except ValueError as e:
            raise ValidationError("Content API returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise ValidationError(
                f"Content API returned {type(data).__name__}, expected an object"
            )

        return data.get("result")

    def fetch_posts(self, limit: int) -> list[ContentItem]:
        """Fetch posts with a slug and a cover image, newest first."""
        result = self.fetch(self.LISTING_QUERY, {"limit": limit})
        return self._validate_items(result)

    def fetch_teasers(self, limit: int) -> list[ContentItem]:
        """Fetch posts for the home page teaser grid, newest first."""
        result = self.fetch(self.TEASER_QUERY, {"limit": limit})
        return self._validate_items(result)

    def fetch_post(self, slug: str) -> Post | None:
        """Fetch a single post with its author and body.

        Returns:
            The post, or None if no post has this slug
        """
        result = self.fetch(self.DETAIL_QUERY, {"slug": slug})
        if result is None:
            return None
        if not isinstance(result, dict):
            raise ValidationError(f"Post {slug!r} is not an object")
        return self._validate_item(result, slug)

    def _validate_items(self, result: Any) -> list[ContentItem]:
        """Decode a list result, tolerating a missing or malformed envelope."""
        if not isinstance(result, list):
            if result is not None:
                logger.warning(
                    f"Expected a list result, got {type(result).__name__}; ignoring"
                )
            return []
        return [
            self._validate_item(item, f"index {i}") for i, item in enumerate(result)
        ]

    def _validate_item(self, item: Any, label: str) -> ContentItem:
        try:
            return ContentItem.from_raw(item)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Item {label} failed validation",
                errors=[str(err) for err in e.errors()],
            ) from e
