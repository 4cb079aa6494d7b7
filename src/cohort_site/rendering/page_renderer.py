"""Page renderer for the landing page and the blog.

Renders the site's pages through Jinja2 templates with the filters from
``filters.py`` registered.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader

from cohort_site.config import DEFAULT_SITE_URL
from cohort_site.content.normalizer import UNTITLED
from cohort_site.subscription import SubscriptionForm
from schemas.card import CardViewModel
from schemas.content_item import Post

from .filters import FILTERS, format_date

logger = logging.getLogger(__name__)

# Templates and stylesheets ship inside the package as package data:
#   page_renderer.py → rendering/ → cohort_site/resources/
PACKAGE_ROOT = Path(__file__).parent.parent
TEMPLATES_DIR = PACKAGE_ROOT / "resources" / "templates"
STYLESHEETS_DIR = PACKAGE_ROOT / "resources" / "stylesheets"

SITE_NAME = "Cohort AI"
BLOG_NAME = "The Plan"


class PageRenderer:
    """Render site pages to HTML strings.

    Attributes:
        templates_dir: Directory containing the page templates
        stylesheets_dir: Directory containing the site stylesheet
        base_url: Public site URL without a trailing slash
    """

    def __init__(
        self,
        templates_dir: Path | None = None,
        stylesheets_dir: Path | None = None,
        base_url: str = DEFAULT_SITE_URL,
    ):
        """Initialize the page renderer.

        Args:
            templates_dir: Directory containing templates (default: resources/templates)
            stylesheets_dir: Directory containing stylesheets (default: resources/stylesheets)
            base_url: Public site URL that canonical links are built on
        """
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.stylesheets_dir = stylesheets_dir or STYLESHEETS_DIR
        self.base_url = base_url.rstrip("/")

        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
        )
        for name, func in FILTERS.items():
            self._env.filters[name] = func
        self._env.globals.update(
            site_name=SITE_NAME,
            blog_name=BLOG_NAME,
            base_url=self.base_url,
        )

    def render_home(self, cards: Iterable[CardViewModel], form: SubscriptionForm) -> str:
        """Render the landing page with the teaser grid and signup form."""
        cards = list(cards)
        logger.debug(f"Rendering home page with {len(cards)} cards")
        return self._render("home.html.j2", cards=cards, form=form)

    def render_post(self, post: Post, comments_enabled: bool = False) -> str:
        """Render a full blog post.

        Args:
            post: The post as returned by the content API
            comments_enabled: Whether comment hosting is configured
        """
        return self._render(
            "post.html.j2",
            post=post,
            title=post.title or UNTITLED,
            published=format_date(post.published_at),
            comments_enabled=comments_enabled,
        )

    def render_not_found(self) -> str:
        return self._render("not_found.html.j2")

    def render_thanks(self) -> str:
        return self._render("thanks.html.j2")

    def _render(self, template_name: str, **context) -> str:
        template = self._env.get_template(template_name)
        return template.render(current_year=datetime.now(timezone.utc).year, **context)
