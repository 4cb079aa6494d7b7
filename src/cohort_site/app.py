"""Flask application serving the landing page, the blog and SEO files."""

import logging

from flask import Flask, Response, abort, jsonify, make_response, request

from cohort_site.config import SiteConfig
from cohort_site.content import DEFAULT_CARDS, ContentService, clamp_limit
from cohort_site.rendering import PageRenderer
from cohort_site.seo import robots_txt, sitemap_xml
from cohort_site.subscription import SubscriptionForm

logger = logging.getLogger(__name__)


def create_app(
    config: SiteConfig | None = None,
    content: ContentService | None = None,
    renderer: PageRenderer | None = None,
) -> Flask:
    """Build the site application.

    Args:
        config: Site configuration (default: read from the environment once)
        content: Content reads (default: built from config)
        renderer: Page renderer (default: packaged templates, links on config.base_url)
    """
    config = config or SiteConfig()
    content = content or ContentService(config)
    renderer = renderer or PageRenderer(base_url=config.base_url)
    form = SubscriptionForm(config)

    app = Flask(
        __name__,
        static_folder=str(renderer.stylesheets_dir),
        static_url_path="/static",
    )

    # Revalidation is left to the hosting layer's cache.
    cache_control = (
        f"public, s-maxage={config.revalidate_seconds}, stale-while-revalidate"
    )

    if not content.configured:
        logger.warning("Content API not configured; blog content disabled")
    if not form.ready:
        logger.warning("Mailing list not configured; signup form disabled")

    @app.get("/")
    def home():
        cards = content.teaser_cards()
        if not cards:
            logger.info("No CMS posts; using default teasers")
            cards = list(DEFAULT_CARDS)
        return renderer.render_home(cards, form)

    @app.get("/api/posts")
    def list_posts():
        limit = clamp_limit(request.args.get("limit"))
        try:
            cards = content.list_cards(limit)
        except Exception:
            logger.exception("Unexpected error while listing posts")
            cards = []
        response = jsonify([card.model_dump() for card in cards])
        response.headers["Cache-Control"] = cache_control
        return response

    @app.get("/blog/<slug>")
    def blog_post(slug: str):
        post = content.get_post(slug)
        if post is None:
            abort(404)
        response = make_response(
            renderer.render_post(post, comments_enabled=config.comments_configured)
        )
        response.headers["Cache-Control"] = cache_control
        return response

    @app.get("/thanks")
    def thanks():
        return renderer.render_thanks()

    @app.get("/robots.txt")
    def robots():
        return Response(robots_txt(config.base_url), mimetype="text/plain")

    @app.get("/sitemap.xml")
    def sitemap():
        return Response(sitemap_xml(config.base_url), mimetype="application/xml")

    @app.errorhandler(404)
    def not_found(error):
        return renderer.render_not_found(), 404

    return app
