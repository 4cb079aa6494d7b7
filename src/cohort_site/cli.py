"""Command-line interface for the Cohort site."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from cohort_site.app import create_app
from cohort_site.config import SiteConfig
from cohort_site.content import ContentService
from cohort_site.rendering import PageRenderer
from cohort_site.seo import write_seo_files
from cohort_site.subscription import SubscriptionForm, SubscriptionStatus, subscribe

DEFAULT_SEO_OUTPUT_DIR = Path("./public")
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def serve(args: argparse.Namespace) -> int:
    """Execute the serve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    config = SiteConfig()
    app = create_app(config)

    logger.info(f"Serving {config.base_url} on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


def list_posts(args: argparse.Namespace) -> int:
    """Execute the list-posts command.

    Prints the same JSON the /api/posts endpoint serves.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    config = SiteConfig()
    if not config.content_configured:
        logger.error("SANITY_PROJECT_ID and SANITY_DATASET must be set")
        return 1

    content = ContentService(config)
    try:
        cards = content.list_cards(args.limit)
    finally:
        content.close()

    print(json.dumps([card.model_dump() for card in cards], indent=2))
    logger.info(f"Listed {len(cards)} posts")
    return 0


def show_post(args: argparse.Namespace) -> int:
    """Execute the show-post command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    config = SiteConfig()
    content = ContentService(config)
    try:
        post = content.get_post(args.slug)
    finally:
        content.close()

    if post is None:
        logger.error(f"Post not found: {args.slug}")
        return 1

    renderer = PageRenderer(base_url=config.base_url)
    html = renderer.render_post(post, comments_enabled=config.comments_configured)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(html)
        logger.info(f"Wrote {args.output}")
    else:
        print(html)
    return 0


def build_seo(args: argparse.Namespace) -> int:
    """Execute the build-seo command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    base_url = args.site_url or SiteConfig().base_url

    try:
        paths = write_seo_files(args.output, base_url)
    except OSError as e:
        logger.error(f"Failed to write SEO files: {e}")
        return 1

    for path in paths:
        logger.info(f"  Wrote: {path}")
    return 0


def subscribe_email(args: argparse.Namespace) -> int:
    """Execute the subscribe command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when the provider answered in time, non-zero otherwise)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    form = SubscriptionForm(SiteConfig())
    if not form.ready:
        logger.error("MC_FORM_ACTION must be set")
        return 1

    try:
        attempt = asyncio.run(subscribe(form, args.email))
    except Exception as e:
        logger.error(f"Subscription failed: {e}")
        return 1

    logger.info(f"Subscription {attempt.status.value}: {attempt.message}")
    return 0 if attempt.status == SubscriptionStatus.SUCCESS else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="cohort-site",
        description="Serve and maintain the Cohort AI landing page and blog",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the development web server",
        description="Serve the landing page, blog and SEO files with the Flask development server.",
    )
    serve_parser.add_argument(
        "--host",
        type=str,
        default=DEFAULT_HOST,
        help=f"Interface to bind (default: {DEFAULT_HOST})",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port to listen on (default: {DEFAULT_PORT})",
    )
    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable the Flask debugger and reloader",
    )
    serve_parser.set_defaults(func=serve)

    list_parser = subparsers.add_parser(
        "list-posts",
        help="Print the latest posts as cards",
        description="Query the content API for the newest posts and print them as JSON cards.",
    )
    list_parser.add_argument(
        "--limit",
        type=int,
        default=3,
        help="Number of posts to list (default: 3)",
    )
    list_parser.set_defaults(func=list_posts)

    show_parser = subparsers.add_parser(
        "show-post",
        help="Render a blog post to HTML",
        description="Fetch a post by slug from the content API and render its page.",
    )
    show_parser.add_argument(
        "--slug",
        type=str,
        required=True,
        help="Slug of the post to render",
    )
    show_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the HTML to this file instead of stdout",
    )
    show_parser.set_defaults(func=show_post)

    seo_parser = subparsers.add_parser(
        "build-seo",
        help="Write robots.txt and sitemap.xml",
        description="Generate the static robots.txt and sitemap.xml files for the site.",
    )
    seo_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_SEO_OUTPUT_DIR,
        help=f"Output directory (default: {DEFAULT_SEO_OUTPUT_DIR})",
    )
    seo_parser.add_argument(
        "--site-url",
        type=str,
        default=None,
        help="Public site URL (default: SITE_URL or https://cohortai.co)",
    )
    seo_parser.set_defaults(func=build_seo)

    subscribe_parser = subparsers.add_parser(
        "subscribe",
        help="Add an email address to the mailing list",
        description="Post an address to the mailing-list form and wait for the provider to answer.",
    )
    subscribe_parser.add_argument(
        "--email",
        type=str,
        required=True,
        help="Address to subscribe",
    )
    subscribe_parser.set_defaults(func=subscribe_email)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
