"""robots.txt and sitemap.xml for the site."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from lxml import etree

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


@dataclass(frozen=True)
class SitemapEntry:
    """A page listed in the sitemap."""

    path: str
    change_frequency: str
    priority: float


SITEMAP_ENTRIES = (
    SitemapEntry(path="/", change_frequency="weekly", priority=1.0),
    SitemapEntry(path="/thanks", change_frequency="yearly", priority=0.3),
)


def robots_txt(base_url: str) -> str:
    """Allow all crawlers and point them at the sitemap."""
    base_url = base_url.rstrip("/")
    return "\n".join(
        [
            "User-agent: *",
            "Allow: /",
            "",
            f"Host: {base_url}",
            f"Sitemap: {base_url}/sitemap.xml",
            "",
        ]
    )


def build_sitemap(base_url: str, now: datetime | None = None) -> etree._Element:
    """Build the sitemap ``urlset`` element.

    Args:
        base_url: Public site URL
        now: Modification time stamped on every entry (default: current UTC time)
    """
    base_url = base_url.rstrip("/")
    now = now or datetime.now(timezone.utc)
    lastmod = now.isoformat(timespec="seconds")

    urlset = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})
    for entry in SITEMAP_ENTRIES:
        url_el = etree.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        etree.SubElement(url_el, f"{{{SITEMAP_NS}}}loc").text = f"{base_url}{entry.path}"
        etree.SubElement(url_el, f"{{{SITEMAP_NS}}}lastmod").text = lastmod
        etree.SubElement(url_el, f"{{{SITEMAP_NS}}}changefreq").text = entry.change_frequency
        etree.SubElement(url_el, f"{{{SITEMAP_NS}}}priority").text = f"{entry.priority:.1f}"
    return urlset


def sitemap_xml(base_url: str, now: datetime | None = None) -> bytes:
    """Serialize the sitemap with an XML declaration."""
    return etree.tostring(
        build_sitemap(base_url, now),
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    )


def write_seo_files(output_dir: Path, base_url: str, now: datetime | None = None) -> list[Path]:
    """Write robots.txt and sitemap.xml into a directory.

    Returns:
        Paths of the written files
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    robots_path = output_dir / "robots.txt"
    robots_path.write_text(robots_txt(base_url))
    logger.debug(f"Wrote {robots_path}")

    sitemap_path = output_dir / "sitemap.xml"
    sitemap_path.write_bytes(sitemap_xml(base_url, now))
    logger.debug(f"Wrote {sitemap_path}")

    return [robots_path, sitemap_path]
