"""Tests for robots.txt and sitemap generation."""

from datetime import datetime, timezone

from lxml import etree

from cohort_site.seo import SITEMAP_NS, build_sitemap, robots_txt, sitemap_xml, write_seo_files

NOW = datetime(2026, 2, 1, 8, 30, tzinfo=timezone.utc)
NS = {"sm": SITEMAP_NS}


class TestRobotsTxt:
    """Tests for robots_txt()."""

    def test_content(self):
        assert robots_txt("https://cohortai.co") == (
            "User-agent: *\n"
            "Allow: /\n"
            "\n"
            "Host: https://cohortai.co\n"
            "Sitemap: https://cohortai.co/sitemap.xml\n"
        )

    def test_trailing_slash_is_dropped(self):
        assert "Sitemap: https://example.org/sitemap.xml" in robots_txt("https://example.org/")


class TestSitemap:
    """Tests for build_sitemap() and sitemap_xml()."""

    def test_entries(self):
        urlset = build_sitemap("https://cohortai.co", now=NOW)

        locs = urlset.xpath("//sm:url/sm:loc/text()", namespaces=NS)
        freqs = urlset.xpath("//sm:url/sm:changefreq/text()", namespaces=NS)
        priorities = urlset.xpath("//sm:url/sm:priority/text()", namespaces=NS)

        assert locs == ["https://cohortai.co/", "https://cohortai.co/thanks"]
        assert freqs == ["weekly", "yearly"]
        assert priorities == ["1.0", "0.3"]

    def test_lastmod_is_generation_time(self):
        urlset = build_sitemap("https://cohortai.co", now=NOW)

        assert urlset.xpath("//sm:lastmod/text()", namespaces=NS) == [
            "2026-02-01T08:30:00+00:00",
            "2026-02-01T08:30:00+00:00",
        ]

    def test_serialized_document_parses(self):
        data = sitemap_xml("https://cohortai.co", now=NOW)

        assert data.startswith(b"<?xml")
        root = etree.fromstring(data)
        assert root.tag == f"{{{SITEMAP_NS}}}urlset"
        assert len(root) == 2


class TestWriteSeoFiles:
    """Tests for write_seo_files()."""

    def test_writes_both_files(self, tmp_path):
        paths = write_seo_files(tmp_path / "public", "https://cohortai.co", now=NOW)

        assert [p.name for p in paths] == ["robots.txt", "sitemap.xml"]
        assert (tmp_path / "public" / "robots.txt").read_text().startswith("User-agent: *")
        assert b"sitemap/0.9" in (tmp_path / "public" / "sitemap.xml").read_bytes()
