"""Pytest fixtures for Cohort site tests."""

import pytest

from cohort_site.config import SiteConfig


@pytest.fixture
def site_config():
    """Configuration with the content API and mailing list set up."""
    return SiteConfig(
        _env_file=None,
        sanity_project_id="abc123",
        sanity_dataset="production",
        sanity_api_read_token=None,
        mc_form_action="https://example.us1.list-manage.com/subscribe/post?u=1&id=2",
        mc_honeypot="b_1_2",
        mc_tags="The Plan,Early Access",
        giscus_repo=None,
        giscus_repo_id=None,
        giscus_category=None,
        giscus_category_id=None,
        site_url="https://cohortai.co",
    )


@pytest.fixture
def unconfigured_config():
    """Configuration with no external services."""
    return SiteConfig(
        _env_file=None,
        sanity_project_id=None,
        sanity_dataset=None,
        sanity_api_read_token=None,
        mc_form_action=None,
        giscus_repo=None,
        giscus_repo_id=None,
        giscus_category=None,
        giscus_category_id=None,
    )


@pytest.fixture
def sample_body():
    """A Portable Text body with a heading, a marked-up paragraph and a list."""
    return [
        {
            "_type": "block",
            "_key": "b1",
            "style": "h2",
            "children": [{"_type": "span", "text": "Why absence matters", "marks": []}],
            "markDefs": [],
        },
        {
            "_type": "block",
            "_key": "b2",
            "style": "normal",
            "children": [
                {"_type": "span", "text": "Staff absence is ", "marks": []},
                {"_type": "span", "text": "costly", "marks": ["strong"]},
                {"_type": "span", "text": ". Read ", "marks": []},
                {"_type": "span", "text": "the report", "marks": ["lnk1"]},
                {"_type": "span", "text": ".", "marks": []},
            ],
            "markDefs": [
                {"_key": "lnk1", "_type": "link", "href": "https://example.com/report"}
            ],
        },
        {
            "_type": "block",
            "_key": "b3",
            "style": "normal",
            "listItem": "bullet",
            "level": 1,
            "children": [{"_type": "span", "text": "Plan cover early", "marks": []}],
            "markDefs": [],
        },
        {
            "_type": "block",
            "_key": "b4",
            "style": "normal",
            "listItem": "bullet",
            "level": 1,
            "children": [{"_type": "span", "text": "Track patterns", "marks": []}],
            "markDefs": [],
        },
    ]


@pytest.fixture
def sample_post_record(sample_body):
    """A post as returned by the detail query."""
    return {
        "title": "Predicting Staff Absence with Data",
        "excerpt": "How schools can anticipate absence.",
        "slug": "predicting-staff-absence",
        "coverImage": "https://cdn.sanity.io/images/abc123/production/cover.jpg",
        "body": sample_body,
        "publishedAt": "2026-01-29T06:51:50Z",
        "author": {
            "name": "Ada Lovelace",
            "image": "https://cdn.sanity.io/images/abc123/production/ada.jpg",
            "bio": "Head of data.",
        },
    }


@pytest.fixture
def sample_listing_records():
    """Five listing records, deliberately out of publish order."""
    return [
        {
            "title": f"Post {day}",
            "excerpt": f"  Excerpt {day}  ",
            "slug": f"post-{day}",
            "image": f"https://cdn.sanity.io/images/abc123/production/{day}.jpg",
            "publishedAt": f"2026-01-{day:02d}T09:00:00Z",
        }
        for day in (3, 5, 1, 4, 2)
    ]
