"""Tests for the ContentClient class."""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from cohort_site.clients import APIError, ConfigurationError, ContentClient, ValidationError
from schemas.content_item import ContentItem


def make_query_response(result, status_code=200):
    """Create a mock content API response carrying ``result``."""
    response = MagicMock()
    response.is_success = 200 <= status_code < 300
    response.status_code = status_code
    response.url = "https://abc123.api.sanity.io/v2023-10-01/data/query/production"
    response.text = "" if response.is_success else "upstream exploded"
    response.json.return_value = {"result": result}
    return response


@pytest.fixture
def content_client(site_config):
    return ContentClient(site_config.content_client_config())


def install_mock_transport(client, handler):
    """Route the client's requests to ``handler`` instead of the network."""
    client._client = httpx.Client(
        base_url=client.base_url,
        headers=client.headers,
        transport=httpx.MockTransport(handler),
    )


class TestContentClientConfiguration:
    """Tests for ContentClient configuration."""

    def test_base_url_and_path_from_site_config(self, content_client):
        """Project id goes into the host, version and dataset into the path."""
        assert content_client.base_url == "https://abc123.api.sanity.io"
        assert content_client.query_path == "/v2023-10-01/data/query/production"

    def test_requires_query_path(self):
        """ContentClient refuses a config without a query path."""
        with pytest.raises(ConfigurationError, match="query_path"):
            ContentClient({"base_url": "https://abc123.api.sanity.io"})

    def test_no_authorization_without_token(self, content_client):
        """No bearer header is attached when no read token is configured."""
        assert "Authorization" not in content_client.headers

    def test_bearer_token_when_configured(self, site_config):
        """A configured read token is sent as a bearer credential."""
        config = site_config.model_copy(update={"sanity_api_read_token": "sekrit"})
        client = ContentClient(config.content_client_config())

        assert client.headers["Authorization"] == "Bearer sekrit"


class TestBuildParams:
    """Tests for ContentClient.build_params()."""

    def test_query_only(self):
        assert ContentClient.build_params("*[]") == {"query": "*[]"}

    def test_parameters_are_json_encoded_and_prefixed(self):
        params = ContentClient.build_params("*[]", {"limit": 3, "slug": "my-post"})

        assert params["$limit"] == "3"
        assert params["$slug"] == '"my-post"'


class TestContentClientFetch:
    """Tests for ContentClient.fetch() and friends."""

    def test_fetch_returns_result_field(self, content_client):
        """fetch() unwraps the result envelope."""
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = make_query_response([{"title": "A"}])
        content_client._client = mock_http_client

        assert content_client.fetch("*[]") == [{"title": "A"}]

    def test_fetch_sends_get_to_query_path(self, content_client):
        """fetch() issues a GET with the query and bound parameters."""
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = make_query_response([])
        content_client._client = mock_http_client

        content_client.fetch_posts(limit=2)

        call_args = mock_http_client.request.call_args
        assert call_args.args == ("GET", "/v2023-10-01/data/query/production")
        params = call_args.kwargs["params"]
        assert params["query"] == ContentClient.LISTING_QUERY
        assert params["$limit"] == "2"

    def test_fetch_rejects_non_json_body(self, content_client):
        """A body that is not JSON raises ValidationError."""
        response = make_query_response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = response
        content_client._client = mock_http_client

        with pytest.raises(ValidationError):
            content_client.fetch("*[]")

    def test_fetch_rejects_non_object_body(self, content_client):
        """A JSON body that is not an object raises ValidationError."""
        response = make_query_response(None)
        response.json.return_value = ["not", "an", "envelope"]
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = response
        content_client._client = mock_http_client

        with pytest.raises(ValidationError):
            content_client.fetch("*[]")

    def test_fetch_raises_api_error_on_500(self, content_client):
        """Upstream failures surface as APIError from the client layer."""
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = make_query_response(None, status_code=500)
        content_client._client = mock_http_client

        with pytest.raises(APIError) as exc_info:
            content_client.fetch_posts(limit=3)

        assert exc_info.value.status_code == 500

    def test_fetch_posts_returns_content_items(self, content_client, sample_listing_records):
        """fetch_posts() decodes every record."""
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = make_query_response(sample_listing_records)
        content_client._client = mock_http_client

        items = content_client.fetch_posts(limit=5)

        assert len(items) == 5
        assert all(isinstance(item, ContentItem) for item in items)
        assert items[0].slug_value == "post-3"

    def test_fetch_posts_tolerates_missing_result(self, content_client):
        """A null or non-list result is an empty listing."""
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = make_query_response(None)
        content_client._client = mock_http_client

        assert content_client.fetch_posts(limit=3) == []

    def test_fetch_teasers_uses_teaser_query(self, content_client):
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = make_query_response([])
        content_client._client = mock_http_client

        content_client.fetch_teasers(limit=6)

        params = mock_http_client.request.call_args.kwargs["params"]
        assert params["query"] == ContentClient.TEASER_QUERY
        assert params["$limit"] == "6"

    def test_fetch_post_returns_post(self, content_client, sample_post_record):
        """fetch_post() decodes the full record including the author."""
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = make_query_response(sample_post_record)
        content_client._client = mock_http_client

        post = content_client.fetch_post("predicting-staff-absence")

        assert post.title == "Predicting Staff Absence with Data"
        assert post.author.name == "Ada Lovelace"
        assert post.cover_url.endswith("cover.jpg")
        assert len(post.body) == 4

    def test_fetch_post_returns_none_when_missing(self, content_client):
        """No matching record means None."""
        mock_http_client = MagicMock()
        mock_http_client.request.return_value = make_query_response(None)
        content_client._client = mock_http_client

        assert content_client.fetch_post("nope") is None


class TestQueryStringRoundTrip:
    """Wire-level checks against a mock endpoint."""

    @pytest.mark.parametrize(
        "slug",
        [
            "plain-slug",
            "slug with spaces",
            'a "quoted" slug',
            "it's & more?=#",
            "ünïcødé/slug",
        ],
    )
    def test_slug_survives_encoding(self, content_client, slug):
        """The endpoint decodes exactly the slug that was sent."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["slug"] = json.loads(request.url.params["$slug"])
            seen["query"] = request.url.params["query"]
            return httpx.Response(200, json={"result": None})

        install_mock_transport(content_client, handler)

        assert content_client.fetch_post(slug) is None
        assert seen["slug"] == slug
        assert seen["query"] == ContentClient.DETAIL_QUERY

    def test_request_targets_project_host_and_dataset(self, site_config):
        """The request URL is built from project, host, version and dataset."""
        config = site_config.model_copy(update={"sanity_api_read_token": "sekrit"})
        client = ContentClient(config.content_client_config())
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["host"] = request.url.host
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"result": []})

        install_mock_transport(client, handler)
        client.fetch_posts(limit=3)

        assert seen["host"] == "abc123.api.sanity.io"
        assert seen["path"] == "/v2023-10-01/data/query/production"
        assert seen["auth"] == "Bearer sekrit"
