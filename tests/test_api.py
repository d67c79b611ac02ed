"""Tests for API endpoints."""

import pytest

from shorty.exceptions import KeyGenerationError
from shorty.shortcode import ShortCodeGenerator
from shorty.store import URLStore
from web_app import create_app
from web_app.web.routes import WELCOME_MESSAGE


class BrokenGenerator(ShortCodeGenerator):
    """Generator that always fails."""

    def generate(self) -> str:
        raise KeyGenerationError("Secure random source unavailable: test")


@pytest.mark.asyncio
class TestShortenEndpoint:
    """Test POST /shorty."""

    async def test_shorten_url(self, client, store, sample_urls):
        """Test creating with a generated key."""
        response = await client.post("/shorty", json={"url": sample_urls[0]})

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"shortKey"}
        assert store.generator.is_valid_format(data["shortKey"])
        assert store.get(data["shortKey"]) == (sample_urls[0], True)

    async def test_shorten_with_custom_key(self, client, sample_urls):
        """Test creating with a custom key."""
        response = await client.post(
            "/shorty",
            json={"url": sample_urls[0], "customKey": "abc"}
        )

        assert response.status_code == 201
        assert response.json() == {"shortKey": "abc"}

    async def test_shorten_custom_key_overwrites(self, client, store, sample_urls):
        """Test reusing a custom key replaces the stored URL."""
        await client.post("/shorty", json={"url": sample_urls[0], "customKey": "dup"})
        response = await client.post("/shorty", json={"url": sample_urls[1], "customKey": "dup"})

        assert response.status_code == 201
        assert store.get("dup") == (sample_urls[1], True)

    async def test_shorten_null_custom_key_generates(self, client, store):
        """Test customKey null means no key given."""
        response = await client.post(
            "/shorty",
            json={"url": "https://example.com", "customKey": None}
        )

        assert response.status_code == 201
        assert store.generator.is_valid_format(response.json()["shortKey"])

    async def test_shorten_url_not_validated(self, client):
        """Test any non-empty string is accepted as a URL."""
        response = await client.post("/shorty", json={"url": "not-a-url"})

        assert response.status_code == 201

    @pytest.mark.parametrize("body", [
        {},
        {"url": ""},
        {"url": None},
        {"url": 123},
        {"customKey": "abc"},
        {"url": "https://example.com", "customKey": ""},
        {"url": "https://example.com", "customKey": 5},
        ["https://example.com"],
    ])
    async def test_shorten_invalid_body(self, client, body):
        """Test missing or malformed fields are rejected with 400."""
        response = await client.post("/shorty", json=body)

        assert response.status_code == 400
        assert "detail" in response.json()

    async def test_shorten_unparseable_json(self, client):
        """Test a body that is not JSON is rejected with 400."""
        response = await client.post(
            "/shorty",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400

    async def test_shorten_empty_body(self, client):
        """Test an empty body is rejected with 400."""
        response = await client.post("/shorty")

        assert response.status_code == 400

    async def test_shorten_key_generation_failure(self, store_path, config):
        """Test random source failure maps to 500."""
        from httpx import AsyncClient, ASGITransport

        store = URLStore(store_path, short_code_generator=BrokenGenerator())
        app = create_app(store=store, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            response = await client.post("/shorty", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to create short key"}

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
    async def test_shorty_other_methods(self, client, method):
        """Test non-POST methods on /shorty are 405."""
        response = await client.request(method, "/shorty")

        assert response.status_code == 405
        assert response.headers["allow"] == "POST"


@pytest.mark.asyncio
class TestRedirectEndpoints:
    """Test GET /{key}, GET / and the fallbacks."""

    async def test_welcome(self, client):
        """Test the root path serves welcome text."""
        response = await client.get("/")

        assert response.status_code == 200
        assert response.text == WELCOME_MESSAGE
        assert response.headers["content-type"].startswith("text/plain")

    async def test_redirect(self, client, store, sample_urls):
        """Test a stored key redirects with 302."""
        store.add(sample_urls[1], custom_key="repo")

        response = await client.get("/repo", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[1]

    async def test_redirect_key_with_slash(self, client, store):
        """Test keys containing a slash are looked up whole."""
        store.add("https://example.com/nested", custom_key="a/b")

        response = await client.get("/a/b", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/nested"

    async def test_redirect_missing(self, client):
        """Test unknown keys are 404."""
        response = await client.get("/missing", follow_redirects=False)

        assert response.status_code == 404

    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
    async def test_other_methods_not_found(self, client, store, method):
        """Test non-GET requests outside /shorty are 404, even for stored keys."""
        store.add("https://example.com", custom_key="abc")

        response = await client.request(method, "/abc")

        assert response.status_code == 404

    async def test_post_root_not_found(self, client):
        """Test POST / is 404."""
        response = await client.post("/", json={"url": "https://example.com"})

        assert response.status_code == 404


@pytest.mark.asyncio
class TestContentTypeAndMethods:
    """Test body decoding ignores Content-Type and unknown methods are 404."""

    @pytest.mark.parametrize("headers", [
        {},
        {"content-type": "text/plain"},
        {"content-type": "application/x-www-form-urlencoded"},
    ])
    async def test_shorten_json_without_json_content_type(self, client, store, headers):
        """Test a JSON body is accepted whatever Content-Type it carries."""
        response = await client.post(
            "/shorty",
            content=b'{"url": "https://example.com", "customKey": "plain"}',
            headers=headers,
        )

        assert response.status_code == 201
        assert response.json() == {"shortKey": "plain"}
        assert store.get("plain") == ("https://example.com", True)

    async def test_shorten_non_json_text_body(self, client):
        """Test a plain-text body that is not JSON is still a 400."""
        response = await client.post(
            "/shorty",
            content=b"url=https://example.com",
            headers={"content-type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("method", ["HEAD", "OPTIONS", "TRACE", "CONNECT"])
    @pytest.mark.parametrize("path", ["/abc", "/"])
    async def test_unusual_methods_not_found(self, client, store, method, path):
        """Test any non-GET method outside /shorty is 404, never 405."""
        store.add("https://example.com", custom_key="abc")

        response = await client.request(method, path)

        assert response.status_code == 404

    @pytest.mark.parametrize("method", ["TRACE", "CONNECT"])
    async def test_unusual_methods_on_shorty(self, client, method):
        """Test unlisted methods on /shorty keep their 405."""
        response = await client.request(method, "/shorty")

        assert response.status_code == 405
