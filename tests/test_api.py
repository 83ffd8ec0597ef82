"""Tests for API and web endpoints."""

import re

import pytest
from httpx import ASGITransport, AsyncClient

from url_expander.config import Config
from url_expander.resolver import RedirectResolver
from url_expander.service import ExpandService
from url_expander.web_app import create_app

from .conftest import BASE_URL, ScriptedTokenGenerator, UnavailableStore

EXPANDED_LINK = re.compile(r'id="expanded-url" href="([^"]+)"')


def token_of(expanded_url: str) -> str:
    return expanded_url.rsplit("/", 1)[1]


class TestAPIEndpoints:
    """Test JSON API endpoints."""

    async def test_expand_url(self, client, sample_urls):
        """Test POST /api/expand."""
        response = await client.post(
            "/api/expand",
            json={"url": sample_urls[0], "length": 10}
        )

        assert response.status_code == 200
        data = response.json()
        assert re.fullmatch(rf"{BASE_URL}/[A-Za-z0-9]{{10}}", data["expandedUrl"])
        assert data["token"] == token_of(data["expandedUrl"])
        assert data["original_url"] == sample_urls[0]
        assert data["description"] == "Generated secure URL with 10-character string."

    async def test_expand_default_length(self, client, sample_urls):
        response = await client.post("/api/expand", json={"url": sample_urls[0]})

        assert response.status_code == 200
        assert len(response.json()["token"]) == 100

    @pytest.mark.parametrize("length", [4, 1001])
    async def test_expand_length_out_of_range(self, client, sample_urls, length):
        response = await client.post(
            "/api/expand",
            json={"url": sample_urls[0], "length": length}
        )

        assert response.status_code == 400
        assert "length" in response.json()["detail"].lower()

    @pytest.mark.parametrize("length", [5, 1000])
    async def test_expand_length_bounds(self, client, sample_urls, length):
        response = await client.post(
            "/api/expand",
            json={"url": sample_urls[0], "length": length}
        )

        assert response.status_code == 200
        assert len(response.json()["token"]) == length

    async def test_expand_invalid_url(self, client):
        """Test POST /api/expand with invalid URL."""
        response = await client.post(
            "/api/expand",
            json={"url": "not-a-url", "length": 10}
        )

        assert response.status_code == 400

    async def test_expand_malformed_body(self, client):
        response = await client.post("/api/expand", json={"length": 10})

        assert response.status_code == 422

    async def test_expand_twice(self, client, sample_urls):
        first = (await client.post("/api/expand", json={"url": sample_urls[0], "length": 10})).json()
        second = (await client.post("/api/expand", json={"url": sample_urls[0], "length": 10})).json()

        assert first["expandedUrl"] != second["expandedUrl"]
        assert second["created_at"] == first["created_at"]

        old = await client.get(f"/{first['token']}", follow_redirects=False)
        new = await client.get(f"/{second['token']}", follow_redirects=False)
        assert old.status_code == 404
        assert new.status_code == 302

    async def test_get_link(self, client, sample_urls):
        """Test GET /api/links/{token}."""
        created = (await client.post("/api/expand", json={"url": sample_urls[0], "length": 10})).json()

        response = await client.get(f"/api/links/{created['token']}")

        assert response.status_code == 200
        data = response.json()
        assert data["original_url"] == sample_urls[0]
        assert data["expanded_url"] == created["expandedUrl"]

    async def test_get_link_not_found(self, client):
        response = await client.get("/api/links/nonexistent")

        assert response.status_code == 404

    async def test_find_link_by_original(self, client, sample_urls):
        created = (await client.post("/api/expand", json={"url": sample_urls[1], "length": 10})).json()

        response = await client.get("/api/links", params={"url": sample_urls[1]})
        assert response.status_code == 200
        assert response.json()["expanded_url"] == created["expandedUrl"]

        missing = await client.get("/api/links", params={"url": "https://example.com/none"})
        assert missing.status_code == 404

    async def test_health_check(self, client):
        """Test GET /api/health."""
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["cache"] == "healthy"

    async def test_statistics(self, client, sample_urls):
        """Test GET /api/stats."""
        await client.post("/api/expand", json={"url": sample_urls[0], "length": 10})

        response = await client.get("/api/stats")

        assert response.status_code == 200
        assert response.json() == {"total_links": 1, "database": "memory", "cache_enabled": False}


class TestWebEndpoints:
    """Test HTML form and redirect endpoints."""

    async def test_homepage(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "<form" in response.text
        assert 'value="100"' in response.text

    async def test_form_expand(self, client):
        response = await client.post(
            "/expand-url",
            data={"url": "https://example.com/article", "length": "10"},
        )

        assert response.status_code == 200
        match = EXPANDED_LINK.search(response.text)
        assert match
        assert re.fullmatch(rf"{BASE_URL}/[A-Za-z0-9]{{10}}", match.group(1))

    async def test_form_expand_errors(self, client):
        bad_length = await client.post("/expand-url", data={"url": "https://example.com", "length": "4"})
        not_number = await client.post("/expand-url", data={"url": "https://example.com", "length": "ten"})
        bad_url = await client.post("/expand-url", data={"url": "nope", "length": "10"})

        for response in (bad_length, not_number, bad_url):
            assert response.status_code == 400
            assert 'class="error"' in response.text
            assert EXPANDED_LINK.search(response.text) is None

    async def test_redirect(self, client):
        """Expanded URL redirects to the original; unknown token is a 404."""
        created = (await client.post(
            "/api/expand",
            json={"url": "https://example.com/article", "length": 10}
        )).json()

        response = await client.get(f"/{created['token']}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/article"

        missing = await client.get("/doesnotexist", follow_redirects=False)
        assert missing.status_code == 404
        assert "does not exist" in missing.text

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestErrorMapping:
    """Test translation of service errors into HTTP responses."""

    async def test_generation_exhausted(self, store, config, logger):
        service = ExpandService(
            store=store,
            base_url=BASE_URL,
            token_generator=ScriptedTokenGenerator(["TAKEN"] * 6),
            logger=logger,
        )
        resolver = RedirectResolver(store=store, base_url=BASE_URL, logger=logger)
        app = create_app(store, None, service, resolver, config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
            ok = await client.post("/api/expand", json={"url": "https://a.example.com", "length": 5})
            failed = await client.post("/api/expand", json={"url": "https://b.example.com", "length": 5})

        assert ok.status_code == 200
        assert failed.status_code == 500
        assert "unique" in failed.json()["detail"]

    async def test_store_unavailable(self, config, logger):
        store = UnavailableStore(logger=logger)
        service = ExpandService(store=store, base_url=BASE_URL, logger=logger)
        resolver = RedirectResolver(store=store, base_url=BASE_URL, logger=logger)
        app = create_app(store, None, service, resolver, config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
            api = await client.post("/api/expand", json={"url": "https://a.example.com", "length": 5})
            form = await client.post("/expand-url", data={"url": "https://a.example.com", "length": "5"})
            health = await client.get("/health")

        assert api.status_code == 503
        assert form.status_code == 503
        assert health.status_code == 503


class TestRequestBaseURL:
    """Test deriving the base URL from request headers."""

    async def test_forwarded_headers(self, store, service, resolver, logger):
        config = Config(_env_file=None, base_url=BASE_URL, use_request_base_url=True)
        app = create_app(store, None, service, resolver, config)
        headers = {"X-Forwarded-Proto": "https", "X-Forwarded-Host": "links.example.com"}

        async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
            created = await client.post(
                "/api/expand",
                json={"url": "https://example.com/article", "length": 10},
                headers=headers,
            )
            data = created.json()
            assert data["expandedUrl"].startswith("https://links.example.com/")

            proxied = await client.get(f"/{data['token']}", headers=headers, follow_redirects=False)
            direct = await client.get(f"/{data['token']}", follow_redirects=False)

        assert proxied.status_code == 302
        # Direct access has a different base URL, so the expanded URL does not match
        assert direct.status_code == 404
