"""
Integration tests for site, article, and page endpoints.
"""
import pytest
from fastapi import status

SITE_ID = "00000000-0000-0000-0000-000000000003"
ARTICLE_ID = "00000000-0000-0000-0000-000000000005"
OTHER_TENANT_ID = "00000000-0000-0000-0000-000000000009"


class TestSitesAPI:
    """Test sites CRUD and public lookup."""

    @pytest.mark.asyncio
    async def test_lookup_by_subdomain_without_tenant(self, async_client, db_session_with_data):
        """Public pages resolve sites without any tenant header."""
        response = await async_client.get("/api/v1/sites", params={"subdomain": "test-site"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["site"]["id"] == SITE_ID

    @pytest.mark.asyncio
    async def test_lookup_by_domain_from_other_tenant(self, async_client, db_session_with_data):
        response = await async_client.get(
            "/api/v1/sites",
            params={"domain": "example.com"},
            headers={"X-Tenant-Id": OTHER_TENANT_ID},
        )

        assert response.json()["site"]["id"] == SITE_ID

    @pytest.mark.asyncio
    async def test_lookup_miss(self, async_client, db_session_with_data):
        response = await async_client.get("/api/v1/sites", params={"subdomain": "nope"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"site": None}

    @pytest.mark.asyncio
    async def test_list_sites(self, async_client, db_session_with_data):
        response = await async_client.get("/api/v1/sites")

        data = response.json()
        assert [s["id"] for s in data["sites"]] == [SITE_ID]
        assert "site" not in data

    @pytest.mark.asyncio
    async def test_create_site(self, async_client, db_session_with_data, tenant_headers):
        response = await async_client.post(
            "/api/v1/sites",
            json={"name": "New Site", "subdomain": "new-site"},
            headers=tenant_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        site = response.json()["site"]
        assert site["status"] == "draft"
        assert site["tenant_id"] == tenant_headers["X-Tenant-Id"]
        assert site["version"] == 1

    @pytest.mark.asyncio
    async def test_draft_hidden_when_published_only(self, async_client, db_session_with_data):
        await async_client.post("/api/v1/sites", json={"name": "Draft", "subdomain": "draft"})

        response = await async_client.get(
            "/api/v1/sites", params={"subdomain": "draft", "publishedOnly": "true"}
        )

        assert response.json() == {"site": None}

    @pytest.mark.asyncio
    async def test_duplicate_subdomain(self, async_client, db_session_with_data):
        response = await async_client.post(
            "/api/v1/sites", json={"name": "Copy", "subdomain": "test-site"}
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {"error": "Subdomain already in use"}

    @pytest.mark.asyncio
    async def test_invalid_subdomain(self, async_client, db_session_with_data):
        response = await async_client.post(
            "/api/v1/sites", json={"name": "Bad", "subdomain": "Not Valid!"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Validation failed"

    @pytest.mark.asyncio
    async def test_get_site_not_found(self, async_client, db_session_with_data):
        response = await async_client.get("/api/v1/sites/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Site not found"}

    @pytest.mark.asyncio
    async def test_update_site(self, async_client, db_session_with_data):
        response = await async_client.put(f"/api/v1/sites/{SITE_ID}", json={"theme": "finance"})

        assert response.status_code == status.HTTP_200_OK
        site = response.json()["site"]
        assert site["theme"] == "finance"
        assert site["name"] == "Test Site"
        assert site["version"] == 2

    @pytest.mark.asyncio
    async def test_delete_site(self, async_client, db_session_with_data):
        response = await async_client.delete(f"/api/v1/sites/{SITE_ID}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}
        missing = await async_client.get(f"/api/v1/sites/{SITE_ID}")
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        article = await async_client.get(f"/api/v1/articles/{ARTICLE_ID}")
        assert article.status_code == status.HTTP_404_NOT_FOUND


class TestArticlesAPI:
    """Test article endpoints."""

    @pytest.mark.asyncio
    async def test_get_by_slug(self, async_client, db_session_with_data):
        response = await async_client.get(
            "/api/v1/articles", params={"siteId": SITE_ID, "slug": "test-article"}
        )

        assert response.json()["article"]["id"] == ARTICLE_ID

    @pytest.mark.asyncio
    async def test_list_for_site(self, async_client, db_session_with_data):
        response = await async_client.get(
            "/api/v1/articles", params={"siteId": SITE_ID, "published": "true"}
        )

        assert [a["id"] for a in response.json()["articles"]] == [ARTICLE_ID]

    @pytest.mark.asyncio
    async def test_create_article_sets_published_at(self, async_client, db_session_with_data):
        response = await async_client.post(
            "/api/v1/articles",
            json={"site_id": SITE_ID, "title": "Fresh", "slug": "fresh", "published": True},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["article"]["published_at"] is not None

    @pytest.mark.asyncio
    async def test_duplicate_slug(self, async_client, db_session_with_data):
        response = await async_client.post(
            "/api/v1/articles",
            json={"site_id": SITE_ID, "title": "Again", "slug": "test-article"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    @pytest.mark.asyncio
    async def test_article_for_unknown_site(self, async_client, db_session_with_data):
        response = await async_client.post(
            "/api/v1/articles",
            json={"site_id": "missing", "title": "Lost", "slug": "lost"},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_single_hero_per_site(self, async_client, db_session_with_data):
        await async_client.put(f"/api/v1/articles/{ARTICLE_ID}", json={"hero": True})

        response = await async_client.post(
            "/api/v1/articles",
            json={"site_id": SITE_ID, "title": "New Hero", "slug": "new-hero", "hero": True},
        )
        assert response.json()["article"]["hero"] is True

        old = await async_client.get(f"/api/v1/articles/{ARTICLE_ID}")
        assert old.json()["article"]["hero"] is False


class TestPagesAPI:
    """Test page endpoints."""

    @pytest.mark.asyncio
    async def test_site_required(self, async_client, db_session_with_data):
        response = await async_client.get("/api/v1/pages")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "siteId is required"}

    @pytest.mark.asyncio
    async def test_get_by_slug(self, async_client, db_session_with_data, page_id):
        response = await async_client.get(
            "/api/v1/pages", params={"siteId": SITE_ID, "slug": "about"}
        )

        assert response.json()["page"]["id"] == page_id

    @pytest.mark.asyncio
    async def test_create_and_update_page(self, async_client, db_session_with_data):
        created = await async_client.post(
            "/api/v1/pages", json={"site_id": SITE_ID, "title": "Contact", "slug": "contact"}
        )
        page_id = created.json()["page"]["id"]

        response = await async_client.put(f"/api/v1/pages/{page_id}", json={"published": True})

        page = response.json()["page"]
        assert page["published"] is True
        assert page["published_at"] is not None
