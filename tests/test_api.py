"""Tests for API endpoints."""

import pytest


@pytest.mark.asyncio
class TestCreateEndpoints:
    """POST /api/links and /api/files."""

    async def test_create_link(self, client, sample_urls):
        response = await client.post("/api/links", json={"url": sample_urls[0]})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["alias"] is None
        assert data["kind"] == "link"
        assert data["short_url"] == "http://testserver/1"
        assert "created_at" in data

    async def test_create_link_with_alias(self, client, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0], "alias": "myrepo"},
        )

        assert response.status_code == 201
        assert response.json()["short_url"] == "http://testserver/myrepo"

    async def test_forwarded_headers(self, client, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0]},
            headers={
                "X-Forwarded-Proto": "https",
                "X-Forwarded-Host": "sho.rt",
                "X-Forwarded-Prefix": "/s",
            },
        )

        assert response.json()["short_url"] == "https://sho.rt/s/1"

    async def test_invalid_alias(self, client, sample_urls):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0], "alias": "admin"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "reserved"

    async def test_invalid_url(self, client):
        response = await client.post("/api/links", json={"url": "javascript:alert(1)"})

        assert response.status_code == 400
        assert response.json()["detail"] == "target_url"

    async def test_alias_taken_across_kinds(self, client, sample_urls, sample_file):
        response = await client.post(
            "/api/links",
            json={"url": sample_urls[0], "alias": "shared"},
        )
        assert response.status_code == 201

        response = await client.post("/api/files", json={**sample_file, "alias": "shared"})

        assert response.status_code == 409
        assert "shared" in response.json()["error"]

    async def test_create_file_asset(self, client, sample_file):
        response = await client.post("/api/files", json=sample_file)

        assert response.status_code == 201
        data = response.json()
        assert data["kind"] == "file_asset"
        assert data["short_url"] == f"http://testserver/{data['id']}"

    async def test_file_too_large(self, client, sample_file):
        sample_file["size_bytes"] = 51 * 1024 * 1024
        response = await client.post("/api/files", json=sample_file)

        assert response.status_code == 400
        assert response.json()["detail"] == "file_size"

    async def test_store_unavailable(self, client, store, sample_urls):
        await store.close()

        response = await client.post("/api/links", json={"url": sample_urls[0]})

        assert response.status_code == 503
        assert response.json()["error"] == "Service temporarily unavailable"


@pytest.mark.asyncio
class TestResolveEndpoint:
    """GET /{identifier}."""

    async def test_redirect_link(self, client, sample_urls):
        await client.post("/api/links", json={"url": sample_urls[0], "alias": "go"})

        response = await client.get("/go")

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[0]

    async def test_redirect_file_asset(self, client, sample_file):
        created = (await client.post("/api/files", json=sample_file)).json()

        response = await client.get(f"/{created['id']}")

        assert response.status_code == 302
        assert response.headers["location"] == sample_file["blob_location"]

    async def test_not_found(self, client):
        response = await client.get("/doesnotexist")
        assert response.status_code == 404

        response = await client.get("/999999")
        assert response.status_code == 404

    async def test_unstorable_identifier_is_not_found(self, client):
        response = await client.get("/a%00b")
        assert response.status_code == 404

    async def test_visits_counted(self, client, sample_urls):
        created = (await client.post("/api/links", json={"url": sample_urls[0]})).json()

        await client.get(f"/{created['id']}")
        await client.get(f"/{created['id']}")

        response = await client.get(f"/api/resources/{created['id']}")
        assert response.status_code == 200
        assert response.json()["visit_count"] == 2


@pytest.mark.asyncio
class TestQueryEndpoints:
    """Info, listing, statistics and health."""

    async def test_resource_info(self, client, sample_file):
        await client.post("/api/files", json={**sample_file, "alias": "q3-report"})

        response = await client.get("/api/resources/q3-report")

        assert response.status_code == 200
        data = response.json()
        assert data["kind"] == "file_asset"
        assert data["file_name"] == "report.pdf"
        assert data["download_count"] == 0

    async def test_resource_info_not_found(self, client):
        response = await client.get("/api/resources/nothing")
        assert response.status_code == 404

        response = await client.get("/api/resources/a%00b")
        assert response.status_code == 404

    async def test_list(self, client, sample_urls, sample_file):
        for url in sample_urls:
            await client.post("/api/links", json={"url": url})
        await client.post("/api/files", json=sample_file)

        response = await client.get("/api/links", params={"limit": 2})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert data["links"][0]["target_url"] == sample_urls[-1]

        response = await client.get("/api/files")
        assert response.json()["count"] == 1

    async def test_statistics(self, client, sample_urls):
        await client.post("/api/links", json={"url": sample_urls[0], "alias": "go"})
        await client.get("/go")

        response = await client.get("/api/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total_links"] == 1
        assert data["total_visits"] == 1
        assert data["database"] == "memory"

    async def test_health(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["cache"] == "healthy"
