"""Tests that the server handles multiple concurrent connections correctly.

Allocation, alias reservation and counters must stay exact when many
requests arrive at once.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_health_requests(self, client):
        """Many concurrent GET /api/health requests all succeed."""
        concurrency = 50
        tasks = [client.get("/api/health") for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            assert not isinstance(r, Exception), f"Request {i} raised: {r}"
            assert r.status_code == 200, f"Request {i} got {r.status_code}"

    async def test_concurrent_creates_get_distinct_ids(self, client, sample_urls, sample_file):
        """Links and files created together never share an identifier."""
        concurrency = 40
        tasks = []
        for i in range(concurrency):
            if i % 2:
                tasks.append(client.post("/api/files", json=sample_file))
            else:
                tasks.append(client.post("/api/links", json={"url": f"{sample_urls[0]}?n={i}"}))
        responses = await asyncio.gather(*tasks)

        assert all(r.status_code == 201 for r in responses)
        ids = [r.json()["id"] for r in responses]
        assert len(set(ids)) == concurrency

    async def test_concurrent_alias_claims(self, client, sample_urls, sample_file):
        """Exactly one request wins a contested alias, whatever its kind."""
        tasks = []
        for i in range(20):
            if i % 2:
                tasks.append(client.post("/api/files", json={**sample_file, "alias": "contested"}))
            else:
                tasks.append(
                    client.post("/api/links", json={"url": sample_urls[0], "alias": "contested"})
                )
        responses = await asyncio.gather(*tasks)

        statuses = sorted(r.status_code for r in responses)
        assert statuses.count(201) == 1
        assert statuses.count(409) == 19

    async def test_concurrent_redirects(self, client, sample_urls):
        """Every concurrent visit is counted."""
        await client.post("/api/links", json={"url": sample_urls[0], "alias": "hot"})

        concurrency = 50
        responses = await asyncio.gather(*[client.get("/hot") for _ in range(concurrency)])

        assert all(r.status_code == 302 for r in responses)
        info = (await client.get("/api/resources/hot")).json()
        assert info["visit_count"] == concurrency
