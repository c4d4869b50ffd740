"""
Integration tests for entry API endpoints.

Tests CRUD operations, search and statistics through the REST API.
"""

import pytest
from core.app_factory import create_app
from domain.services.entry_validation import EntryLimits, EntryValidator
from httpx import ASGITransport, AsyncClient
from infrastructure.entry_store import EntryStore


class TestCreateEntry:
    """Tests for POST /api/entries."""

    async def test_create_entry(self, client, sample_payload):
        response = await client.post("/api/entries", json=sample_payload)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Fixed bug #42"
        assert data["tags"] == ["backend", "urgent"]
        assert data["category"] == "work"
        assert len(data["id"]) == 36
        assert data["timestamp"].endswith("Z")

    async def test_create_entry_is_stored(self, client, entry_store, sample_payload):
        response = await client.post("/api/entries", json=sample_payload)

        assert entry_store.get_by_id(response.json()["id"]).message == "Fixed bug #42"

    async def test_create_without_category_omits_it(self, client):
        response = await client.post("/api/entries", json={"message": "plain note"})

        assert response.status_code == 201
        data = response.json()
        assert "category" not in data
        assert data["tags"] == []

    async def test_message_is_escaped(self, client):
        response = await client.post("/api/entries", json={"message": "<script>alert(1)</script>hello"})

        assert response.status_code == 201
        assert response.json()["message"] == "hello"

    @pytest.mark.parametrize(
        "payload, kind",
        [
            ({"message": "   "}, "empty"),
            ({"message": "x" * 10001}, "too_long"),
            ({"message": "ok", "tags": ["has space"]}, "invalid_format"),
            ({"message": "ok", "tags": [f"t{i}" for i in range(21)]}, "too_many"),
            ({"message": "ok", "category": "bad/category"}, "invalid_format"),
        ],
    )
    async def test_invalid_payload(self, client, entry_store, payload, kind):
        response = await client.post("/api/entries", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert body["kind"] == kind
        assert body["detail"]
        assert len(entry_store) == 0

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"message": 42},
            {"message": "ok", "tags": "a,b"},
        ],
    )
    async def test_malformed_body(self, client, payload):
        response = await client.post("/api/entries", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"

    async def test_capacity_exceeded(self, test_settings):
        store = EntryStore(EntryValidator(EntryLimits(max_entries=1)))
        app = create_app(settings=test_settings, entry_store=store)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            first = await ac.post("/api/entries", json={"message": "first"})
            second = await ac.post("/api/entries", json={"message": "second"})

        assert first.status_code == 201
        assert second.status_code == 403
        assert second.json()["kind"] == "capacity_exceeded"
        assert len(store) == 1


class TestReadEntries:
    """Tests for GET /api/entries and GET /api/entries/{id}."""

    async def test_list_empty(self, client):
        response = await client.get("/api/entries")

        assert response.status_code == 200
        assert response.json() == []

    async def test_list_entries(self, client, seeded_store):
        response = await client.get("/api/entries")

        assert response.status_code == 200
        messages = [e["message"] for e in response.json()]
        assert messages == [e.message for e in seeded_store.list()]

    async def test_get_entry(self, client, sample_entry):
        response = await client.get(f"/api/entries/{sample_entry.id}")

        assert response.status_code == 200
        assert response.json()["id"] == sample_entry.id

    async def test_get_missing_entry(self, client):
        response = await client.get("/api/entries/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Not Found"
        assert body["kind"] == "not_found"
        assert "does-not-exist" in body["detail"]

    async def test_get_malformed_id(self, client):
        response = await client.get("/api/entries/bad%20id!")

        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_format"


class TestUpdateEntry:
    """Tests for PUT/PATCH /api/entries/{id}."""

    @pytest.mark.parametrize("method", ["PUT", "PATCH"])
    async def test_partial_update(self, client, sample_entry, method):
        response = await client.request(method, f"/api/entries/{sample_entry.id}", json={"message": "Updated"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Updated"
        assert data["tags"] == ["backend", "urgent"]
        assert data["category"] == "work"
        assert data["id"] == sample_entry.id

    async def test_update_clears_category(self, client, entry_store, sample_entry):
        response = await client.put(f"/api/entries/{sample_entry.id}", json={"category": None})

        assert response.status_code == 200
        assert "category" not in response.json()
        assert entry_store.get_by_id(sample_entry.id).category is None

    async def test_update_ignores_id_and_timestamp(self, client, entry_store, sample_entry):
        response = await client.put(
            f"/api/entries/{sample_entry.id}",
            json={"id": "other", "timestamp": "2000-01-01T00:00:00Z", "tags": ["changed"]},
        )

        assert response.status_code == 200
        stored = entry_store.get_by_id(sample_entry.id)
        assert stored.timestamp == sample_entry.timestamp
        assert stored.tags == ["changed"]

    async def test_update_missing_entry(self, client):
        response = await client.put("/api/entries/missing", json={"message": "x"})

        assert response.status_code == 404

    async def test_invalid_update(self, client, entry_store, sample_entry):
        response = await client.put(f"/api/entries/{sample_entry.id}", json={"message": ""})

        assert response.status_code == 400
        assert entry_store.get_by_id(sample_entry.id) == sample_entry


class TestDeleteEntry:
    """Tests for DELETE /api/entries/{id}."""

    async def test_delete_entry(self, client, entry_store, sample_entry):
        response = await client.delete(f"/api/entries/{sample_entry.id}")

        assert response.status_code == 204
        assert response.content == b""
        assert len(entry_store) == 0

    async def test_delete_missing_entry(self, client, seeded_store):
        response = await client.delete("/api/entries/missing")

        assert response.status_code == 404
        assert len(seeded_store) == 4


class TestStatisticsEndpoint:
    """Tests for GET /api/entries/stats."""

    async def test_empty_statistics(self, client):
        response = await client.get("/api/entries/stats")

        assert response.status_code == 200
        assert response.json() == {
            "totalEntries": 0,
            "totalTags": 0,
            "totalCategories": 0,
            "mostUsedTags": [],
            "mostUsedCategories": [],
        }

    async def test_statistics(self, client, seeded_store):
        response = await client.get("/api/entries/stats")

        data = response.json()
        assert data["totalEntries"] == 4
        assert data["totalTags"] == 6
        assert data["totalCategories"] == 2
        assert data["mostUsedTags"][0] == ["backend", 2]
        assert data["mostUsedCategories"] == [["work", 2], ["study", 1]]


class TestSearchEndpoint:
    """Tests for GET /api/entries/search."""

    async def test_search_by_keyword(self, client, seeded_store):
        response = await client.get("/api/entries/search", params={"q": "hotfix"})

        assert response.status_code == 200
        assert [e["message"] for e in response.json()] == ["Deployed hotfix for login"]

    async def test_search_by_tag_and_category(self, client, seeded_store):
        response = await client.get("/api/entries/search", params={"tag": "backend", "category": "work"})

        assert {e["message"] for e in response.json()} == {
            "Refactored the auth flow",
            "Deployed hotfix for login",
        }

    async def test_search_without_filters_returns_everything(self, client, seeded_store):
        response = await client.get("/api/entries/search")

        assert len(response.json()) == 4

    async def test_search_by_date(self, client, entry_store):
        entry_store.replace_all(
            [
                {"id": "old", "message": "old", "timestamp": "2024-01-10T12:00:00Z"},
                {"id": "new", "message": "new", "timestamp": "2024-03-10T12:00:00Z"},
            ]
        )

        response = await client.get("/api/entries/search", params={"start": "2024-03-10", "end": "2024-03-10"})

        assert [e["id"] for e in response.json()] == ["new"]

    async def test_search_start_after_end(self, client):
        response = await client.get("/api/entries/search", params={"start": "2024-03-10", "end": "2024-01-01"})

        assert response.status_code == 400

    async def test_search_invalid_date(self, client):
        response = await client.get("/api/entries/search", params={"start": "yesterday"})

        assert response.status_code == 400
