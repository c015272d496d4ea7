"""
API tests for the pizza schedule router.

Run with: pytest cheeseboard/schedule/tests/test_router.py -v
"""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from cheeseboard.schedule import router as schedule_router
from cheeseboard.schedule.app import create_app
from cheeseboard.schedule.models import Sentiment
from cheeseboard.schedule.providers import (
    ContentFetchError,
    ContentProvider,
    FileContentProvider,
    WebReadContentProvider,
)
from cheeseboard.schedule.settings import get_settings


class FailingProvider(ContentProvider):
    def fetch(self):
        raise ContentFetchError("web read service unavailable")


class TestHealthAndStatus:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_status(self, client, store):
        store.toggle("basil", "liked")

        response = client.get("/api/schedule/status")

        assert response.status_code == 200
        assert response.json() == {
            "initialized": True,
            "provider": "InMemoryContentProvider",
            "store": "PreferenceStore",
            "preference_count": 1,
        }

    def test_status_with_empty_store(self, client):
        data = client.get("/api/schedule/status").json()

        assert data["store"] == "PreferenceStore"
        assert data["preference_count"] == 0


class TestEntries:

    def test_list_entries(self, client):
        response = client.get("/api/schedule/entries")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 4
        assert data["source_title"] == "Pizza Schedule"
        assert [e["date"] for e in data["entries"]] == ["Tue Mar 4", "Wed Mar 5", "Fri Mar 7", "Sun Mar 9"]

        first = data["entries"][0]
        assert first["ingredients"][2] == {"raw": "basil", "normalized": "basil", "sentiment": None}
        assert first["score"] == 0
        assert first["bucket"] == "neutral"

    def test_scores_follow_preferences(self, client, store):
        store.toggle("mozzarella", "liked")
        store.toggle("tomato", "disliked")

        data = client.get("/api/schedule/entries").json()
        first = data["entries"][0]

        assert first["score"] == -1
        assert first["bucket"] == "poor"
        assert first["ingredients"][0]["sentiment"] == "liked"
        assert data["summary"]["poor"] == 1

    def test_ranked(self, client, store):
        store.toggle("corn", "liked")
        store.toggle("lime", "liked")
        store.toggle("feta", "disliked")

        data = client.get("/api/schedule/entries", params={"ranked": True}).json()

        assert [e["date"] for e in data["entries"]] == ["Sun Mar 9", "Tue Mar 4", "Fri Mar 7", "Wed Mar 5"]

    def test_empty_page(self, client, provider):
        provider.set_content("Nothing scheduled this week")

        data = client.get("/api/schedule/entries").json()

        assert data["count"] == 0
        assert data["entries"] == []
        assert data["summary"]["total"] == 0

    def test_fetch_failure_is_502(self, client, store):
        schedule_router.configure(FailingProvider(), store)

        response = client.get("/api/schedule/entries")

        assert response.status_code == 502
        assert "unavailable" in response.json()["detail"]

    def test_malformed_web_read_payload_is_502(self, client, store):
        provider = WebReadContentProvider("http://webread.test", "https://example.test")
        schedule_router.configure(provider, store)
        response_mock = MagicMock()
        response_mock.json.return_value = {"content": ["Tue Mar 4"], "metadata": {}}

        with patch("cheeseboard.schedule.providers.requests.post", return_value=response_mock):
            response = client.get("/api/schedule/entries")

        assert response.status_code == 502
        assert "content must be a string" in response.json()["detail"]

    def test_undecodable_file_is_502(self, client, store, tmp_path):
        path = tmp_path / "schedule.md"
        path.write_bytes(b"Tue Mar 4\n### Pizza\n\xff\xfe\n")
        schedule_router.configure(FileContentProvider(path), store)

        response = client.get("/api/schedule/entries")

        assert response.status_code == 502
        assert "UTF-8" in response.json()["detail"]


class TestPreferences:

    def test_toggle(self, client, store):
        response = client.post(
            "/api/schedule/preferences/toggle",
            json={"ingredient": "basil", "sentiment": "liked"},
        )

        assert response.status_code == 200
        assert response.json() == {"ingredient": "basil", "sentiment": "liked", "preference_count": 1}
        assert store.get("basil") is Sentiment.LIKED

    def test_toggle_twice_clears(self, client, store):
        body = {"ingredient": "salt", "sentiment": "liked"}
        client.post("/api/schedule/preferences/toggle", json=body)
        response = client.post("/api/schedule/preferences/toggle", json=body)

        assert response.json()["sentiment"] is None
        assert "salt" not in store

    def test_toggle_normalizes_key(self, client, store):
        response = client.post(
            "/api/schedule/preferences/toggle",
            json={"ingredient": "Fresh Tomatoes", "sentiment": "disliked"},
        )

        assert response.json()["ingredient"] == "tomato"
        assert store.get("tomato") is Sentiment.DISLIKED

    def test_toggle_invalid_sentiment(self, client):
        response = client.post(
            "/api/schedule/preferences/toggle",
            json={"ingredient": "basil", "sentiment": "love"},
        )
        assert response.status_code == 422

    def test_toggle_empty_ingredient(self, client):
        response = client.post(
            "/api/schedule/preferences/toggle",
            json={"ingredient": "", "sentiment": "liked"},
        )
        assert response.status_code == 422

    def test_toggle_blank_after_normalization(self, client):
        response = client.post(
            "/api/schedule/preferences/toggle",
            json={"ingredient": "   ", "sentiment": "liked"},
        )
        assert response.status_code == 400

    def test_list_preferences(self, client, store):
        store.toggle("olive", "disliked")
        store.toggle("basil", "liked")

        response = client.get("/api/schedule/preferences")

        assert response.status_code == 200
        assert response.json() == {
            "preferences": [
                {"ingredient": "basil", "sentiment": "liked"},
                {"ingredient": "olive", "sentiment": "disliked"},
            ],
            "count": 2,
        }


class TestInitFromSettings:
    """Router state built from CHEESEBOARD_* environment variables."""

    def test_file_source_and_json_store(self, monkeypatch, sample_path, tmp_path):
        monkeypatch.setenv("CHEESEBOARD_SOURCE_FILE", str(sample_path))
        monkeypatch.setenv("CHEESEBOARD_PREFS_PATH", str(tmp_path / "prefs.json"))
        get_settings.cache_clear()
        schedule_router.reset()

        try:
            client = TestClient(create_app())
            status = client.get("/api/schedule/status").json()
            client.post(
                "/api/schedule/preferences/toggle",
                json={"ingredient": "corn", "sentiment": "liked"},
            )
            entries = client.get("/api/schedule/entries").json()
        finally:
            schedule_router.reset()
            get_settings.cache_clear()

        assert status["provider"] == "FileContentProvider"
        assert status["store"] == "JsonPreferenceStore"
        assert entries["count"] == 4
        assert (tmp_path / "prefs.json").exists()

    def test_missing_source_file_is_503(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CHEESEBOARD_SOURCE_FILE", str(tmp_path / "missing.md"))
        monkeypatch.setenv("CHEESEBOARD_PREFS_PATH", str(tmp_path / "prefs.json"))
        get_settings.cache_clear()
        schedule_router.reset()

        try:
            response = TestClient(create_app()).get("/api/schedule/entries")
        finally:
            schedule_router.reset()
            get_settings.cache_clear()

        assert response.status_code == 503
