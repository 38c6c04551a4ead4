"""
Unit tests for API routes
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from api import create_app
from store import QuoteStore
from utils.exceptions import QuoteServiceError


def _client(store: QuoteStore, verbose: bool = False) -> TestClient:
    return TestClient(create_app(store, verbose=verbose))


@pytest.mark.unit
class TestQuoteRoute:
    """Test cases for GET /"""

    def test_returns_quote_as_plain_text(self, store, sample_quotes):
        response = _client(store).get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text.endswith("\n")
        assert response.text[:-1] in sample_quotes

    def test_multiline_quote_and_utf8(self):
        store = QuoteStore()
        store.reload(["première ligne\nzweite Zeile ✓"])

        response = _client(store).get("/")

        assert response.status_code == 200
        assert "charset=utf-8" in response.headers["content-type"]
        assert response.content == "première ligne\nzweite Zeile ✓\n".encode("utf-8")

    def test_no_quotes_returns_503(self):
        response = _client(QuoteStore()).get("/")

        assert response.status_code == 503
        assert response.content == b""

    def test_cached_quote_is_stable(self, cached_store):
        client = _client(cached_store)
        bodies = {client.get("/").text for _ in range(20)}

        assert bodies == {cached_store.snapshot().cached + "\n"}

    def test_rotation_changes_cached_quote(self, cached_store):
        client = _client(cached_store)
        cached_store.reload(["only after rotation"])
        cached_store.rotate_cache()

        assert client.get("/").text == "only after rotation\n"

    def test_query_string_is_ignored(self, store, sample_quotes):
        response = _client(store).get("/?format=json")
        assert response.status_code == 200
        assert response.text[:-1] in sample_quotes

    def test_unknown_path_is_404(self, store):
        assert _client(store).get("/nope").status_code == 404


@pytest.mark.unit
class TestHealthRoute:
    """Test cases for GET /health"""

    def test_healthy(self, store, sample_quotes):
        response = _client(store).get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["quotes"] == len(sample_quotes)
        assert data["cache_enabled"] is False
        assert data["loaded_at"] is not None

    def test_unavailable_before_load(self):
        response = _client(QuoteStore(cache_enabled=True)).get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unavailable"
        assert data["quotes"] == 0
        assert data["cache_enabled"] is True
        assert data["loaded_at"] is None

    def test_unavailable_after_empty_reload(self, store):
        store.reload([])
        response = _client(store).get("/health")

        assert response.status_code == 503
        assert response.json()["loaded_at"] is not None


@pytest.mark.unit
class TestAccessLog:
    """Test cases for the verbose access log"""

    def test_access_log_when_verbose(self, store, caplog):
        client = _client(store, verbose=True)

        with caplog.at_level("DEBUG", logger="API"):
            client.get("/?x=1", headers={"User-Agent": "curl/8.0"})

        lines = [r.getMessage() for r in caplog.records if r.name == "API"]
        access = [line for line in lines if '"GET /?x=1 HTTP/1.1"' in line]
        assert len(access) == 1
        assert access[0].endswith('"curl/8.0" 200')

    def test_access_log_records_503(self, caplog):
        client = _client(QuoteStore(), verbose=True)

        with caplog.at_level("DEBUG", logger="API"):
            client.get("/")

        assert any(r.getMessage().endswith(" 503") for r in caplog.records if r.name == "API")

    def test_no_access_log_when_quiet(self, store, caplog):
        client = _client(store, verbose=False)

        with caplog.at_level("DEBUG", logger="API"):
            client.get("/")

        assert not any('"GET / HTTP/1.1"' in r.getMessage() for r in caplog.records)


@pytest.mark.unit
class TestErrorHandling:
    """Test cases for the error handling middleware"""

    def test_service_error_becomes_500(self):
        store = MagicMock(spec=QuoteStore)
        store.select.side_effect = QuoteServiceError("store broken", "STORE_TEST")

        response = _client(store).get("/")

        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "STORE_TEST"
        assert data["message"] == "store broken"

    def test_unexpected_error_becomes_500(self):
        store = MagicMock(spec=QuoteStore)
        store.select.side_effect = RuntimeError("boom")

        response = _client(store).get("/")

        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"
