"""
Unit tests for algo_devboard.ingestion.feeds.

All tests are fully offline: local files come from tmp_path and HTTP is
replaced with monkeypatched urlopen stubs.
"""
import io
import urllib.error

import pytest

from algo_devboard.ingestion import feeds
from algo_devboard.ingestion.feeds import FeedResult, fetch_json, fetch_text


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def test_fetch_text_from_file(tmp_path):
    path = tmp_path / "commits.csv"
    path.write_text("date,developer,repository,commits\n")
    result = fetch_text(str(path))
    assert result.ok
    assert result.data.startswith("date,")


def test_fetch_text_strips_bom(tmp_path):
    path = tmp_path / "commits.csv"
    path.write_bytes("\ufeffdate,x\n".encode("utf-8"))
    assert fetch_text(str(path)).data == "date,x\n"


def test_missing_source():
    result = fetch_text(None)
    assert not result.ok
    assert result.error == "No source configured"


def test_missing_file(tmp_path):
    result = fetch_text(str(tmp_path / "nope.csv"))
    assert not result.ok
    assert result.data is None


def test_fetch_text_http(monkeypatch):
    seen = {}

    def fake_urlopen(req, timeout):
        seen["url"] = req.full_url
        seen["timeout"] = timeout
        return _FakeResponse(b"hello")

    monkeypatch.setattr(feeds.urllib.request, "urlopen", fake_urlopen)
    result = fetch_text("https://example.org/commits.csv", timeout=5)
    assert result == FeedResult(source="https://example.org/commits.csv", data="hello")
    assert seen == {"url": "https://example.org/commits.csv", "timeout": 5}


def test_http_error_is_reported_not_raised(monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.HTTPError(req.full_url, 503, "Service Unavailable", {}, None)

    monkeypatch.setattr(feeds.urllib.request, "urlopen", fake_urlopen)
    result = fetch_text("https://example.org/data.json")
    assert not result.ok
    assert "503" in result.error


def test_network_error_is_reported_not_raised(monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(feeds.urllib.request, "urlopen", fake_urlopen)
    assert not fetch_json("http://localhost:1/data.json").ok


def test_fetch_json(tmp_path):
    path = tmp_path / "devs.json"
    path.write_text('{"2024-01-01": 3}')
    assert fetch_json(str(path)).data == {"2024-01-01": 3}


def test_fetch_json_empty_body_is_empty_mapping(tmp_path):
    path = tmp_path / "devs.json"
    path.write_text("  ")
    assert fetch_json(str(path)).data == {}


def test_fetch_json_invalid(tmp_path):
    path = tmp_path / "devs.json"
    path.write_text("{not json")
    result = fetch_json(str(path))
    assert not result.ok
    assert "Invalid JSON" in result.error
