"""
Tests for algo_devboard.config.
"""
import pytest

from algo_devboard.config import DEFAULT_CONFIG, DevboardConfig, config_from_env


def test_defaults():
    assert dict(DEFAULT_CONFIG.window_days) == {"last30d": 30, "last90d": 90, "last1y": 365}
    assert DEFAULT_CONFIG.leaderboard_limit is None
    assert DEFAULT_CONFIG.excluded_developers == ("forosuru",)
    assert DEFAULT_CONFIG.clamp_future_records is False


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.csv_url = "x"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("DEVBOARD_DATA_URL", "https://example.org/devs.json")
    monkeypatch.setenv("DEVBOARD_CSV_URL", "https://example.org/commits.csv")
    monkeypatch.setenv("DEVBOARD_HTTP_TIMEOUT", "5")
    config = config_from_env()
    assert config.data_url == "https://example.org/devs.json"
    assert config.csv_url == "https://example.org/commits.csv"
    assert config.http_timeout_s == 5.0
    assert DEFAULT_CONFIG.data_url is None


def test_config_from_env_without_vars(monkeypatch):
    for name in ("DEVBOARD_DATA_URL", "DEVBOARD_CSV_URL", "DEVBOARD_HTTP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    base = DevboardConfig(csv_url="local.csv")
    assert config_from_env(base) is base


def test_config_is_hashable():
    """Every field is immutable, so the shared default can key a cache."""
    assert hash(DEFAULT_CONFIG) == hash(DevboardConfig())
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.window_days.append(("last7d", 7))
