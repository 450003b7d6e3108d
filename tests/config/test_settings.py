"""Tests for environment-backed settings."""

import pytest

from keepalive_cache.config.settings import CacheSettings
from keepalive_cache.core.cache import KeepAliveCache


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "KEEPALIVE_CACHE_CASE_SENSITIVE_KEYS",
        "KEEPALIVE_CACHE_AUTO_RELEASE_SECONDS",
        "KEEPALIVE_CACHE_DEFAULT_KEEPALIVE_MILLIS",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_env():
    config = CacheSettings().to_config()
    assert config.case_sensitive_keys is True
    assert config.auto_release_in_seconds is None
    assert config.default_keepalive_in_millis is None


def test_reads_env(monkeypatch):
    monkeypatch.setenv("KEEPALIVE_CACHE_CASE_SENSITIVE_KEYS", "false")
    monkeypatch.setenv("KEEPALIVE_CACHE_AUTO_RELEASE_SECONDS", "30")
    monkeypatch.setenv("KEEPALIVE_CACHE_DEFAULT_KEEPALIVE_MILLIS", "5000")

    config = CacheSettings().to_config()
    assert config.case_sensitive_keys is False
    assert config.auto_release_in_seconds == 30
    assert config.default_keepalive_in_millis == 5000


def test_non_positive_env_disables_feature(monkeypatch):
    monkeypatch.setenv("KEEPALIVE_CACHE_AUTO_RELEASE_SECONDS", "0")
    monkeypatch.setenv("KEEPALIVE_CACHE_DEFAULT_KEEPALIVE_MILLIS", "-1")

    config = CacheSettings().to_config()
    assert config.auto_release_in_seconds is None
    assert config.default_keepalive_in_millis is None


def test_invalid_env_raises(monkeypatch):
    monkeypatch.setenv("KEEPALIVE_CACHE_AUTO_RELEASE_SECONDS", "often")
    with pytest.raises(ValueError):
        CacheSettings()

    monkeypatch.delenv("KEEPALIVE_CACHE_AUTO_RELEASE_SECONDS")
    monkeypatch.setenv("KEEPALIVE_CACHE_CASE_SENSITIVE_KEYS", "maybe")
    with pytest.raises(ValueError):
        CacheSettings()


def test_cache_from_settings(monkeypatch):
    monkeypatch.setenv("KEEPALIVE_CACHE_CASE_SENSITIVE_KEYS", "no")
    monkeypatch.setenv("KEEPALIVE_CACHE_DEFAULT_KEEPALIVE_MILLIS", "100")

    cache = KeepAliveCache.from_settings()
    assert cache.case_sensitive_keys is False
    assert cache.default_keepalive_in_millis == 100
    assert cache.purger is None


def test_module_imports_with_invalid_env(monkeypatch):
    """Test that a bad variable only fails when settings are built, not on import."""
    import importlib

    import keepalive_cache.config.settings as settings_module

    monkeypatch.setenv("KEEPALIVE_CACHE_AUTO_RELEASE_SECONDS", "often")
    reloaded = importlib.reload(settings_module)

    explicit = reloaded.CacheSettings(
        case_sensitive_keys=True, auto_release_in_seconds=None, default_keepalive_in_millis=None
    )
    assert explicit.to_config().auto_release_in_seconds is None
    with pytest.raises(ValueError):
        reloaded.CacheSettings()
