from __future__ import annotations

from msprates.config import MSPRatesConfig, configure, get_config, reset_config
from msprates.constants import CacheSettings, DataGovSettings, GeminiSettings, HTTPSettings


class TestMSPRatesConfig:
    def test_defaults(self):
        config = MSPRatesConfig()

        assert config.cache_enabled is True
        assert config.network_enabled is True
        assert config.log_level == "INFO"
        assert config.is_offline() is False

    def test_offline(self):
        assert MSPRatesConfig(network_enabled=False).is_offline() is True


class TestGlobalConfig:
    def test_singleton(self):
        assert get_config() is get_config()

    def test_configure_updates_in_place(self):
        config = get_config()
        configure(cache_enabled=False, log_level="DEBUG")

        assert config.cache_enabled is False
        assert config.log_level == "DEBUG"
        assert config.network_enabled is True

    def test_reset(self):
        configure(network_enabled=False)
        reset_config()
        assert get_config().network_enabled is True


class TestSettings:
    def test_defaults(self):
        assert GeminiSettings().api_key is None
        assert GeminiSettings().model == "gemini-2.0-flash"
        assert DataGovSettings().limit == 100
        assert CacheSettings().ttl_seconds == 3600
        assert HTTPSettings().timeout_read == 30.0

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MSPRATES_GEMINI_API_KEY", "g")
        monkeypatch.setenv("MSPRATES_DATAGOV_LIMIT", "25")
        monkeypatch.setenv("MSPRATES_CACHE_TTL_SECONDS", "60")

        assert GeminiSettings().api_key == "g"
        assert DataGovSettings().limit == 25
        assert CacheSettings().ttl_seconds == 60
