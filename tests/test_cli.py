"""Tests for msprates CLI module."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from msprates.cache.memory import TimeBoundedCache
from msprates.cli import app, cache_app
from msprates.config import configure
from msprates.msp import api
from msprates.msp.api import MSPService
from msprates.msp.fallback import FALLBACK_RATES

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logs():
    configure(log_level="CRITICAL")


class TestMainApp:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "msprates version" in result.output

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert "msprates version" in result.output

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "msprates" in result.output


class TestRatesCommand:
    def test_table(self):
        result = runner.invoke(app, ["rates"])

        assert result.exit_code == 0
        assert "Paddy" in result.output
        assert "Jute" in result.output

    def test_json(self):
        result = runner.invoke(app, ["rates", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [row["id"] for row in data] == ["k1", "k2", "k3", "r1", "r2", "o1", "o2"]

    def test_category(self):
        result = runner.invoke(app, ["rates", "-c", "rabi", "-o", "json"])

        assert result.exit_code == 0
        assert [row["crop"] for row in json.loads(result.stdout)] == ["Wheat", "Barley"]

    def test_csv(self):
        result = runner.invoke(app, ["rates", "-o", "csv"])

        assert result.exit_code == 0
        assert result.stdout.splitlines()[0].startswith("id,crop,variety,category")

    def test_format_option_spelling(self):
        result = runner.invoke(app, ["rates", "--formato", "json"])
        assert result.exit_code != 0

    def test_unknown_category(self):
        result = runner.invoke(app, ["rates", "--category", "summer"])

        assert result.exit_code == 0
        assert "No data found" in result.output


class TestHistoryCommand:
    def test_extrapolated(self):
        result = runner.invoke(app, ["history", "k1", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [row["year"] for row in data] == [
            "2024-25",
            "2023-24",
            "2022-23",
            "2021-22",
            "2020-21",
        ]
        assert [row["rate"] for row in data] == [2183, 2040, 1925.6, 1825.5, 1725.4]

    def test_unknown_crop(self):
        result = runner.invoke(app, ["history", "x9"])

        assert result.exit_code == 1
        assert "Unknown crop id: x9" in result.output


class TestCacheCommands:
    def test_status_empty(self):
        result = runner.invoke(app, ["cache", "status"])

        assert result.exit_code == 0
        assert "Cached:  no" in result.output
        assert "TTL:     1 hour" in result.output

    def test_status_fetch_fills_cache(self, fake_provider, gemini_rates_text):
        provider = fake_provider(gemini_rates_text)
        api.set_default_service(
            MSPService(cache=TimeBoundedCache(ttl_seconds=3600), provider=provider)
        )

        result = runner.invoke(app, ["cache", "status", "--fetch"])

        assert result.exit_code == 0
        assert "Cached:  yes" in result.output
        assert "Records: 2" in result.output
        assert provider.calls == 1

    def test_status_without_fetch_does_not_call_sources(self, fake_provider, gemini_rates_text):
        provider = fake_provider(gemini_rates_text)
        api.set_default_service(
            MSPService(cache=TimeBoundedCache(ttl_seconds=3600), provider=provider)
        )

        result = runner.invoke(app, ["cache", "status"])

        assert "Cached:  no" in result.output
        assert provider.calls == 0

    def test_help_mentions_process_lifetime(self):
        assert "current process" in cache_app.info.help

    def test_status_json(self):
        service = MSPService(cache=TimeBoundedCache(ttl_seconds=3600))
        service.cache.write(list(FALLBACK_RATES[:2]))
        api.set_default_service(service)

        result = runner.invoke(app, ["cache", "status", "--output", "json"])

        assert result.exit_code == 0
        status = json.loads(result.stdout)
        assert status["cached"] is True
        assert status["records"] == 2

    def test_clear(self):
        service = MSPService(cache=TimeBoundedCache(ttl_seconds=3600))
        service.cache.write(list(FALLBACK_RATES[:2]))
        api.set_default_service(service)

        result = runner.invoke(app, ["cache", "clear"])

        assert result.exit_code == 0
        assert "Cache cleared" in result.output
        assert service.cache.read() is None
