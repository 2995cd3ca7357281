"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from msprates.config import reset_config
from msprates.exceptions import ProviderError
from msprates.msp.api import reset_default_service

ENV_KEYS = (
    "MSPRATES_GEMINI_API_KEY",
    "MSPRATES_GEMINI_MODEL",
    "MSPRATES_DATAGOV_API_KEY",
    "MSPRATES_CACHE_TTL_SECONDS",
)

GEMINI_RATES_TEXT = """Here is the data:
```json
[
  {"id": "k1", "crop": "Paddy", "variety": "Common", "category": "kharif",
   "year": "2025-26", "rate": 2369, "increase": 69, "increasePercentage": 3.0},
  {"id": "r1", "crop": "Wheat", "category": "rabi",
   "year": "2025-26", "rate": 2425, "increase": 150, "increasePercentage": 6.6}
]
```
"""

GEMINI_HISTORY_TEXT = """```
[
  {"year": "2022-23", "rate": 2040},
  {"year": "2024-25", "rate": 2300},
  {"year": "2020-21", "rate": 1868},
  {"year": "2023-24", "rate": 2183},
  {"year": "2021-22", "rate": 1940}
]
```"""


class FakeProvider:
    """TextProvider double answering with canned text or raising canned errors."""

    name = "fake"

    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses)
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class FakeClock:
    def __init__(self, now_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """No real credentials, default config and a fresh default service per test."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    reset_default_service()
    yield
    reset_config()
    reset_default_service()


@pytest.fixture
def fake_provider():
    return FakeProvider


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def gemini_rates_text() -> str:
    return GEMINI_RATES_TEXT


@pytest.fixture
def gemini_history_text() -> str:
    return GEMINI_HISTORY_TEXT


@pytest.fixture
def provider_error() -> ProviderError:
    return ProviderError("fake", "quota exceeded")


@pytest.fixture
def datagov_records() -> list[dict]:
    """Raw records as published on data.gov.in (field names vary)."""
    return [
        {"commodity_name": "Paddy", "variety": "Common", "msp_price": "2183", "previous_price": "2040"},
        {"crop_name": "Wheat", "msp": "2275", "previous_msp": "2125", "msp_year": "2024-25"},
        {"crop": "Copra", "grade": "Milling", "rate": "11160"},
    ]
