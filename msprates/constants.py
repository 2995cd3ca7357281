"""Constants and settings for msprates."""

from __future__ import annotations

from enum import StrEnum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Source(StrEnum):
    DATAGOV = "datagov"
    GEMINI = "gemini"
    CACHE = "cache"
    FALLBACK = "fallback"


class Category(StrEnum):
    KHARIF = "kharif"
    RABI = "rabi"
    OTHER = "other"


URLS = {
    Source.DATAGOV: {
        "base": "https://api.data.gov.in",
        "resource": "https://api.data.gov.in/resource",
    },
}

# data.gov.in resource carrying the MSPs announced by CACP
DATAGOV_MSP_RESOURCE_ID = "1832c7b4-82ef-4734-b2b4-c2e3a38a28d3"

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"

# Season label used when a source omits the year
DEFAULT_SEASON = "2024-25"

SOURCE_LABEL_API = "API data"
SOURCE_LABEL_GENERATED = "Gemini AI generated"
SOURCE_LABEL_PROCESSED = "Gemini AI processed"


class GeminiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MSPRATES_GEMINI_")

    api_key: str | None = None
    model: str = DEFAULT_GEMINI_MODEL


class DataGovSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MSPRATES_DATAGOV_")

    api_key: str | None = None
    resource_id: str = DATAGOV_MSP_RESOURCE_ID
    limit: int = 100


class HTTPSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MSPRATES_HTTP_")

    timeout_connect: float = 10.0
    timeout_read: float = 30.0
    timeout_write: float = 10.0
    timeout_pool: float = 10.0


class CacheSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MSPRATES_CACHE_")

    ttl_seconds: int = 60 * 60
