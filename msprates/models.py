"""Pydantic v2 models for msprates."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from datetime import datetime
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_SEASON, Category
from .normalize.crops import normalize_category
from .normalize.seasons import normalize_season

T = TypeVar("T")


class MSPRate(BaseModel):
    """Minimum Support Price of one crop (and variety) for one season, in INR per quintal."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)
    crop: str = Field(..., min_length=1)
    variety: str | None = None
    category: Category
    year: str = DEFAULT_SEASON
    rate: float = Field(..., ge=0)
    increase: float | None = None
    increase_percentage: float | None = Field(None, alias="increasePercentage")
    source: str | None = None
    last_updated: str | None = Field(None, alias="lastUpdated")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        if isinstance(v, int | float):
            return str(v)
        return v

    @field_validator("crop", mode="before")
    @classmethod
    def strip_crop(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("variety", mode="before")
    @classmethod
    def empty_variety_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Category:
        return normalize_category(v)

    @field_validator("year", mode="before")
    @classmethod
    def canonical_year(cls, v: Any) -> Any:
        if isinstance(v, str):
            return normalize_season(v)
        return v

    def with_provenance(self, source: str, last_updated: str | None = None) -> MSPRate:
        """Copy stamped with where and when the record was fetched."""
        stamp = last_updated or datetime.now().astimezone().isoformat()
        return self.model_copy(update={"source": source, "last_updated": stamp})

    def to_dict(self) -> dict[str, Any]:
        """Canonical JSON shape (camelCase names, absent fields dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class HistoryPoint(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    year: str
    rate: float

    @field_validator("year", mode="before")
    @classmethod
    def canonical_year(cls, v: Any) -> Any:
        if isinstance(v, int):
            v = str(v)
        if isinstance(v, str):
            return normalize_season(v)
        return v

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class FallbackReason(StrEnum):
    NO_CREDENTIAL = "no_credential"
    NETWORK_DISABLED = "network_disabled"
    PROVIDER_ERROR = "provider_error"
    SOURCE_UNAVAILABLE = "source_unavailable"
    PARSE_ERROR = "parse_error"
    EMPTY_RESPONSE = "empty_response"
    VALIDATION_ERROR = "validation_error"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one tier of the acquisition chain: a value or the reason it fell through."""

    value: T | None = None
    reason: FallbackReason | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def success(cls, value: T) -> FetchResult[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, reason: FallbackReason, detail: str = "") -> FetchResult[T]:
        return cls(reason=reason, detail=detail)

    def unwrap(self) -> T:
        if self.reason is not None or self.value is None:
            raise ValueError(f"FetchResult has no value ({self.reason}: {self.detail})")
        return self.value


@dataclass
class MetaInfo:
    """Provenance metadata for one pipeline call."""

    source: str
    source_method: str
    fetched_at: datetime
    from_cache: bool = False
    fetch_duration_ms: int = 0
    records_count: int = 0
    attempted_sources: list[str] = dataclass_field(default_factory=list)
    selected_source: str = ""
    fallback_reasons: list[str] = dataclass_field(default_factory=list)
    msprates_version: str = ""
    python_version: str = ""

    def __post_init__(self) -> None:
        if not self.msprates_version:
            from msprates import __version__

            self.msprates_version = __version__

        if not self.python_version:
            self.python_version = sys.version.split()[0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "source_method": self.source_method,
            "fetched_at": self.fetched_at.isoformat(),
            "from_cache": self.from_cache,
            "fetch_duration_ms": self.fetch_duration_ms,
            "records_count": self.records_count,
            "attempted_sources": self.attempted_sources,
            "selected_source": self.selected_source,
            "fallback_reasons": self.fallback_reasons,
            "msprates_version": self.msprates_version,
            "python_version": self.python_version,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetaInfo:
        data = data.copy()
        if isinstance(data.get("fetched_at"), str):
            data["fetched_at"] = datetime.fromisoformat(data["fetched_at"])
        return cls(**data)
