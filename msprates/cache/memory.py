"""In-memory, time-bounded cache for the last resolved MSP rate set."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from msprates.exceptions import CacheError

from .policies import get_ttl, is_expired

logger = structlog.get_logger()


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheEntry:
    records: tuple[Any, ...] | None = None
    fetched_at_ms: int = 0


_EMPTY = CacheEntry()


class TimeBoundedCache:
    """
    Single-slot cache with a fixed freshness window.

    ``write`` and ``clear`` swap the whole entry, so a concurrent ``read``
    sees either the old or the new entry, never a mix.
    """

    def __init__(
        self,
        ttl_seconds: int | None = None,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else get_ttl("msp_rates")
        self._clock = clock
        self._entry = _EMPTY

    @property
    def entry(self) -> CacheEntry:
        return self._entry

    def read(self) -> list[Any] | None:
        entry = self._entry
        if entry.records is None:
            return None

        if is_expired(entry.fetched_at_ms, self._clock(), self.ttl_seconds):
            logger.debug("msp_cache_expired", fetched_at_ms=entry.fetched_at_ms)
            return None

        return list(entry.records)

    def write(self, records: Sequence[Any]) -> None:
        if not records:
            raise CacheError("Refusing to cache an empty record set")

        self._entry = CacheEntry(records=tuple(records), fetched_at_ms=self._clock())
        logger.debug("msp_cache_write", records=len(records))

    def clear(self) -> None:
        self._entry = _EMPTY
        logger.info("msp_cache_cleared")

    def is_fresh(self) -> bool:
        return self.read() is not None

    def age_seconds(self) -> float | None:
        entry = self._entry
        if entry.records is None:
            return None
        return (self._clock() - entry.fetched_at_ms) / 1000

    def status(self) -> dict[str, Any]:
        entry = self._entry
        age = self.age_seconds()
        fresh = self.is_fresh()
        return {
            "cached": fresh,
            "records": len(entry.records) if entry.records is not None else 0,
            "age_seconds": age,
            "ttl_seconds": self.ttl_seconds,
            "expires_in_seconds": (max(self.ttl_seconds - age, 0.0) if age is not None else None),
        }
