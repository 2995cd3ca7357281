"""
Cache policies and TTLs.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from ..constants import CacheSettings


class CachePolicy(NamedTuple):
    """Cache policy for one dataset."""

    ttl_seconds: int
    description: str


class TTL(Enum):
    """Predefined TTLs."""

    MINUTES_15 = 15 * 60
    MINUTES_30 = 30 * 60
    HOUR_1 = 60 * 60
    HOURS_24 = 24 * 60 * 60


POLICIES: dict[str, CachePolicy] = {
    "msp_rates": CachePolicy(
        ttl_seconds=TTL.HOUR_1.value,
        description="MSP rates (announced once per season)",
    ),
}


def get_policy(dataset: str = "msp_rates") -> CachePolicy:
    """
    Return the cache policy for a dataset.

    The TTL can be overridden with ``MSPRATES_CACHE_TTL_SECONDS``.
    """
    policy = POLICIES.get(dataset, POLICIES["msp_rates"])
    override = CacheSettings().ttl_seconds
    if override != policy.ttl_seconds:
        return policy._replace(ttl_seconds=override)
    return policy


def get_ttl(dataset: str = "msp_rates") -> int:
    return get_policy(dataset).ttl_seconds


def is_expired(fetched_at_ms: int, now_ms: int, ttl_seconds: int) -> bool:
    """
    Check whether an entry fetched at ``fetched_at_ms`` is stale at ``now_ms``.

    An entry is fresh while its age is strictly below the TTL.
    """
    return (now_ms - fetched_at_ms) >= ttl_seconds * 1000


def format_ttl(seconds: int) -> str:
    """
    Format a TTL for display.

    Returns:
        Formatted string (e.g. "1 hour", "30 minutes")
    """
    if seconds < 60:
        return f"{seconds} seconds"
    if seconds < 3600:
        minutes = seconds // 60
        return f"{minutes} minute{'s' if minutes > 1 else ''}"
    if seconds < 86400:
        hours = seconds // 3600
        return f"{hours} hour{'s' if hours > 1 else ''}"

    days = seconds // 86400
    return f"{days} day{'s' if days > 1 else ''}"
