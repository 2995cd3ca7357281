"""In-memory cache for MSP rates."""

from __future__ import annotations

from .memory import CacheEntry, TimeBoundedCache
from .policies import TTL, CachePolicy, format_ttl, get_policy, get_ttl, is_expired

__all__ = [
    "CacheEntry",
    "TimeBoundedCache",
    "CachePolicy",
    "TTL",
    "format_ttl",
    "get_policy",
    "get_ttl",
    "is_expired",
]
