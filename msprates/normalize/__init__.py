"""Normalization helpers: crop categories and season labels."""

from __future__ import annotations

from .crops import category_initial, classify_category, normalize_category
from .seasons import (
    current_season,
    is_valid_season,
    normalize_season,
    previous_season,
    season_list,
    season_start_year,
    start_year_to_season,
)

__all__: list[str] = [
    "category_initial",
    "classify_category",
    "normalize_category",
    "current_season",
    "is_valid_season",
    "normalize_season",
    "previous_season",
    "season_list",
    "season_start_year",
    "start_year_to_season",
]
