"""
Helpers for Indian crop season labels.

MSPs are announced per crop year, which does not match the calendar year:
- Kharif (paddy, jowar, cotton): sown Jun-Jul, harvested Sep-Oct
- Rabi (wheat, barley, gram): sown Oct-Dec, harvested Mar-Apr

Notation: "2024-25" means the crop year starting in 2024 and ending in 2025.
"""

from __future__ import annotations

import re
from datetime import date

REGEX_SEASON = re.compile(r"^(\d{4})-(\d{2})$")
REGEX_SEASON_SLASH = re.compile(r"^(\d{4})/(\d{2})$")
REGEX_SEASON_LONG = re.compile(r"^(\d{4})[-/](\d{4})$")
REGEX_YEAR = re.compile(r"^(\d{4})$")

SEASON_START_MONTH = 7


def current_season(today: date | None = None) -> str:
    """
    Return the current crop season in the form '2024-25'.

    The season is derived from the month:
    - Jul to Dec: this year / next year
    - Jan to Jun: last year / this year

    Examples:
        >>> current_season(date(2024, 10, 15))
        '2024-25'
        >>> current_season(date(2025, 3, 15))
        '2024-25'
    """
    if today is None:
        today = date.today()

    start = today.year if today.month >= SEASON_START_MONTH else today.year - 1
    return start_year_to_season(start)


def start_year_to_season(start: int) -> str:
    """
    Build a season label from its start year.

    Examples:
        >>> start_year_to_season(2023)
        '2023-24'
    """
    return f"{start}-{str(start + 1)[-2:]}"


def is_valid_season(season: str) -> bool:
    """Check whether ``season`` is in one of the accepted formats."""
    try:
        normalize_season(season)
    except ValueError:
        return False
    return True


def normalize_season(season: str) -> str:
    """
    Normalize a season label to the canonical '2024-25' form.

    Accepted formats: '2024-25', '2024/25', '2024-2025', '2024/2025'
    and a bare start year '2024'.

    Raises:
        ValueError: If the format is not recognised

    Examples:
        >>> normalize_season('2024/2025')
        '2024-25'
        >>> normalize_season('2024')
        '2024-25'
    """
    season = season.strip()

    if REGEX_SEASON.match(season):
        return season

    match = REGEX_SEASON_SLASH.match(season) or REGEX_SEASON_LONG.match(season)
    if match:
        return f"{match.group(1)}-{match.group(2)[-2:]}"

    match = REGEX_YEAR.match(season)
    if match:
        return start_year_to_season(int(match.group(1)))

    raise ValueError(f"Invalid season label: '{season}'")


def season_start_year(season: str) -> int:
    """
    Numeric start year of a season, used to order seasons.

    Examples:
        >>> season_start_year('2024-25')
        2024
    """
    return int(normalize_season(season).split("-")[0])


def previous_season(season: str) -> str:
    """
    Examples:
        >>> previous_season('2024-25')
        '2023-24'
    """
    return start_year_to_season(season_start_year(season) - 1)


def season_list(latest: str, count: int) -> list[str]:
    """
    List ``count`` seasons ending at ``latest``, newest first.

    Examples:
        >>> season_list('2024-25', 3)
        ['2024-25', '2023-24', '2022-23']
    """
    start = season_start_year(latest)
    return [start_year_to_season(start - i) for i in range(count)]
