from datetime import date

import pytest

from msprates.normalize.seasons import (
    current_season,
    is_valid_season,
    normalize_season,
    previous_season,
    season_list,
    season_start_year,
    start_year_to_season,
)


class TestCurrentSeason:
    def test_second_half_of_year(self):
        assert current_season(date(2024, 10, 15)) == "2024-25"

    def test_first_half_of_year(self):
        assert current_season(date(2025, 3, 15)) == "2024-25"

    def test_july_starts_new_season(self):
        assert current_season(date(2025, 7, 1)) == "2025-26"

    def test_default_today(self):
        assert is_valid_season(current_season())


class TestNormalizeSeason:
    @pytest.mark.parametrize(
        "value", ["2024-25", "2024/25", "2024-2025", "2024/2025", "2024", " 2024-25 "]
    )
    def test_accepted_formats(self, value):
        assert normalize_season(value) == "2024-25"

    @pytest.mark.parametrize("value", ["24-25", "2024-5", "current", ""])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid season"):
            normalize_season(value)
        assert is_valid_season(value) is False

    def test_century_rollover(self):
        assert start_year_to_season(1999) == "1999-00"


class TestSeasonArithmetic:
    def test_start_year(self):
        assert season_start_year("2024-25") == 2024

    def test_previous(self):
        assert previous_season("2024-25") == "2023-24"

    def test_list(self):
        assert season_list("2024-25", 3) == ["2024-25", "2023-24", "2022-23"]
