from __future__ import annotations

import json
from datetime import UTC, datetime

import pandas as pd

from msprates.export import (
    HISTORY_COLUMNS,
    RATE_COLUMNS,
    export_csv,
    export_json,
    history_to_dataframe,
    rates_to_dataframe,
)
from msprates.models import HistoryPoint, MetaInfo
from msprates.msp.fallback import fallback_rates


class TestDataFrames:
    def test_rates_columns(self):
        df = rates_to_dataframe(fallback_rates())

        assert list(df.columns) == RATE_COLUMNS
        assert len(df) == 7
        assert df.iloc[0]["crop"] == "Paddy"
        assert df.iloc[0]["increasePercentage"] == 7.0

    def test_empty_rates(self):
        df = rates_to_dataframe([])

        assert df.empty
        assert list(df.columns) == RATE_COLUMNS

    def test_history(self):
        df = history_to_dataframe([HistoryPoint(year="2024-25", rate=2183)])

        assert list(df.columns) == HISTORY_COLUMNS
        assert df.iloc[0]["rate"] == 2183

    def test_empty_history(self):
        assert list(history_to_dataframe([]).columns) == HISTORY_COLUMNS


class TestExportCsv:
    def test_writes_file(self, tmp_path):
        path = export_csv(fallback_rates(), tmp_path / "out" / "msp.csv")

        df = pd.read_csv(path)
        assert list(df.columns) == RATE_COLUMNS
        assert df["id"].tolist() == ["k1", "k2", "k3", "r1", "r2", "o1", "o2"]

    def test_without_header(self, tmp_path):
        path = export_csv(fallback_rates(), tmp_path / "msp.csv", include_header=False)
        assert path.read_text().splitlines()[0].startswith('"k1"')


class TestExportJson:
    def test_canonical_shape(self, tmp_path):
        path = export_json(fallback_rates(), tmp_path / "msp.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["metadata"]["row_count"] == 7
        assert data["metadata"]["provenance"] is None
        assert data["data"][0]["increasePercentage"] == 7.0
        assert "variety" not in data["data"][3]

    def test_with_meta(self, tmp_path):
        meta = MetaInfo(
            source="fallback",
            source_method="pipeline",
            fetched_at=datetime(2024, 10, 1, tzinfo=UTC),
            selected_source="fallback",
        )
        path = export_json(fallback_rates(), tmp_path / "msp.json", meta=meta)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["metadata"]["provenance"]["selected_source"] == "fallback"
