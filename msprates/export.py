"""Export of MSP rates and histories to DataFrames and files."""

from __future__ import annotations

import csv
import json
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
import structlog
from pydantic import BaseModel

from msprates.models import HistoryPoint, MetaInfo, MSPRate

logger = structlog.get_logger()

RATE_COLUMNS = [
    "id",
    "crop",
    "variety",
    "category",
    "year",
    "rate",
    "increase",
    "increasePercentage",
    "source",
    "lastUpdated",
]

HISTORY_COLUMNS = ["year", "rate"]


def _records(items: Sequence[BaseModel]) -> list[dict[str, Any]]:
    return [item.model_dump(mode="json", by_alias=True) for item in items]


def rates_to_dataframe(rates: Sequence[MSPRate]) -> pd.DataFrame:
    """
    Build a DataFrame with one row per rate, columns in canonical order.

    Returns:
        DataFrame: id, crop, variety, category, year, rate, increase,
                   increasePercentage, source, lastUpdated.
    """
    if not rates:
        return pd.DataFrame(columns=RATE_COLUMNS)

    df = pd.DataFrame(_records(rates))
    return df.reindex(columns=RATE_COLUMNS)


def history_to_dataframe(points: Sequence[HistoryPoint]) -> pd.DataFrame:
    if not points:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    return pd.DataFrame(_records(points)).reindex(columns=HISTORY_COLUMNS)


def export_csv(
    rates: Sequence[MSPRate],
    path: str | Path,
    include_header: bool = True,
) -> Path:
    """
    Export rates to CSV.

    Args:
        rates: Rates to export
        path: File path
        include_header: Write the header row

    Returns:
        Path of the created file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = rates_to_dataframe(rates)
    df.to_csv(path, index=False, header=include_header, quoting=csv.QUOTE_NONNUMERIC)

    logger.info("export_csv", path=str(path), rows=len(df))
    return path


def export_json(
    rates: Sequence[MSPRate],
    path: str | Path,
    meta: MetaInfo | None = None,
) -> Path:
    """
    Export rates to JSON in the canonical shape, with provenance when given.

    Args:
        rates: Rates to export
        path: File path
        meta: Optional metadata from ``get_rates(return_meta=True)``

    Returns:
        Path of the created file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    output: dict[str, Any] = {
        "metadata": {
            "export_timestamp": datetime.now().isoformat(),
            "row_count": len(rates),
            "provenance": meta.to_dict() if meta else None,
        },
        "data": [rate.to_dict() for rate in rates],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(output, f, indent=2, ensure_ascii=False)

    logger.info("export_json", path=str(path), rows=len(rates))
    return path
