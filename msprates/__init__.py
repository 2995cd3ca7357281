"""msprates - Indian crop Minimum Support Prices in one line of code."""

from __future__ import annotations

__version__ = "0.1.0"

from msprates.config import configure
from msprates.constants import Category
from msprates.models import HistoryPoint, MetaInfo, MSPRate
from msprates.msp import (
    MSPService,
    clear_cache,
    get_history,
    get_rates,
    get_rates_by_category,
)

__all__ = [
    "Category",
    "HistoryPoint",
    "MSPRate",
    "MSPService",
    "MetaInfo",
    "clear_cache",
    "configure",
    "get_history",
    "get_rates",
    "get_rates_by_category",
    "__version__",
]
