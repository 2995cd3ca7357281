"""MSP: Minimum Support Prices of Indian crops.

Current rates per crop and variety (INR per quintal), category filter
(kharif, rabi, other) and a five-season history per crop.
"""

from msprates.msp.api import (
    MSPService,
    clear_cache,
    extrapolate_history,
    get_default_service,
    get_history,
    get_rates,
    get_rates_by_category,
    reset_default_service,
    set_default_service,
)
from msprates.msp.fallback import FALLBACK_RATES, fallback_rates

__all__ = [
    "FALLBACK_RATES",
    "MSPService",
    "clear_cache",
    "extrapolate_history",
    "fallback_rates",
    "get_default_service",
    "get_history",
    "get_rates",
    "get_rates_by_category",
    "reset_default_service",
    "set_default_service",
]
