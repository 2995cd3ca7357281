"""Built-in MSP table, served when every live source fails.

Rates for the 2024-25 season in INR per quintal, from the CACP
announcements. Sugarcane carries the FRP (Fair and Remunerative Price).
"""

from __future__ import annotations

from msprates.constants import Category
from msprates.models import MSPRate

FALLBACK_RATES: tuple[MSPRate, ...] = (
    # Kharif
    MSPRate(
        id="k1",
        crop="Paddy",
        variety="Common",
        category=Category.KHARIF,
        year="2024-25",
        rate=2183,
        increase=143,
        increase_percentage=7.0,
    ),
    MSPRate(
        id="k2",
        crop="Paddy",
        variety="Grade A",
        category=Category.KHARIF,
        year="2024-25",
        rate=2203,
        increase=143,
        increase_percentage=6.9,
    ),
    MSPRate(
        id="k3",
        crop="Jowar",
        variety="Hybrid",
        category=Category.KHARIF,
        year="2024-25",
        rate=2970,
        increase=115,
        increase_percentage=4.0,
    ),
    # Rabi
    MSPRate(
        id="r1",
        crop="Wheat",
        category=Category.RABI,
        year="2024-25",
        rate=2275,
        increase=150,
        increase_percentage=7.1,
    ),
    MSPRate(
        id="r2",
        crop="Barley",
        category=Category.RABI,
        year="2024-25",
        rate=1850,
        increase=115,
        increase_percentage=6.6,
    ),
    # Commercial
    MSPRate(
        id="o1",
        crop="Sugarcane",
        category=Category.OTHER,
        year="2024-25",
        rate=315,
        increase=10,
        increase_percentage=3.3,
    ),
    MSPRate(
        id="o2",
        crop="Jute",
        category=Category.OTHER,
        year="2024-25",
        rate=5050,
        increase=300,
        increase_percentage=6.3,
    ),
)


def fallback_rates() -> list[MSPRate]:
    """Fresh list over the immutable table."""
    return list(FALLBACK_RATES)
