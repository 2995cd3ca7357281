from __future__ import annotations

from msprates.constants import Category

KHARIF_KEYWORDS: tuple[str, ...] = (
    "paddy",
    "jowar",
    "bajra",
    "maize",
    "ragi",
    "arhar",
    "moong",
    "urad",
    "cotton",
    "groundnut",
    "soybean",
)

RABI_KEYWORDS: tuple[str, ...] = (
    "wheat",
    "barley",
    "gram",
    "masur",
    "mustard",
    "safflower",
    "lentil",
)

CATEGORY_INITIALS: dict[Category, str] = {
    Category.KHARIF: "k",
    Category.RABI: "r",
    Category.OTHER: "o",
}


def classify_category(crop: str) -> Category:
    """Kharif keywords are checked before rabi ones; no match is ``other``."""
    crop_lower = crop.lower()

    if any(keyword in crop_lower for keyword in KHARIF_KEYWORDS):
        return Category.KHARIF
    if any(keyword in crop_lower for keyword in RABI_KEYWORDS):
        return Category.RABI

    return Category.OTHER


def normalize_category(value: str | Category | None) -> Category:
    if isinstance(value, Category):
        return value
    if not value:
        return Category.OTHER
    try:
        return Category(str(value).strip().lower())
    except ValueError:
        return Category.OTHER


def category_initial(category: Category) -> str:
    return CATEGORY_INITIALS[category]


__all__ = [
    "CATEGORY_INITIALS",
    "KHARIF_KEYWORDS",
    "RABI_KEYWORDS",
    "category_initial",
    "classify_category",
    "normalize_category",
]
