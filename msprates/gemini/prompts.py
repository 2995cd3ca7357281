"""Prompts sent to the generative text provider."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

RATE_SHAPE = """[
  {
    "id": "k1",
    "crop": "Crop Name",
    "variety": "Variety Name",
    "category": "kharif",
    "year": "2024-25",
    "rate": 2183,
    "increase": 143,
    "increasePercentage": 7.0
  },
  ...
]"""

RATE_INTERFACE = """{
  "id": string,                 // unique id like "k1", "r2", "o1" (k = kharif, r = rabi, o = other)
  "crop": string,               // crop name
  "variety": string | null,     // variety or grade, if any
  "category": "kharif" | "rabi" | "other",
  "year": string,               // crop season, format "2024-25"
  "rate": number,               // MSP in INR per quintal
  "increase": number | null,    // increase over the previous season
  "increasePercentage": number | null
}"""

RAW_SNIPPET_CHARS = 1000


def rates_prompt(today: date | None = None) -> str:
    today = today or date.today()
    return f"""Today is {today.strftime("%a %b %d %Y")}. Please fetch the latest Minimum Support Price (MSP) data for major crops in India for the current year from reliable government sources.

Format the data in the following JSON structure:
{RATE_SHAPE}

Include all major kharif, rabi and commercial crops with their current MSPs.
Ensure you return properly structured JSON data that can be parsed directly.
Return the data as a valid JSON array without any markdown code blocks or other formatting."""


def history_prompt(crop: str, variety: str | None, year: str, rate: float) -> str:
    label = f"{crop} ({variety})" if variety else crop
    return f"""Please provide the historical MSP (Minimum Support Price) data for {label} in India for the last 5 years.

The current MSP for {year} is ₹{rate:g} per quintal.

Return the data as a JSON array with this structure:
[
  {{ "year": "2024-25", "rate": 2183 }},
  {{ "year": "2023-24", "rate": 2040 }},
  ...
]

Ensure the data is accurate based on official government records. If exact data isn't available for certain years, provide realistic estimates based on known increase patterns.
Return only the JSON array without any explanation."""


def structuring_prompt(raw_records: list[dict[str, Any]]) -> str:
    """Ask the provider to turn raw data.gov.in records into the canonical shape."""
    snippet = json.dumps(raw_records, ensure_ascii=False, default=str)[:RAW_SNIPPET_CHARS]
    return f"""I have raw MSP (Minimum Support Price) data for crops in India that I need to process into a structured format.
The data looks like this: {snippet}...

Please convert this data into a list of objects matching this shape:
{RATE_INTERFACE}

Categorize crops properly into kharif, rabi, and other categories based on crop types.
Only include entries where you have high confidence about the data.
Return the result as a JSON array without any explanation."""
