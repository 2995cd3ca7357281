"""Parsing of provider text and raw API records into MSP models.

PARSER_VERSION = 1: fenced/raw JSON array extraction, candidate field
mapping for data.gov.in records, keyword-based category inference.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import structlog
from pydantic import ValidationError

from msprates.constants import DEFAULT_SEASON, SOURCE_LABEL_API
from msprates.models import FallbackReason, FetchResult, HistoryPoint, MSPRate
from msprates.normalize.crops import category_initial, classify_category, normalize_category
from msprates.normalize.seasons import is_valid_season, season_start_year

logger = structlog.get_logger()

PARSER_VERSION = 1

FENCED_JSON = re.compile(r"```json[ \t]*\r?\n(.*?)\r?\n[ \t]*```", re.DOTALL)
FENCED_ANY = re.compile(r"```[ \t]*\r?\n(.*?)\r?\n[ \t]*```", re.DOTALL)

CROP_FIELDS = ("commodity_name", "crop_name", "crop")
VARIETY_FIELDS = ("variety", "grade")
RATE_FIELDS = ("msp_price", "rate", "msp")
PREVIOUS_RATE_FIELDS = ("previous_price", "previous_rate", "previous_msp")
YEAR_FIELDS = ("year", "msp_year")


def extract_json_text(text: str) -> str:
    """Interior of the first ```json fenced block, else of the first bare fenced block, else the text itself."""
    match = FENCED_JSON.search(text) or FENCED_ANY.search(text)
    if match and match.group(1).strip():
        return match.group(1)
    return text


def coerce_json_array(text: str | None, source: str = "gemini") -> FetchResult[list[Any]]:
    """
    Extract a non-empty JSON array from free text.

    Never raises: any failure comes back as ``FetchResult.fail``.
    """
    if not text or not text.strip():
        logger.warning("coerce_empty_text", source=source)
        return FetchResult.fail(FallbackReason.EMPTY_RESPONSE, "empty text")

    body = extract_json_text(text)

    try:
        data = json.loads(body)
    except ValueError as e:
        logger.warning("coerce_json_error", source=source, error=str(e), snippet=body[:200])
        return FetchResult.fail(FallbackReason.PARSE_ERROR, str(e))

    if not isinstance(data, list):
        logger.warning("coerce_not_array", source=source, got=type(data).__name__)
        return FetchResult.fail(FallbackReason.PARSE_ERROR, f"expected array, got {type(data).__name__}")

    if not data:
        logger.warning("coerce_empty_array", source=source)
        return FetchResult.fail(FallbackReason.EMPTY_RESPONSE, "empty array")

    return FetchResult.success(data)


def _first_text(record: Mapping[str, Any], fields: Iterable[str]) -> str | None:
    for name in fields:
        value = record.get(name)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return None


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def _first_number(record: Mapping[str, Any], fields: Iterable[str]) -> float | None:
    for name in fields:
        number = _to_float(record.get(name))
        if number is not None:
            return number
    return None


def _timestamp(now: datetime | None) -> str:
    return (now or datetime.now().astimezone()).isoformat()


def normalize_records(
    records: Iterable[Mapping[str, Any]],
    now: datetime | None = None,
) -> list[MSPRate]:
    """
    Map raw records with inconsistent field names onto ``MSPRate``.

    Order is preserved; no dedup and no sorting. Records without a crop
    name are skipped.

    Args:
        records: Raw dicts, e.g. data.gov.in ``records``.
        now: Timestamp stamped as ``lastUpdated`` (default: now).

    Returns:
        List of MSPRate with ``source="API data"``.
    """
    stamp = _timestamp(now)
    rates: list[MSPRate] = []

    for index, record in enumerate(records):
        crop = _first_text(record, CROP_FIELDS) or ""
        category = classify_category(crop)
        variety = _first_text(record, VARIETY_FIELDS)

        rate = _first_number(record, RATE_FIELDS)
        rate = rate if rate is not None else 0.0

        increase: float | None = None
        increase_percentage: float | None = None
        previous = _first_number(record, PREVIOUS_RATE_FIELDS)
        if previous is not None and previous > 0:
            increase = rate - previous
            increase_percentage = round((rate - previous) / previous * 100, 1)

        record_id = _first_text(record, ("id",)) or f"{category_initial(category)}{index + 1}"

        year = _first_text(record, YEAR_FIELDS) or DEFAULT_SEASON
        if not is_valid_season(year):
            logger.debug("normalize_record_default_year", index=index, year=year)
            year = DEFAULT_SEASON

        try:
            rates.append(
                MSPRate(
                    id=record_id,
                    crop=crop,
                    variety=variety,
                    category=category,
                    year=year,
                    rate=rate,
                    increase=increase,
                    increase_percentage=increase_percentage,
                    source=SOURCE_LABEL_API,
                    last_updated=stamp,
                )
            )
        except ValidationError as e:
            logger.warning("normalize_record_skipped", index=index, errors=e.error_count())

    logger.info("normalize_records_ok", records=len(rates), parser_version=PARSER_VERSION)
    return rates


def parse_rates(
    items: Iterable[Any],
    source: str,
    now: datetime | None = None,
) -> FetchResult[list[MSPRate]]:
    """
    Validate provider items as ``MSPRate`` stamped with ``source``.

    Items missing ``id`` or ``category`` get them inferred from the crop
    name and position. Invalid items are dropped; if none survive the
    result is a ``validation_error``.
    """
    stamp = _timestamp(now)
    rates: list[MSPRate] = []

    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            logger.warning("parse_rate_not_object", index=index)
            continue

        data = dict(item)
        crop = str(data.get("crop") or "")
        if not data.get("category"):
            data["category"] = classify_category(crop)
        if data.get("id") in (None, ""):
            data["id"] = f"{category_initial(normalize_category(data['category']))}{index + 1}"

        try:
            rate = MSPRate.model_validate(data)
        except ValidationError as e:
            logger.warning("parse_rate_invalid", index=index, errors=e.error_count())
            continue

        rates.append(rate.with_provenance(source, stamp))

    if not rates:
        return FetchResult.fail(FallbackReason.VALIDATION_ERROR, "no valid rate records")

    return FetchResult.success(rates)


def parse_history(items: Iterable[Any]) -> FetchResult[list[HistoryPoint]]:
    """Validate provider items as ``HistoryPoint`` sorted newest season first."""
    points: list[HistoryPoint] = []

    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            logger.warning("parse_history_not_object", index=index)
            continue
        try:
            points.append(HistoryPoint.model_validate(item))
        except ValidationError as e:
            logger.warning("parse_history_invalid", index=index, errors=e.error_count())

    if not points:
        return FetchResult.fail(FallbackReason.VALIDATION_ERROR, "no valid history points")

    points.sort(key=lambda p: season_start_year(p.year), reverse=True)
    return FetchResult.success(points)
