"""Public API of the MSP module: current rates, category filter and history.

Sources, tried in order on every cache miss:
1. data.gov.in (only when ``MSPRATES_DATAGOV_API_KEY`` is set)
2. Gemini (only when ``MSPRATES_GEMINI_API_KEY`` is set)
3. Built-in table (``msp.fallback``), never cached

No operation raises: failures are logged and fall through to the next source.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, Literal, overload

import httpx
import structlog

from msprates.cache.memory import TimeBoundedCache
from msprates.config import get_config
from msprates.constants import (
    SOURCE_LABEL_GENERATED,
    SOURCE_LABEL_PROCESSED,
    Category,
    DataGovSettings,
    Source,
)
from msprates.datagov import client as datagov_client
from msprates.exceptions import MSPRatesError, ProviderError
from msprates.gemini import prompts
from msprates.gemini.client import TextProvider, build_default_provider
from msprates.models import FallbackReason, FetchResult, HistoryPoint, MetaInfo, MSPRate

from . import parser
from .fallback import fallback_rates

logger = structlog.get_logger()

RawFetch = Callable[[], Awaitable[list[dict[str, Any]]]]

HISTORY_MULTIPLIERS: tuple[float, ...] = (0, 1, 1.8, 2.5, 3.2)
HISTORY_PAST_SEASONS: tuple[str, ...] = ("2023-24", "2022-23", "2021-22", "2020-21")
HISTORY_DEFAULT_INCREASE_RATIO = 0.05


def extrapolate_history(crop: MSPRate) -> list[HistoryPoint]:
    """
    Synthesize a 5-season history backwards from the current rate.

    Uses the known year-over-year increase (or 5% of the rate when unknown)
    scaled by fixed multipliers. An estimate, not government data.
    """
    delta = crop.increase or crop.rate * HISTORY_DEFAULT_INCREASE_RATIO
    seasons = (crop.year, *HISTORY_PAST_SEASONS)
    return [
        HistoryPoint(year=season, rate=round(crop.rate - delta * multiplier, 2))
        for season, multiplier in zip(seasons, HISTORY_MULTIPLIERS, strict=True)
    ]


def _default_datagov_fetch() -> RawFetch | None:
    settings = DataGovSettings()
    if not settings.api_key:
        return None

    async def fetch() -> list[dict[str, Any]]:
        return await datagov_client.fetch_msp_records(settings)

    return fetch


class MSPService:
    """
    Tiered MSP acquisition: cache, data.gov.in, Gemini, built-in table.

    Args:
        cache: Cache holding the last live result (default: one-hour cache).
        provider: Generative text provider; None means no credential.
        datagov_fetch: Coroutine function returning raw data.gov.in records;
            None disables the source.
        fallback: Callable returning the last-resort table.
    """

    def __init__(
        self,
        cache: TimeBoundedCache | None = None,
        provider: TextProvider | None = None,
        datagov_fetch: RawFetch | None = None,
        fallback: Callable[[], list[MSPRate]] = fallback_rates,
    ) -> None:
        self.cache = cache if cache is not None else TimeBoundedCache()
        self.provider = provider
        self.datagov_fetch = datagov_fetch
        self.fallback = fallback

    @classmethod
    def from_settings(cls) -> MSPService:
        return cls(provider=build_default_provider(), datagov_fetch=_default_datagov_fetch())

    async def _generate(self, prompt: str) -> FetchResult[str]:
        if self.provider is None:
            return FetchResult.fail(FallbackReason.NO_CREDENTIAL, "no provider configured")

        try:
            return FetchResult.success(await self.provider.generate(prompt))
        except ProviderError as e:
            logger.warning("msp_provider_error", provider=e.provider, error=e.reason)
            return FetchResult.fail(FallbackReason.PROVIDER_ERROR, e.reason)
        except Exception as e:
            logger.warning(
                "msp_provider_unexpected_error",
                provider=getattr(self.provider, "name", "unknown"),
                error=str(e),
            )
            return FetchResult.fail(FallbackReason.PROVIDER_ERROR, str(e))

    async def _structure_with_provider(
        self, records: list[dict[str, Any]]
    ) -> FetchResult[list[MSPRate]]:
        generated = await self._generate(prompts.structuring_prompt(records))
        if not generated.ok:
            return FetchResult.fail(generated.reason, generated.detail)

        coerced = parser.coerce_json_array(generated.value, source="gemini_structuring")
        if not coerced.ok:
            return FetchResult.fail(coerced.reason, coerced.detail)

        return parser.parse_rates(coerced.unwrap(), SOURCE_LABEL_PROCESSED)

    async def _from_datagov(self) -> FetchResult[list[MSPRate]]:
        if self.datagov_fetch is None:
            return FetchResult.fail(FallbackReason.NO_CREDENTIAL, "datagov not configured")

        try:
            records = await self.datagov_fetch()
        except (MSPRatesError, httpx.HTTPError, OSError) as e:
            logger.warning("msp_datagov_error", error_type=type(e).__name__, error=str(e))
            return FetchResult.fail(FallbackReason.SOURCE_UNAVAILABLE, str(e))
        except Exception as e:
            logger.warning("msp_datagov_unexpected_error", error=str(e))
            return FetchResult.fail(FallbackReason.SOURCE_UNAVAILABLE, str(e))

        if not records:
            logger.warning("msp_datagov_empty")
            return FetchResult.fail(FallbackReason.EMPTY_RESPONSE, "no records")

        if self.provider is not None:
            structured = await self._structure_with_provider(records)
            if structured.ok:
                logger.info("msp_datagov_structured", records=len(structured.unwrap()))
                return structured
            logger.info("msp_datagov_structuring_failed", reason=structured.reason)

        rates = parser.normalize_records(records)
        if not rates:
            return FetchResult.fail(FallbackReason.VALIDATION_ERROR, "no usable records")
        return FetchResult.success(rates)

    async def _from_provider(self) -> FetchResult[list[MSPRate]]:
        generated = await self._generate(prompts.rates_prompt())
        if not generated.ok:
            return FetchResult.fail(generated.reason, generated.detail)

        coerced = parser.coerce_json_array(generated.value, source="gemini")
        if not coerced.ok:
            return FetchResult.fail(coerced.reason, coerced.detail)

        return parser.parse_rates(coerced.unwrap(), SOURCE_LABEL_GENERATED)

    @overload
    async def get_rates(self, *, return_meta: Literal[False] = False) -> list[MSPRate]: ...

    @overload
    async def get_rates(self, *, return_meta: Literal[True]) -> tuple[list[MSPRate], MetaInfo]: ...

    async def get_rates(
        self, *, return_meta: bool = False
    ) -> list[MSPRate] | tuple[list[MSPRate], MetaInfo]:
        """
        Current MSP rates for all crops.

        Args:
            return_meta: If True, return a tuple (rates, MetaInfo).

        Returns:
            List of MSPRate. Never empty: the built-in table is the last resort.

        Example:
            >>> rates = await service.get_rates()
            >>> rates[0].crop
            'Paddy'
        """
        config = get_config()
        t0 = time.monotonic()
        attempted: list[str] = []
        reasons: list[str] = []

        def finish(
            rates: list[MSPRate], source: Source, from_cache: bool = False
        ) -> list[MSPRate] | tuple[list[MSPRate], MetaInfo]:
            if not return_meta:
                return rates
            meta = MetaInfo(
                source=source.value,
                source_method="memory" if from_cache else "pipeline",
                fetched_at=datetime.now(UTC),
                from_cache=from_cache,
                fetch_duration_ms=int((time.monotonic() - t0) * 1000),
                records_count=len(rates),
                attempted_sources=attempted,
                selected_source=source.value,
                fallback_reasons=reasons,
            )
            return rates, meta

        if config.cache_enabled:
            cached = self.cache.read()
            if cached is not None:
                logger.info("msp_cache_hit", records=len(cached))
                return finish(cached, Source.CACHE, from_cache=True)

        if not config.network_enabled:
            reasons.append(f"network:{FallbackReason.NETWORK_DISABLED}")
        else:
            logger.info("msp_fetch_live")
            tiers: tuple[tuple[Source, Callable[[], Awaitable[FetchResult[list[MSPRate]]]]], ...] = (
                (Source.DATAGOV, self._from_datagov),
                (Source.GEMINI, self._from_provider),
            )
            for source, tier in tiers:
                result = await tier()

                if result.reason != FallbackReason.NO_CREDENTIAL:
                    attempted.append(source.value)

                if result.ok:
                    rates = result.unwrap()
                    logger.info("msp_source_success", source=source.value, records=len(rates))
                    if config.cache_enabled:
                        self.cache.write(rates)
                    return finish(rates, source)

                reasons.append(f"{source.value}:{result.reason}")
                logger.debug(
                    "msp_source_skipped",
                    source=source.value,
                    reason=result.reason,
                    detail=result.detail,
                )

        logger.warning("msp_fallback_table", reasons=reasons)
        attempted.append(Source.FALLBACK.value)
        return finish(self.fallback(), Source.FALLBACK)

    async def get_rates_by_category(self, category: Category | str) -> list[MSPRate]:
        """Rates of one category (kharif, rabi, other), in source order."""
        try:
            wanted = Category(str(category).strip().lower())
        except ValueError:
            logger.warning("msp_unknown_category", category=category)
            return []

        rates = await self.get_rates()
        return [rate for rate in rates if rate.category == wanted]

    async def get_history(self, crop_id: str) -> list[HistoryPoint]:
        """
        Five-season MSP history of one crop, newest first.

        Asks the provider for the series anchored on the current rate and
        falls back to ``extrapolate_history``. Unknown ids return [].
        """
        rates = await self.get_rates()
        crop = next((rate for rate in rates if rate.id == crop_id), None)
        if crop is None:
            logger.info("msp_history_unknown_crop", crop_id=crop_id)
            return []

        if get_config().network_enabled:
            generated = await self._generate(
                prompts.history_prompt(crop.crop, crop.variety, crop.year, crop.rate)
            )
            if generated.ok:
                coerced = parser.coerce_json_array(generated.value, source="gemini_history")
                if coerced.ok:
                    history = parser.parse_history(coerced.unwrap())
                    if history.ok:
                        logger.info("msp_history_success", crop_id=crop_id, points=len(history.unwrap()))
                        return history.unwrap()

        logger.info("msp_history_extrapolated", crop_id=crop_id)
        return extrapolate_history(crop)

    def clear_cache(self) -> None:
        self.cache.clear()


_default_service: MSPService | None = None


def get_default_service() -> MSPService:
    global _default_service
    if _default_service is None:
        _default_service = MSPService.from_settings()
    return _default_service


def set_default_service(service: MSPService) -> None:
    global _default_service
    _default_service = service


def reset_default_service() -> None:
    global _default_service
    _default_service = None


@overload
async def get_rates(*, return_meta: Literal[False] = False) -> list[MSPRate]: ...


@overload
async def get_rates(*, return_meta: Literal[True]) -> tuple[list[MSPRate], MetaInfo]: ...


async def get_rates(
    *, return_meta: bool = False
) -> list[MSPRate] | tuple[list[MSPRate], MetaInfo]:
    """Current MSP rates for all crops. See ``MSPService.get_rates``."""
    return await get_default_service().get_rates(return_meta=return_meta)


async def get_rates_by_category(category: Category | str) -> list[MSPRate]:
    """Rates of one category, e.g. ``await get_rates_by_category("rabi")``."""
    return await get_default_service().get_rates_by_category(category)


async def get_history(crop_id: str) -> list[HistoryPoint]:
    """Five-season history of one crop, e.g. ``await get_history("k1")``."""
    return await get_default_service().get_history(crop_id)


def clear_cache() -> None:
    """Drop cached rates so the next call retries the live sources."""
    get_default_service().clear_cache()
