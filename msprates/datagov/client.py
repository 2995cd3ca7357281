"""HTTP client for the data.gov.in open data API.

API: https://api.data.gov.in/resource/{resource_id}?api-key=...&format=json
Requires an API key (``MSPRATES_DATAGOV_API_KEY``).

One request per call; a failed request is not retried.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from msprates import __version__
from msprates.constants import URLS, DataGovSettings, HTTPSettings, Source
from msprates.exceptions import SourceUnavailableError

logger = structlog.get_logger()

BASE_URL = URLS[Source.DATAGOV]["resource"]

_settings = HTTPSettings()

TIMEOUT = httpx.Timeout(
    connect=_settings.timeout_connect,
    read=_settings.timeout_read,
    write=_settings.timeout_write,
    pool=_settings.timeout_pool,
)

HEADERS = {
    "User-Agent": f"msprates/{__version__}",
    "Accept": "application/json",
}


async def _fetch_json(url: str, params: dict[str, Any]) -> dict[str, Any]:
    """Fetch JSON from data.gov.in with a single request.

    Raises:
        SourceUnavailableError: On a non-2xx status or any transport error.
    """
    try:
        async with httpx.AsyncClient(
            timeout=TIMEOUT, headers=HEADERS, follow_redirects=True
        ) as client:
            logger.debug("datagov_request", url=url)
            response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()

    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("datagov_http_status", status=status)
        raise SourceUnavailableError(
            source=Source.DATAGOV, url=url, last_error=f"HTTP {status}"
        ) from e

    except httpx.TimeoutException as e:
        logger.warning("datagov_timeout", error=str(e))
        raise SourceUnavailableError(
            source=Source.DATAGOV, url=url, last_error=f"Timeout: {e}"
        ) from e

    except httpx.HTTPError as e:
        logger.warning("datagov_http_error", error=str(e))
        raise SourceUnavailableError(source=Source.DATAGOV, url=url, last_error=str(e)) from e

    return data if isinstance(data, dict) else {}


async def fetch_msp_records(settings: DataGovSettings | None = None) -> list[dict[str, Any]]:
    """Fetch the raw MSP records of the configured data.gov.in resource.

    Returns:
        List of raw record dicts (field names vary between resources).

    Raises:
        SourceUnavailableError: If no API key is configured or the API fails.
    """
    settings = settings or DataGovSettings()
    url = f"{BASE_URL}/{settings.resource_id}"

    if not settings.api_key:
        raise SourceUnavailableError(source=Source.DATAGOV, url=url, last_error="no API key")

    params = {"api-key": settings.api_key, "format": "json", "limit": settings.limit}
    logger.info("datagov_fetch_msp", resource_id=settings.resource_id, limit=settings.limit)

    data = await _fetch_json(url, params)
    records = data.get("records") or []
    return [r for r in records if isinstance(r, dict)]
