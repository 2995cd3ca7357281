"""Typed exceptions for msprates."""

from __future__ import annotations


class MSPRatesError(Exception):
    """Base for every msprates exception."""

    pass


class ProviderError(MSPRatesError):
    """Generative text provider failed (network, auth, quota, empty answer)."""

    def __init__(self, provider: str, reason: str) -> None:
        self.provider = provider
        self.reason = reason
        super().__init__(f"Provider error ({provider}): {reason}")


class SourceUnavailableError(MSPRatesError):
    """Data source unavailable after every attempt."""

    def __init__(
        self,
        source: str,
        url: str | None = None,
        last_error: str | None = None,
    ) -> None:
        self.source = source
        self.url = url or ""
        self.last_error = last_error or ""
        super().__init__(f"{source} unavailable: {last_error}")


class ParseError(MSPRatesError):
    """Response text could not be turned into records."""

    def __init__(self, source: str, reason: str, snippet: str = "") -> None:
        self.source = source
        self.reason = reason
        self.snippet = snippet[:500]
        super().__init__(f"Parse failed ({source}): {reason}")


class CacheError(MSPRatesError):
    """Cache operation error."""

    pass
