"""Global runtime configuration for msprates."""

from __future__ import annotations

from dataclasses import dataclass

_config: MSPRatesConfig | None = None


@dataclass
class MSPRatesConfig:
    """Global runtime configuration for msprates."""

    cache_enabled: bool = True
    network_enabled: bool = True

    log_level: str = "INFO"

    def is_offline(self) -> bool:
        return not self.network_enabled


def get_config() -> MSPRatesConfig:
    global _config
    if _config is None:
        _config = MSPRatesConfig()
    return _config


def reset_config() -> None:
    global _config
    _config = None


def configure(
    cache_enabled: bool | None = None,
    network_enabled: bool | None = None,
    log_level: str | None = None,
) -> None:
    """
    Update the global configuration in place.

    Args:
        cache_enabled: Read and write the in-memory rates cache
        network_enabled: Allow calls to data.gov.in and Gemini
        log_level: Level used by ``configure_logging`` from the CLI

    Example:
        msprates.configure(network_enabled=False)
    """
    config = get_config()

    if cache_enabled is not None:
        config.cache_enabled = cache_enabled
    if network_enabled is not None:
        config.network_enabled = network_enabled
    if log_level is not None:
        config.log_level = log_level


__all__ = [
    "MSPRatesConfig",
    "get_config",
    "reset_config",
    "configure",
]
