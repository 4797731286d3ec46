"""Configuration loading and validation."""

from finroute.config.loader import load_config
from finroute.config.schema import (
    ApiConfig,
    FinrouteConfig,
    LoggingConfig,
    ProviderConfig,
    RouterConfig,
    SearchConfig,
)

__all__ = [
    "ApiConfig",
    "FinrouteConfig",
    "LoggingConfig",
    "ProviderConfig",
    "RouterConfig",
    "SearchConfig",
    "load_config",
]
