"""Core errors and shared utilities."""

from finroute.core.errors import (
    ConfigError,
    DecisionServiceError,
    FinrouteError,
    MalformedToolOutputError,
    ModelNotFoundError,
    ProviderAuthError,
    ProviderError,
    ProviderOverloadedError,
    ProviderRateLimitError,
    ProviderTimeoutError,
    SchemaViolationError,
    ToolError,
    UnknownToolError,
    UpstreamApiError,
)
from finroute.core.logging import configure_logging

__all__ = [
    "ConfigError",
    "DecisionServiceError",
    "FinrouteError",
    "MalformedToolOutputError",
    "ModelNotFoundError",
    "ProviderAuthError",
    "ProviderError",
    "ProviderOverloadedError",
    "ProviderRateLimitError",
    "ProviderTimeoutError",
    "SchemaViolationError",
    "ToolError",
    "UnknownToolError",
    "UpstreamApiError",
    "configure_logging",
]
