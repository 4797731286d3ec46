"""Exception hierarchy for finroute.

Every module imports from here. The hierarchy is:

    FinrouteError
    ├── ProviderError(provider_id)
    │   ├── ProviderAuthError
    │   ├── ProviderRateLimitError(retry_after)
    │   ├── ProviderTimeoutError
    │   ├── ProviderOverloadedError
    │   └── ModelNotFoundError
    ├── DecisionServiceError
    ├── ToolError
    │   ├── UnknownToolError(name)
    │   ├── SchemaViolationError(tool, details)
    │   └── MalformedToolOutputError(tool)
    ├── UpstreamApiError(status_code, url)
    └── ConfigError
"""

from __future__ import annotations


class FinrouteError(Exception):
    """Base exception for all finroute errors."""


# ─── Provider Errors ──────────────────────────────────────────


class ProviderError(FinrouteError):
    """Base for provider-related errors."""

    def __init__(self, provider_id: str, message: str) -> None:
        self.provider_id = provider_id
        super().__init__(f"[{provider_id}] {message}")


class ProviderAuthError(ProviderError):
    """Invalid or missing API key."""


class ProviderRateLimitError(ProviderError):
    """Rate limit exceeded. Includes retry_after if available."""

    def __init__(self, provider_id: str, retry_after: float | None = None) -> None:
        self.retry_after = retry_after
        msg = "Rate limited"
        if retry_after is not None:
            msg += f" (retry after {retry_after}s)"
        super().__init__(provider_id, msg)


class ProviderTimeoutError(ProviderError):
    """Model call timed out."""


class ProviderOverloadedError(ProviderError):
    """Provider is overloaded (529, 503)."""


class ModelNotFoundError(ProviderError):
    """Requested model not available from this provider."""


# ─── Routing Errors ───────────────────────────────────────────


class DecisionServiceError(FinrouteError):
    """The routing decision itself failed. Fatal for the request."""


# ─── Tool Errors ──────────────────────────────────────────────


class ToolError(FinrouteError):
    """Base for errors raised while resolving or invoking a tool."""


class UnknownToolError(ToolError):
    """A tool call names a tool that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' not found")


class SchemaViolationError(ToolError):
    """Tool input failed validation. No upstream call was made."""

    def __init__(self, tool: str, details: str) -> None:
        self.tool = tool
        self.details = details
        super().__init__(f"Invalid input for '{tool}': {details}")


class MalformedToolOutputError(ToolError):
    """A tool returned something that is not a JSON envelope."""

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        super().__init__(f"Malformed output from '{tool}': {message}")


# ─── Upstream API Errors ──────────────────────────────────────


class UpstreamApiError(FinrouteError):
    """The financial data API returned an error or was unreachable.

    ``status_code`` is ``None`` for transport-level failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.url = url
        prefix = f"HTTP {status_code}: " if status_code is not None else ""
        super().__init__(f"{prefix}{message}")


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(FinrouteError):
    """Invalid configuration."""
