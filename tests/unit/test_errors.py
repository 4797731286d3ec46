"""Tests for the core error hierarchy."""

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


class TestHierarchy:
    """All errors inherit from FinrouteError."""

    def test_provider_subclasses_are_provider_error(self):
        subclasses = [
            ProviderAuthError("openai", "bad key"),
            ProviderRateLimitError("anthropic"),
            ProviderTimeoutError("openai", "timed out"),
            ProviderOverloadedError("openai", "overloaded"),
            ModelNotFoundError("anthropic", "no such model"),
        ]
        for err in subclasses:
            assert isinstance(err, ProviderError)
            assert isinstance(err, FinrouteError)

    def test_tool_errors(self):
        for err in [
            UnknownToolError("get_magic"),
            SchemaViolationError("get_prices", "ticker: Field required"),
            MalformedToolOutputError("get_prices", "not json"),
        ]:
            assert isinstance(err, ToolError)
            assert isinstance(err, FinrouteError)

    def test_top_level_errors(self):
        assert isinstance(DecisionServiceError("boom"), FinrouteError)
        assert isinstance(UpstreamApiError("boom"), FinrouteError)
        assert isinstance(ConfigError("bad"), FinrouteError)


class TestMessages:
    def test_provider_error_prefix(self):
        err = ProviderError("anthropic", "something broke")
        assert str(err) == "[anthropic] something broke"
        assert err.provider_id == "anthropic"

    def test_rate_limit_retry_after(self):
        err = ProviderRateLimitError("openai", retry_after=2.5)
        assert err.retry_after == 2.5
        assert "retry after 2.5s" in str(err)

    def test_unknown_tool(self):
        err = UnknownToolError("get_magic")
        assert err.name == "get_magic"
        assert str(err) == "Tool 'get_magic' not found"

    def test_schema_violation(self):
        err = SchemaViolationError("get_prices", "ticker: Field required")
        assert err.tool == "get_prices"
        assert "ticker: Field required" in str(err)

    def test_upstream_with_status(self):
        err = UpstreamApiError(
            "Invalid API KEY", status_code=401, url="https://x/quote"
        )
        assert err.status_code == 401
        assert err.url == "https://x/quote"
        assert str(err) == "HTTP 401: Invalid API KEY"

    def test_upstream_transport_failure(self):
        err = UpstreamApiError("connection refused")
        assert err.status_code is None
        assert str(err) == "connection refused"
