"""Pydantic models for finroute configuration."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class ProviderConfig(BaseModel):
    """Configuration for a single LLM provider."""

    enabled: bool = True
    api_key: str | None = None
    api_key_env: str | None = None
    base_url: str | None = None


class RouterConfig(BaseModel):
    """Settings for the routing decision call."""

    model_ref: str = "anthropic:claude-sonnet-4-6"
    max_tokens: int = 2048
    temperature: float = 0.0


class ApiConfig(BaseModel):
    """Upstream financial data API settings."""

    base_url: str = "https://financialmodelingprep.com/stable"
    api_key: str | None = None
    api_key_env: str | None = "FMP_API_KEY"
    timeout: float = 30.0


class SearchConfig(BaseModel):
    """Result merging behaviour."""

    collision_policy: Literal["accumulate", "overwrite"] = "accumulate"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class FinrouteConfig(BaseModel):
    """Top-level configuration for finroute."""

    providers: dict[str, ProviderConfig] = Field(
        default_factory=lambda: {
            "anthropic": ProviderConfig(api_key_env="ANTHROPIC_API_KEY"),
            "openai": ProviderConfig(api_key_env="OPENAI_API_KEY"),
        }
    )
    router: RouterConfig = Field(default_factory=RouterConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
