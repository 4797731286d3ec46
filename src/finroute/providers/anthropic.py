"""Anthropic (Claude) provider adapter."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import anthropic

from finroute.core.errors import (
    ModelNotFoundError,
    ProviderAuthError,
    ProviderError,
    ProviderOverloadedError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)
from finroute.providers.base import (
    ModelInfo,
    ModelResponse,
    ToolCallData,
    retry_after_seconds,
)

if TYPE_CHECKING:
    from finroute.providers.base import PromptMessage

logger = logging.getLogger(__name__)

PROVIDER_ID = "anthropic"

MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(PROVIDER_ID, "claude-opus-4-6", "Claude Opus 4.6", 200_000),
    ModelInfo(PROVIDER_ID, "claude-sonnet-4-6", "Claude Sonnet 4.6", 200_000),
    ModelInfo(PROVIDER_ID, "claude-haiku-4-5-20251001", "Claude Haiku 4.5", 200_000),
)

# first match wins; anything unlisted is treated as a transient server problem
_ERROR_TABLE: tuple[tuple[type[anthropic.APIError], type[ProviderError]], ...] = (
    (anthropic.AuthenticationError, ProviderAuthError),
    (anthropic.PermissionDeniedError, ProviderAuthError),
    (anthropic.APITimeoutError, ProviderTimeoutError),
    (anthropic.NotFoundError, ModelNotFoundError),
)


def _map_error(e: anthropic.APIError) -> ProviderError:
    """Map Anthropic SDK errors to the finroute error hierarchy."""
    if isinstance(e, anthropic.RateLimitError):
        retry_after = retry_after_seconds(getattr(e, "response", None))
        return ProviderRateLimitError(PROVIDER_ID, retry_after=retry_after)
    for sdk_error, error_cls in _ERROR_TABLE:
        if isinstance(e, sdk_error):
            return error_cls(PROVIDER_ID, str(e))
    return ProviderOverloadedError(PROVIDER_ID, str(e))


def _build_request(
    messages: list[PromptMessage], tools: list[dict[str, object]] | None
) -> dict[str, Any]:
    """Anthropic takes the system prompt as a separate field and tools as
    ``input_schema`` entries."""
    system = [m.content for m in messages if m.role == "system"]
    turns = [m for m in messages if m.role != "system"]
    request: dict[str, Any] = {
        "messages": [{"role": m.role, "content": m.content} for m in turns],
    }
    if system:
        request["system"] = "\n\n".join(system)
    if tools:
        request["tools"] = [
            {
                "name": t["name"],
                "description": t.get("description", ""),
                "input_schema": t.get("parameters") or {"type": "object"},
            }
            for t in tools
        ]
    return request


def _parse_content(blocks: list[Any]) -> tuple[str, list[ToolCallData]]:
    text: list[str] = []
    calls: list[ToolCallData] = []
    for block in blocks:
        if block.type == "tool_use":
            arguments = json.dumps(block.input)
            calls.append(ToolCallData(block.id, block.name, arguments))
        elif block.type == "text":
            text.append(block.text)
    return "".join(text), calls


class AnthropicProvider:
    """Routes with Claude's native ``tool_use`` content blocks."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self._client = client or anthropic.AsyncAnthropic(api_key=api_key)

    @property
    def provider_id(self) -> str:
        return PROVIDER_ID

    async def list_models(self) -> list[ModelInfo]:
        return list(MODELS)

    async def send(
        self,
        messages: list[PromptMessage],
        model_id: str,
        *,
        max_tokens: int = 2048,
        temperature: float = 0.0,
        tools: list[dict[str, object]] | None = None,
    ) -> ModelResponse:
        try:
            response = await self._client.messages.create(
                model=model_id,
                max_tokens=max_tokens,
                temperature=temperature,
                **_build_request(messages, tools),
            )
        except anthropic.APIError as e:
            raise _map_error(e) from e

        text, calls = _parse_content(response.content)
        logger.debug(
            "%s replied with %d tool call(s) (%d in / %d out tokens)",
            model_id,
            len(calls),
            response.usage.input_tokens,
            response.usage.output_tokens,
        )
        return ModelResponse(
            model_ref=f"{PROVIDER_ID}:{model_id}",
            text=text,
            tool_calls=calls,
            stop_reason=response.stop_reason or "stop",
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )
