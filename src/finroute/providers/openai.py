"""OpenAI provider adapter (also serves OpenAI-compatible endpoints)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import openai

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

PROVIDER_ID = "openai"

MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(PROVIDER_ID, "gpt-5.2", "GPT-5.2", 400_000),
    ModelInfo(PROVIDER_ID, "gpt-5-mini", "GPT-5 mini", 400_000),
    ModelInfo(PROVIDER_ID, "gpt-4.1", "GPT-4.1", 1_047_576),
)

_ERROR_TABLE: tuple[tuple[type[openai.APIError], type[ProviderError]], ...] = (
    (openai.AuthenticationError, ProviderAuthError),
    (openai.PermissionDeniedError, ProviderAuthError),
    (openai.APITimeoutError, ProviderTimeoutError),
    (openai.NotFoundError, ModelNotFoundError),
)


def _map_error(e: openai.APIError) -> ProviderError:
    """Map OpenAI SDK errors to the finroute error hierarchy."""
    if isinstance(e, openai.RateLimitError):
        retry_after = retry_after_seconds(getattr(e, "response", None))
        return ProviderRateLimitError(PROVIDER_ID, retry_after=retry_after)
    for sdk_error, error_cls in _ERROR_TABLE:
        if isinstance(e, sdk_error):
            return error_cls(PROVIDER_ID, str(e))
    return ProviderOverloadedError(PROVIDER_ID, str(e))


def _build_request(
    messages: list[PromptMessage], tools: list[dict[str, object]] | None
) -> dict[str, Any]:
    request: dict[str, Any] = {
        "messages": [{"role": m.role, "content": m.content} for m in messages],
    }
    if tools:
        request["tools"] = [
            {
                "type": "function",
                "function": {
                    "name": t["name"],
                    "description": t.get("description", ""),
                    "parameters": t.get("parameters") or {"type": "object"},
                },
            }
            for t in tools
        ]
    return request


def _parse_choice(response: Any) -> tuple[str, list[ToolCallData], str]:
    """Text, tool calls and finish reason of the first choice."""
    if not response.choices:
        return "", [], "stop"
    choice = response.choices[0]
    calls = [
        ToolCallData(id=tc.id, name=tc.function.name, arguments=tc.function.arguments)
        for tc in choice.message.tool_calls or []
    ]
    return choice.message.content or "", calls, choice.finish_reason or "stop"


class OpenAIProvider:
    """Routes with OpenAI chat-completions function calling."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        client: openai.AsyncOpenAI | None = None,
    ) -> None:
        self._client = client or openai.AsyncOpenAI(api_key=api_key, base_url=base_url)

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
            response = await self._client.chat.completions.create(
                model=model_id,
                max_completion_tokens=max_tokens,
                temperature=temperature,
                **_build_request(messages, tools),
            )
        except openai.APIError as e:
            raise _map_error(e) from e

        text, calls, finish_reason = _parse_choice(response)
        usage = response.usage
        logger.debug("%s replied with %d tool call(s)", model_id, len(calls))
        return ModelResponse(
            model_ref=f"{PROVIDER_ID}:{model_id}",
            text=text,
            tool_calls=calls,
            stop_reason=finish_reason,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )
