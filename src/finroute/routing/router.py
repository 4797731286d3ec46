"""Routing decision: which tools to call, with which arguments.

The decision itself is delegated to a :class:`DecisionService`.
:class:`LLMDecisionService` implements it with a tool-calling model
from any :class:`~finroute.providers.base.ModelProvider`.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from finroute.core.errors import DecisionServiceError
from finroute.providers.base import PromptMessage
from finroute.routing.prompts import build_router_prompt
from finroute.tools.base import ToolCall

if TYPE_CHECKING:
    from finroute.providers.base import ModelProvider, ToolCallData
    from finroute.tools.base import ToolDefinition
    from finroute.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


@runtime_checkable
class DecisionService(Protocol):
    """Selects tool calls for a query from the available tools."""

    async def decide(
        self, query: str, available_tools: list[ToolDefinition]
    ) -> list[ToolCall]:
        """Return zero or more tool calls. Raises on service failure."""
        ...


def _parse_arguments(raw: str) -> dict[str, Any]:
    """Decode a model's JSON argument string; anything unusable becomes ``{}``."""
    try:
        parsed = json.loads(raw) if raw else {}
    except json.JSONDecodeError:
        logger.debug("Discarding malformed tool arguments: %r", raw)
        return {}
    return parsed if isinstance(parsed, dict) else {}


def _to_tool_call(data: ToolCallData) -> ToolCall:
    return ToolCall(
        name=data.name, arguments=_parse_arguments(data.arguments), id=data.id
    )


class LLMDecisionService:
    """Decision service backed by a model's native tool calling."""

    def __init__(
        self,
        provider: ModelProvider,
        model_id: str,
        *,
        max_tokens: int = 2048,
        temperature: float = 0.0,
    ) -> None:
        self._provider = provider
        self._model_id = model_id
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def decide(
        self, query: str, available_tools: list[ToolDefinition]
    ) -> list[ToolCall]:
        messages = [
            PromptMessage(role="system", content=build_router_prompt()),
            PromptMessage(role="user", content=query),
        ]
        response = await self._provider.send(
            messages,
            self._model_id,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            tools=[d.to_provider_dict() for d in available_tools],
        )
        return [_to_tool_call(tc) for tc in response.tool_calls]


class Router:
    """Turns a natural-language query into tool calls."""

    def __init__(
        self, decision_service: DecisionService, registry: ToolRegistry
    ) -> None:
        self._decision_service = decision_service
        self._registry = registry

    async def route(self, query: str) -> list[ToolCall]:
        """Ask the decision service for tool calls.

        Raises:
            DecisionServiceError: If the decision call fails for any reason.
        """
        try:
            calls = await self._decision_service.decide(
                query, self._registry.list_definitions()
            )
        except Exception as e:
            msg = f"LLM call failed: {e}"
            raise DecisionServiceError(msg) from e

        logger.info(
            "Routed %r to %d tool call(s): %s",
            query,
            len(calls),
            ", ".join(c.name for c in calls) or "-",
        )
        return calls
