"""Model provider interface used by the routing decision.

A provider turns a prompt plus a set of tool definitions into the model's
tool calls. Adapters convert the generic tool dicts produced by
:meth:`ToolDefinition.to_provider_dict` into their SDK's wire format and
hand back raw JSON argument strings; decoding is left to the router.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class ModelInfo:
    """A model a provider can route with."""

    provider_id: str
    model_id: str
    display_name: str
    context_window: int

    @property
    def model_ref(self) -> str:
        """Canonical reference: ``provider_id:model_id``."""
        return f"{self.provider_id}:{self.model_id}"


@dataclass(frozen=True, slots=True)
class ToolCallData:
    """One tool call as the model emitted it."""

    id: str
    name: str
    arguments: str  # raw JSON, possibly malformed


@dataclass(slots=True)
class ModelResponse:
    """The parts of a model reply the router cares about."""

    model_ref: str
    text: str = ""
    tool_calls: list[ToolCallData] = field(default_factory=list)
    stop_reason: str = "stop"
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass(frozen=True, slots=True)
class PromptMessage:
    role: str  # "system", "user", "assistant"
    content: str


def retry_after_seconds(response: Any) -> float | None:
    """Read a ``retry-after`` header off an SDK error response, if any."""
    headers = getattr(response, "headers", None) or {}
    raw = headers.get("retry-after")
    if raw is None:
        return None
    with contextlib.suppress(TypeError, ValueError):
        return float(raw)
    return None


@runtime_checkable
class ModelProvider(Protocol):
    """Protocol that all provider adapters must satisfy."""

    @property
    def provider_id(self) -> str:
        """Unique identifier, e.g. ``anthropic`` or ``openai``."""
        ...

    async def list_models(self) -> list[ModelInfo]:
        """Models known to work for routing. Others may still be accepted."""
        ...

    async def send(
        self,
        messages: list[PromptMessage],
        model_id: str,
        *,
        max_tokens: int = 2048,
        temperature: float = 0.0,
        tools: list[dict[str, object]] | None = None,
    ) -> ModelResponse:
        """Send *messages* and return the reply.

        Args:
            messages: Prompt messages; ``system`` entries carry the
                routing instructions.
            model_id: Model to use.
            max_tokens: Max output tokens.
            temperature: Sampling temperature.
            tools: Tool definitions as ``{"name", "description",
                "parameters"}`` dicts.

        Raises:
            ProviderError: On any SDK failure.
        """
        ...
