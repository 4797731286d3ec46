"""LLM provider adapters used by the routing decision."""

from finroute.providers.base import (
    ModelInfo,
    ModelProvider,
    ModelResponse,
    PromptMessage,
    ToolCallData,
)
from finroute.providers.manager import ProviderManager

__all__ = [
    "ModelInfo",
    "ModelProvider",
    "ModelResponse",
    "PromptMessage",
    "ProviderManager",
    "ToolCallData",
]
