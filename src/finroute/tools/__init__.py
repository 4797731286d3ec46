"""Tool framework: protocol, envelope types and the registry."""

from finroute.tools.base import (
    Envelope,
    ExecutionResult,
    Tool,
    ToolCall,
    ToolDefinition,
)
from finroute.tools.registry import ToolRegistry

__all__ = [
    "Envelope",
    "ExecutionResult",
    "Tool",
    "ToolCall",
    "ToolDefinition",
    "ToolRegistry",
]
