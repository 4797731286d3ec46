"""Name-keyed registry of the tools a query can be routed to."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from finroute.core.errors import MalformedToolOutputError, UnknownToolError
from finroute.tools.base import Envelope, ExecutionResult, ToolDefinition

if TYPE_CHECKING:
    from collections.abc import Iterable

    from finroute.tools.base import Tool, ToolCall

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Tools by name, in registration order.

    Filled at startup and read-only afterwards; concurrent executions
    share one instance.
    """

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            self.register(tool)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def register(self, tool: Tool) -> None:
        """Add *tool* under its name.

        Raises:
            ValueError: If the name is taken.
        """
        if tool.name in self._tools:
            msg = f"Tool already registered: {tool.name}"
            raise ValueError(msg)
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool:
        """Look up a tool by name.

        Raises:
            UnknownToolError: If no tool has this name.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_names(self) -> list[str]:
        return list(self._tools)

    def list_definitions(self) -> list[ToolDefinition]:
        """Name, description and input schema of every tool, for the router."""
        return [
            ToolDefinition(t.name, t.description, t.parameters_schema)
            for t in self._tools.values()
        ]

    async def _run(self, tool_call: ToolCall) -> Envelope:
        raw = await self.get(tool_call.name).execute(**tool_call.arguments)
        try:
            return Envelope.from_json(raw)
        except (TypeError, ValueError) as exc:
            raise MalformedToolOutputError(tool_call.name, str(exc)) from exc

    async def execute(self, tool_call: ToolCall) -> ExecutionResult:
        """Run *tool_call* and wrap the outcome.

        Per-call failures never propagate: an unknown tool, an exception
        from the tool and output that is not an envelope all come back as
        a result with ``error`` set, so sibling calls are unaffected.
        """
        arguments = dict(tool_call.arguments)
        try:
            envelope = await self._run(tool_call)
        except Exception as exc:
            logger.warning("Tool %s failed: %s", tool_call.name, exc)
            return ExecutionResult(tool_call.name, arguments, error=str(exc))
        return ExecutionResult(
            tool_call.name,
            arguments,
            data=envelope.data,
            source_urls=envelope.source_urls,
        )
