"""Tool protocol and data types.

Defines the ``Tool`` protocol that every data adapter satisfies, the
``Envelope`` each one returns, and the records the executor produces
when it runs a batch of tool calls.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Schema definition for a tool, suitable for passing to providers."""

    name: str
    description: str
    parameters_schema: dict[str, Any]

    def to_provider_dict(self) -> dict[str, object]:
        """Generic ``{"name", "description", "parameters"}`` form."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters_schema,
        }


@dataclass(frozen=True, slots=True)
class ToolCall:
    """A tool invocation selected by the routing decision."""

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    id: str = ""


@dataclass(slots=True)
class Envelope:
    """The ``{data, sourceUrls}`` wrapper every adapter returns."""

    data: Any
    source_urls: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "sourceUrls": list(self.source_urls)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    @classmethod
    def from_json(cls, text: str) -> Envelope:
        """Parse a serialized envelope.

        Raises:
            ValueError: If *text* is not a JSON object with a ``data`` key,
                or ``sourceUrls`` is present but not a list.
        """
        parsed = json.loads(text)
        if not isinstance(parsed, dict) or "data" not in parsed:
            msg = "expected a JSON object with a 'data' key"
            raise ValueError(msg)
        urls = parsed.get("sourceUrls")
        if urls is None:
            urls = []
        elif not isinstance(urls, list):
            msg = "'sourceUrls' must be a list"
            raise ValueError(msg)
        return cls(data=parsed["data"], source_urls=[str(u) for u in urls])


@dataclass(slots=True)
class ExecutionResult:
    """Outcome of one tool call. Exactly one of ``data``/``error`` is set."""

    tool: str
    arguments: dict[str, Any]
    data: Any = None
    source_urls: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@runtime_checkable
class Tool(Protocol):
    """Protocol that all tool implementations must satisfy."""

    @property
    def name(self) -> str:
        """Unique name for this tool."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        ...

    @property
    def parameters_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's parameters."""
        ...

    async def execute(self, **kwargs: Any) -> str:
        """Execute the tool with the given arguments.

        Returns:
            A JSON-serialized :class:`Envelope`.

        Raises:
            Exception: On validation or execution failure.
        """
        ...
