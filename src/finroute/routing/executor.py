"""Concurrent execution of tool calls and merging of their results.

All calls in a batch run at once with ``asyncio.gather``. A failing call
never cancels or affects its siblings; its error is collected instead.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from collections.abc import Sequence

    from finroute.tools.base import ExecutionResult, ToolCall
    from finroute.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

CollisionPolicy = Literal["accumulate", "overwrite"]

ERRORS_KEY = "_errors"


@dataclass(slots=True)
class AggregatedResponse:
    """Merged output of one search request.

    ``error`` is set only for request-level conditions (decision service
    failure, no tool selected); per-call failures live in
    ``data["_errors"]``.
    """

    data: dict[str, Any] = field(default_factory=dict)
    source_urls: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"data": self.data, "sourceUrls": list(self.source_urls)}
        if self.error is not None:
            out["error"] = self.error
        return out

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)


async def execute_calls(
    registry: ToolRegistry, calls: Sequence[ToolCall]
) -> list[ExecutionResult]:
    """Run every call concurrently. Results keep the order of *calls*."""
    results = await asyncio.gather(*(registry.execute(call) for call in calls))
    return list(results)


def result_key(result: ExecutionResult) -> str:
    """``tool`` or ``tool_TICKER`` when the call had a ticker argument."""
    ticker = result.arguments.get("ticker")
    return f"{result.tool}_{ticker}" if ticker else result.tool


def merge_results(
    results: Sequence[ExecutionResult],
    *,
    collision_policy: CollisionPolicy = "accumulate",
) -> AggregatedResponse:
    """Merge results into one keyed payload.

    Successful results are keyed by :func:`result_key` in the order
    given. When two results share a key, ``overwrite`` keeps the last
    one; ``accumulate`` turns the entry into a list of every payload in
    order. Source URLs of successful results are concatenated as-is.
    """
    successes = [r for r in results if r.ok]
    failures = [r for r in results if not r.ok]
    logger.info("Results: %d successful, %d failed", len(successes), len(failures))

    data: dict[str, Any] = {}
    accumulated: set[str] = set()
    for result in successes:
        key = result_key(result)
        if key not in data or collision_policy == "overwrite":
            data[key] = result.data
        elif key in accumulated:
            data[key].append(result.data)
        else:
            data[key] = [data[key], result.data]
            accumulated.add(key)

    if failures:
        data[ERRORS_KEY] = [
            {"tool": r.tool, "args": r.arguments, "error": r.error} for r in failures
        ]

    source_urls = [url for r in successes for url in r.source_urls]
    return AggregatedResponse(data=data, source_urls=source_urls)
