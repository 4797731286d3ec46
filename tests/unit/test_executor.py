"""Tests for concurrent tool execution and result merging."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest

from finroute.routing.executor import (
    ERRORS_KEY,
    AggregatedResponse,
    execute_calls,
    merge_results,
    result_key,
)
from finroute.tools.base import Envelope, ExecutionResult, ToolCall
from finroute.tools.registry import ToolRegistry


def _ok(tool: str, args: dict[str, Any], data: Any, *urls: str) -> ExecutionResult:
    return ExecutionResult(tool=tool, arguments=args, data=data, source_urls=list(urls))


def _failed(tool: str, args: dict[str, Any], error: str) -> ExecutionResult:
    return ExecutionResult(tool=tool, arguments=args, error=error)


class _PriceTool:
    """Returns the ticker it was called with; sleeps to reorder completion."""

    def __init__(self, delays: dict[str, float] | None = None) -> None:
        self._delays = delays or {}
        self.started: list[str] = []

    @property
    def name(self) -> str:
        return "get_prices"

    @property
    def description(self) -> str:
        return "prices"

    @property
    def parameters_schema(self) -> dict[str, Any]:
        return {"type": "object"}

    async def execute(self, **kwargs: Any) -> str:
        ticker = kwargs["ticker"]
        self.started.append(ticker)
        await asyncio.sleep(self._delays.get(ticker, 0))
        return Envelope(
            data={"prices": [ticker]},
            source_urls=[f"https://api.test/prices?symbol={ticker}"],
        ).to_json()


# ── Keys ────────────────────────────────────────────────────────────


class TestResultKey:
    def test_with_ticker(self):
        result = _ok("get_prices", {"ticker": "AAPL"}, {})
        assert result_key(result) == "get_prices_AAPL"

    def test_without_ticker(self):
        assert result_key(_ok("get_crypto_tickers", {}, {})) == "get_crypto_tickers"

    def test_empty_ticker_ignored(self):
        assert result_key(_ok("get_news", {"ticker": ""}, {})) == "get_news"


# ── Merge ───────────────────────────────────────────────────────────


class TestMerge:
    def test_one_entry_per_ticker(self):
        merged = merge_results(
            [
                _ok("get_prices", {"ticker": "AAPL"}, {"p": 1}, "u1"),
                _ok("get_prices", {"ticker": "TSLA"}, {"p": 2}, "u2"),
            ]
        )
        assert merged.data == {"get_prices_AAPL": {"p": 1}, "get_prices_TSLA": {"p": 2}}
        assert merged.source_urls == ["u1", "u2"]
        assert merged.error is None

    def test_tools_without_ticker_keyed_by_name(self):
        merged = merge_results(
            [_ok("get_crypto_tickers", {}, {"t": 1}), _ok("other_tool", {}, {"o": 2})]
        )
        assert merged.data == {"get_crypto_tickers": {"t": 1}, "other_tool": {"o": 2}}

    def test_urls_concatenated_with_duplicates(self):
        merged = merge_results(
            [
                _ok("a", {"ticker": "X"}, 1, "u1", "u2"),
                _ok("b", {"ticker": "X"}, 2, "u1"),
            ]
        )
        assert merged.source_urls == ["u1", "u2", "u1"]

    def test_failures_collected(self):
        merged = merge_results(
            [
                _ok("get_prices", {"ticker": "AAPL"}, {"p": 1}, "u1"),
                _failed("get_news", {"ticker": "AAPL"}, "HTTP 500: boom"),
            ]
        )
        assert merged.data["get_prices_AAPL"] == {"p": 1}
        assert merged.data[ERRORS_KEY] == [
            {"tool": "get_news", "args": {"ticker": "AAPL"}, "error": "HTTP 500: boom"}
        ]
        assert merged.source_urls == ["u1"]

    def test_no_errors_key_when_all_succeed(self):
        merged = merge_results([_ok("a", {}, 1)])
        assert ERRORS_KEY not in merged.data

    def test_all_failed(self):
        merged = merge_results([_failed("a", {}, "x"), _failed("b", {}, "y")])
        assert list(merged.data) == [ERRORS_KEY]
        assert len(merged.data[ERRORS_KEY]) == 2
        assert merged.source_urls == []

    def test_empty(self):
        merged = merge_results([])
        assert merged.data == {}
        assert merged.source_urls == []


class TestCollisions:
    _results = (
        _ok("get_prices", {"ticker": "AAPL", "interval": "day"}, "daily", "u1"),
        _ok("get_prices", {"ticker": "AAPL", "interval": "1hour"}, "hourly", "u2"),
        _ok("get_prices", {"ticker": "AAPL", "interval": "5min"}, "5min", "u3"),
    )

    def test_accumulate_is_default(self):
        merged = merge_results(self._results)
        assert merged.data == {"get_prices_AAPL": ["daily", "hourly", "5min"]}
        assert merged.source_urls == ["u1", "u2", "u3"]

    def test_accumulate_pair(self):
        merged = merge_results(self._results[:2], collision_policy="accumulate")
        assert merged.data == {"get_prices_AAPL": ["daily", "hourly"]}

    def test_accumulate_does_not_flatten_list_payloads(self):
        merged = merge_results(
            [_ok("a", {"ticker": "X"}, [1, 2]), _ok("a", {"ticker": "X"}, [3])]
        )
        assert merged.data == {"a_X": [[1, 2], [3]]}

    def test_overwrite_keeps_last(self):
        merged = merge_results(self._results, collision_policy="overwrite")
        assert merged.data == {"get_prices_AAPL": "5min"}
        assert merged.source_urls == ["u1", "u2", "u3"]


# ── Execution ───────────────────────────────────────────────────────


class TestExecuteCalls:
    async def test_order_follows_calls_not_completion(self):
        tool = _PriceTool(delays={"AAPL": 0.05, "TSLA": 0})
        registry = ToolRegistry()
        registry.register(tool)

        results = await execute_calls(
            registry,
            [
                ToolCall(name="get_prices", arguments={"ticker": "AAPL"}),
                ToolCall(name="get_prices", arguments={"ticker": "TSLA"}),
            ],
        )
        assert [r.arguments["ticker"] for r in results] == ["AAPL", "TSLA"]
        assert tool.started == ["AAPL", "TSLA"]

    async def test_unknown_tool_does_not_block_siblings(self):
        registry = ToolRegistry()
        registry.register(_PriceTool())
        results = await execute_calls(
            registry,
            [
                ToolCall(name="get_prices", arguments={"ticker": "AAPL"}),
                ToolCall(name="no_such_tool", arguments={"ticker": "AAPL"}),
            ],
        )
        assert results[0].ok
        assert results[1].error == "Tool 'no_such_tool' not found"

        merged = merge_results(results)
        assert merged.data["get_prices_AAPL"] == {"prices": ["AAPL"]}
        assert merged.data[ERRORS_KEY][0]["tool"] == "no_such_tool"
        assert merged.source_urls == ["https://api.test/prices?symbol=AAPL"]

    async def test_no_calls(self):
        assert await execute_calls(ToolRegistry(), []) == []


# ── Serialization ───────────────────────────────────────────────────


class TestAggregatedResponse:
    def test_wire_shape(self):
        resp = AggregatedResponse(data={"a": 1}, source_urls=["u"])
        assert json.loads(resp.to_json()) == {"data": {"a": 1}, "sourceUrls": ["u"]}

    def test_error_included_when_set(self):
        resp = AggregatedResponse(error="No tools selected for query")
        assert resp.to_dict() == {
            "data": {},
            "sourceUrls": [],
            "error": "No tools selected for query",
        }

    @pytest.mark.parametrize("indent", [None, 2])
    def test_indent(self, indent):
        text = AggregatedResponse(data={"a": 1}).to_json(indent=indent)
        assert ("\n" in text) is (indent is not None)
