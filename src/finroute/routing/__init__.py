"""Query routing, concurrent execution and result merging."""

from finroute.routing.executor import (
    AggregatedResponse,
    execute_calls,
    merge_results,
    result_key,
)
from finroute.routing.router import DecisionService, LLMDecisionService, Router
from finroute.routing.search import FinancialSearch, FinancialSearchTool

__all__ = [
    "AggregatedResponse",
    "DecisionService",
    "FinancialSearch",
    "FinancialSearchTool",
    "LLMDecisionService",
    "Router",
    "execute_calls",
    "merge_results",
    "result_key",
]
