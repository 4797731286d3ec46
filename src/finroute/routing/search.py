"""Financial search: route a query, run the selected tools, merge."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from finroute.core.errors import DecisionServiceError
from finroute.routing.executor import AggregatedResponse, execute_calls, merge_results

if TYPE_CHECKING:
    from finroute.routing.executor import CollisionPolicy
    from finroute.routing.router import Router
    from finroute.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

NO_TOOLS_SELECTED = "No tools selected for query"


class FinancialSearch:
    """Public entry point: ``await search(query) -> AggregatedResponse``."""

    def __init__(
        self,
        router: Router,
        registry: ToolRegistry,
        *,
        collision_policy: CollisionPolicy = "accumulate",
    ) -> None:
        self._router = router
        self._registry = registry
        self._collision_policy = collision_policy

    async def search(self, query: str) -> AggregatedResponse:
        """Answer *query* with data from one or more tools.

        Never raises for routing or tool failures: a failed routing
        decision or an empty selection comes back as ``error`` with no
        data; per-tool failures come back under ``data["_errors"]``.
        """
        try:
            calls = await self._router.route(query)
        except DecisionServiceError as e:
            logger.error("Routing failed: %s", e)
            return AggregatedResponse(error=str(e))

        if not calls:
            logger.info("No tool calls returned for %r", query)
            return AggregatedResponse(error=NO_TOOLS_SELECTED)

        results = await execute_calls(self._registry, calls)
        response = merge_results(results, collision_policy=self._collision_policy)
        logger.debug("Final data keys: %s", list(response.data))
        return response


class FinancialSearchTool:
    """Exposes :class:`FinancialSearch` as a single tool.

    Lets an outer agent hand whole financial questions to the router.
    Implements the :class:`~finroute.tools.base.Tool` protocol.
    """

    def __init__(self, search: FinancialSearch) -> None:
        self._search = search

    @property
    def name(self) -> str:
        return "financial_search"

    @property
    def description(self) -> str:
        return (
            "Intelligent agentic search for financial data. Takes a natural "
            "language query and automatically routes to appropriate financial "
            "data tools. Use for:\n"
            "- Stock prices (current or historical)\n"
            "- Company financials (income statements, balance sheets, cash flow)\n"
            "- Financial metrics (P/E ratio, market cap, EPS, dividend yield)\n"
            "- SEC filings (10-K, 10-Q, 8-K)\n"
            "- Analyst estimates\n"
            "- Company news\n"
            "- Insider trading activity\n"
            "- Cryptocurrency prices"
        )

    @property
    def parameters_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Natural language query about financial data",
                },
            },
            "required": ["query"],
        }

    async def execute(self, **kwargs: Any) -> str:
        """Run a search and return the response envelope as JSON.

        Raises:
            ValueError: If 'query' is missing or empty.
        """
        query = kwargs.get("query", "")
        if not query or not isinstance(query, str):
            msg = "Parameter 'query' is required and must be a non-empty string."
            raise ValueError(msg)
        response = await self._search.search(query)
        return response.to_json()
