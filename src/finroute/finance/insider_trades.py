"""Insider trading activity tool."""

from __future__ import annotations

from pydantic import Field

from finroute.finance.base import FinanceTool, TickerInput
from finroute.tools.base import Envelope

INSIDER_TRADING_PATH = "/insider-trading/search"


class InsiderTradesInput(TickerInput):
    limit: int = Field(default=50, ge=1, description="Maximum trades to return.")


class InsiderTradesTool(FinanceTool):
    name = "get_insider_trades"
    description = (
        "Retrieves insider buys and sells (Form 4) by company officers, "
        "directors and large holders."
    )
    input_model = InsiderTradesInput

    async def fetch(self, params: InsiderTradesInput) -> Envelope:
        resp = await self._client.get(
            INSIDER_TRADING_PATH,
            {"symbol": params.ticker, "page": 0, "limit": params.limit},
        )
        return Envelope(data={"insider_trades": resp.data}, source_urls=[resp.url])
