"""Analyst estimates tool."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from finroute.finance.base import FinanceTool, TickerInput
from finroute.finance.params import map_period
from finroute.tools.base import Envelope

ANALYST_ESTIMATES_PATH = "/analyst-estimates"


class AnalystEstimatesInput(TickerInput):
    period: Literal["annual", "quarterly"] = Field(
        default="annual",
        description="Estimate horizon: 'annual' or 'quarterly'.",
    )
    limit: int = Field(default=10, ge=1, description="Maximum periods to return.")


class AnalystEstimatesTool(FinanceTool):
    name = "get_analyst_estimates"
    description = (
        "Retrieves analyst consensus estimates for revenue, EPS and other "
        "figures for upcoming periods."
    )
    input_model = AnalystEstimatesInput

    async def fetch(self, params: AnalystEstimatesInput) -> Envelope:
        resp = await self._client.get(
            ANALYST_ESTIMATES_PATH,
            {
                "symbol": params.ticker,
                "period": map_period(params.period),
                "limit": params.limit,
            },
        )
        return Envelope(data={"analyst_estimates": resp.data}, source_urls=[resp.url])
