"""Financial metrics tools: valuation, profitability and per-share ratios."""

from __future__ import annotations

from pydantic import Field

from finroute.finance.base import FinanceTool, TickerInput, first_item
from finroute.finance.params import Period, map_period  # noqa: TC001
from finroute.tools.base import Envelope

KEY_METRICS_PATH = "/key-metrics"
KEY_METRICS_TTM_PATH = "/key-metrics-ttm"
RATIOS_TTM_PATH = "/ratios-ttm"


class FinancialMetricsInput(TickerInput):
    period: Period = Field(
        default="annual",
        description="The reporting period: 'annual', 'quarterly', or 'ttm'.",
    )
    limit: int = Field(
        default=4,
        ge=1,
        description="Maximum number of periods to return (default: 4).",
    )


class FinancialMetricsSnapshotTool(FinanceTool):
    name = "get_financial_metrics_snapshot"
    description = (
        "Fetches current financial metrics for a company: market cap, "
        "P/E ratio, EPS, dividend yield, and trailing-twelve-month ratios."
    )
    input_model = TickerInput

    async def fetch(self, params: TickerInput) -> Envelope:
        query = {"symbol": params.ticker}
        envelope = await self.fetch_labeled(
            {
                "snapshot": (KEY_METRICS_TTM_PATH, query),
                "ratios": (RATIOS_TTM_PATH, query),
            }
        )
        envelope.data = {label: first_item(v) for label, v in envelope.data.items()}
        return envelope


class FinancialMetricsTool(FinanceTool):
    name = "get_financial_metrics"
    description = "Retrieves historical financial metrics for a company over periods."
    input_model = FinancialMetricsInput

    async def fetch(self, params: FinancialMetricsInput) -> Envelope:
        resp = await self._client.get(
            KEY_METRICS_PATH,
            {
                "symbol": params.ticker,
                "period": map_period(params.period),
                "limit": params.limit,
            },
        )
        return Envelope(data={"financial_metrics": resp.data}, source_urls=[resp.url])
