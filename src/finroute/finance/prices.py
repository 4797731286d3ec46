"""Equity price tools: latest quote and historical bars."""

from __future__ import annotations

import datetime  # noqa: TC003

from pydantic import Field, model_validator

from finroute.finance.base import FinanceTool, TickerInput, first_item
from finroute.finance.params import Interval, price_path  # noqa: TC001
from finroute.tools.base import Envelope

QUOTE_PATH = "/quote"


class PricesInput(TickerInput):
    start_date: datetime.date = Field(description="Start date (YYYY-MM-DD).")
    end_date: datetime.date = Field(description="End date (YYYY-MM-DD).")
    interval: Interval = Field(
        default="day",
        description="Bar size: 'day' for daily bars or an intraday interval.",
    )

    @model_validator(mode="after")
    def _check_range(self) -> PricesInput:
        if self.start_date > self.end_date:
            msg = "start_date must not be after end_date"
            raise ValueError(msg)
        return self


class PriceSnapshotTool(FinanceTool):
    name = "get_price_snapshot"
    description = (
        "Fetches the current price snapshot for a stock: last price, "
        "day change, volume, and market cap."
    )
    input_model = TickerInput

    async def fetch(self, params: TickerInput) -> Envelope:
        resp = await self._client.get(QUOTE_PATH, {"symbol": params.ticker})
        return Envelope(
            data={"snapshot": first_item(resp.data)}, source_urls=[resp.url]
        )


class PricesTool(FinanceTool):
    name = "get_prices"
    description = (
        "Retrieves historical price bars (open, high, low, close, volume) "
        "for a stock over a date range."
    )
    input_model = PricesInput

    async def fetch(self, params: PricesInput) -> Envelope:
        resp = await self._client.get(
            price_path(params.interval),
            {
                "symbol": params.ticker,
                "from": params.start_date.isoformat(),
                "to": params.end_date.isoformat(),
            },
        )
        return Envelope(data={"prices": resp.data}, source_urls=[resp.url])
