"""Company news tool."""

from __future__ import annotations

from pydantic import Field

from finroute.finance.base import FinanceTool, TickerInput
from finroute.tools.base import Envelope

STOCK_NEWS_PATH = "/news/stock"


class NewsInput(TickerInput):
    limit: int = Field(default=10, ge=1, description="Maximum articles to return.")


class NewsTool(FinanceTool):
    name = "get_news"
    description = "Retrieves recent news articles about a company."
    input_model = NewsInput

    async def fetch(self, params: NewsInput) -> Envelope:
        resp = await self._client.get(
            STOCK_NEWS_PATH, {"symbols": params.ticker, "limit": params.limit}
        )
        return Envelope(data={"news": resp.data}, source_urls=[resp.url])
