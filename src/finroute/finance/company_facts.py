"""Company facts tool."""

from __future__ import annotations

from finroute.finance.base import FinanceTool, TickerInput, first_item
from finroute.tools.base import Envelope

PROFILE_PATH = "/profile"


class CompanyFactsTool(FinanceTool):
    name = "get_company_facts"
    description = (
        "Retrieves company facts: name, sector, industry, exchange, CEO, "
        "employee count, website, and description."
    )
    input_model = TickerInput

    async def fetch(self, params: TickerInput) -> Envelope:
        resp = await self._client.get(PROFILE_PATH, {"symbol": params.ticker})
        return Envelope(
            data={"company_facts": first_item(resp.data)}, source_urls=[resp.url]
        )
