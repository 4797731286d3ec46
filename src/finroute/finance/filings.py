"""SEC filing tools: filing index and structured 10-K / 10-Q / 8-K items."""

from __future__ import annotations

import datetime
from typing import Any

from pydantic import Field

from finroute.finance.base import FinanceTool, TickerInput
from finroute.finance.params import (
    ANNUAL_REPORT_PERIOD,
    QUARTER_PERIODS,
    FilingType,
    Quarter,
)
from finroute.tools.base import Envelope

FILINGS_SEARCH_PATH = "/sec-filings-search/symbol"
FINANCIAL_REPORTS_PATH = "/financial-reports-json"

DEFAULT_LOOKBACK = datetime.timedelta(days=365)
# minimum page size requested when filtering by form type locally
_SEARCH_PAGE_SIZE = 100


class FilingsInput(TickerInput):
    filing_type: FilingType | None = Field(
        default=None,
        description="Only return filings of this form type: '10-K', '10-Q' or '8-K'.",
    )
    start_date: datetime.date | None = Field(
        default=None,
        description="Earliest filing date (YYYY-MM-DD). Defaults to one year ago.",
    )
    end_date: datetime.date | None = Field(
        default=None,
        description="Latest filing date (YYYY-MM-DD). Defaults to today.",
    )
    limit: int = Field(default=10, ge=1, description="Maximum filings to return.")


class EightKItemsInput(TickerInput):
    start_date: datetime.date | None = Field(
        default=None,
        description="Earliest filing date (YYYY-MM-DD). Defaults to one year ago.",
    )
    end_date: datetime.date | None = Field(
        default=None,
        description="Latest filing date (YYYY-MM-DD). Defaults to today.",
    )
    limit: int = Field(default=10, ge=1, description="Maximum filings to return.")


class AnnualReportInput(TickerInput):
    year: int = Field(ge=1993, description="Fiscal year of the 10-K.")


class QuarterlyReportInput(AnnualReportInput):
    year: int = Field(ge=1993, description="Fiscal year of the 10-Q.")
    quarter: Quarter = Field(description="Fiscal quarter of the 10-Q (1-4).")


def _date_window(
    start: datetime.date | None, end: datetime.date | None
) -> tuple[str, str]:
    end = end or datetime.date.today()
    start = start or end - DEFAULT_LOOKBACK
    return start.isoformat(), end.isoformat()


class _FilingSearchTool(FinanceTool):
    async def search_filings(
        self,
        ticker: str,
        *,
        form_type: str | None,
        start: datetime.date | None,
        end: datetime.date | None,
        limit: int,
    ) -> tuple[list[Any], str]:
        """Return up to *limit* filings and the search URL."""
        date_from, date_to = _date_window(start, end)
        resp = await self._client.get(
            FILINGS_SEARCH_PATH,
            {
                "symbol": ticker,
                "from": date_from,
                "to": date_to,
                "page": 0,
                "limit": max(_SEARCH_PAGE_SIZE, limit) if form_type else limit,
            },
        )
        filings = resp.data if isinstance(resp.data, list) else []
        if form_type:
            filings = [f for f in filings if f.get("formType") == form_type]
        return filings[:limit], resp.url


class FilingsTool(_FilingSearchTool):
    name = "get_filings"
    description = (
        "Lists a company's SEC filings (10-K, 10-Q, 8-K and others) with "
        "filing dates and document links."
    )
    input_model = FilingsInput

    async def fetch(self, params: FilingsInput) -> Envelope:
        filings, url = await self.search_filings(
            params.ticker,
            form_type=params.filing_type,
            start=params.start_date,
            end=params.end_date,
            limit=params.limit,
        )
        return Envelope(data={"filings": filings}, source_urls=[url])


class TenKFilingItemsTool(FinanceTool):
    name = "get_10K_filing_items"
    description = (
        "Retrieves the structured sections of a company's annual 10-K report "
        "for a fiscal year."
    )
    input_model = AnnualReportInput

    async def fetch(self, params: AnnualReportInput) -> Envelope:
        resp = await self._client.get(
            FINANCIAL_REPORTS_PATH,
            {
                "symbol": params.ticker,
                "year": params.year,
                "period": ANNUAL_REPORT_PERIOD,
            },
        )
        return Envelope(data={"filing_items": resp.data}, source_urls=[resp.url])


class TenQFilingItemsTool(FinanceTool):
    name = "get_10Q_filing_items"
    description = (
        "Retrieves the structured sections of a company's quarterly 10-Q "
        "report for a fiscal year and quarter."
    )
    input_model = QuarterlyReportInput

    async def fetch(self, params: QuarterlyReportInput) -> Envelope:
        resp = await self._client.get(
            FINANCIAL_REPORTS_PATH,
            {
                "symbol": params.ticker,
                "year": params.year,
                "period": QUARTER_PERIODS[params.quarter],
            },
        )
        return Envelope(data={"filing_items": resp.data}, source_urls=[resp.url])


class EightKFilingItemsTool(_FilingSearchTool):
    name = "get_8K_filing_items"
    description = (
        "Lists a company's 8-K current reports (material events) within a "
        "date range."
    )
    input_model = EightKItemsInput

    async def fetch(self, params: EightKItemsInput) -> Envelope:
        filings, url = await self.search_filings(
            params.ticker,
            form_type="8-K",
            start=params.start_date,
            end=params.end_date,
            limit=params.limit,
        )
        return Envelope(data={"filing_items": filings}, source_urls=[url])
