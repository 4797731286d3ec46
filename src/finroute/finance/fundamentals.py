"""Financial statement tools: income, balance sheet, cash flow."""

from __future__ import annotations

from typing import Any

from finroute.finance.base import FinanceTool, StatementsInput
from finroute.finance.params import map_period
from finroute.tools.base import Envelope

INCOME_STATEMENT_PATH = "/income-statement"
BALANCE_SHEET_PATH = "/balance-sheet-statement"
CASH_FLOW_PATH = "/cash-flow-statement"


def _statement_params(params: StatementsInput) -> dict[str, Any]:
    return {
        "symbol": params.ticker,
        "period": map_period(params.period),
        "limit": params.limit,
    }


class _StatementTool(FinanceTool):
    input_model = StatementsInput
    path: str
    label: str

    async def fetch(self, params: StatementsInput) -> Envelope:
        resp = await self._client.get(self.path, _statement_params(params))
        return Envelope(data={self.label: resp.data}, source_urls=[resp.url])


class IncomeStatementsTool(_StatementTool):
    name = "get_income_statements"
    description = (
        "Fetches a company's income statements with revenues, expenses, "
        "net income, etc."
    )
    path = INCOME_STATEMENT_PATH
    label = "income_statements"


class BalanceSheetsTool(_StatementTool):
    name = "get_balance_sheets"
    description = (
        "Retrieves a company's balance sheets showing assets, liabilities, "
        "and equity."
    )
    path = BALANCE_SHEET_PATH
    label = "balance_sheets"


class CashFlowStatementsTool(_StatementTool):
    name = "get_cash_flow_statements"
    description = "Retrieves a company's cash flow statements."
    path = CASH_FLOW_PATH
    label = "cash_flow_statements"


class AllFinancialStatementsTool(FinanceTool):
    """All three statements fetched concurrently, one source URL each."""

    name = "get_all_financial_statements"
    description = (
        "Retrieves all three financial statements (income, balance sheet, "
        "cash flow) for comprehensive analysis."
    )
    input_model = StatementsInput

    async def fetch(self, params: StatementsInput) -> Envelope:
        query = _statement_params(params)
        return await self.fetch_labeled(
            {
                "income_statements": (INCOME_STATEMENT_PATH, query),
                "balance_sheets": (BALANCE_SHEET_PATH, query),
                "cash_flow_statements": (CASH_FLOW_PATH, query),
            }
        )
