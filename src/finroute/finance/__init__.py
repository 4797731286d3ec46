"""Financial data tools backed by the FMP REST API.

``build_finance_registry`` wires every tool to one shared client. The
order of ``FINANCE_TOOLS`` is the order tools are offered to the model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from finroute.finance.api import ApiResponse, FinancialDataClient
from finroute.finance.base import FinanceTool
from finroute.finance.company_facts import CompanyFactsTool
from finroute.finance.crypto import (
    CryptoPriceSnapshotTool,
    CryptoPricesTool,
    CryptoTickersTool,
)
from finroute.finance.estimates import AnalystEstimatesTool
from finroute.finance.filings import (
    EightKFilingItemsTool,
    FilingsTool,
    TenKFilingItemsTool,
    TenQFilingItemsTool,
)
from finroute.finance.fundamentals import (
    AllFinancialStatementsTool,
    BalanceSheetsTool,
    CashFlowStatementsTool,
    IncomeStatementsTool,
)
from finroute.finance.insider_trades import InsiderTradesTool
from finroute.finance.metrics import FinancialMetricsSnapshotTool, FinancialMetricsTool
from finroute.finance.news import NewsTool
from finroute.finance.prices import PriceSnapshotTool, PricesTool
from finroute.finance.segments import SegmentedRevenuesTool
from finroute.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from finroute.config.schema import ApiConfig

FINANCE_TOOLS: tuple[type[FinanceTool], ...] = (
    PriceSnapshotTool,
    PricesTool,
    CryptoPriceSnapshotTool,
    CryptoPricesTool,
    CryptoTickersTool,
    IncomeStatementsTool,
    BalanceSheetsTool,
    CashFlowStatementsTool,
    AllFinancialStatementsTool,
    FinancialMetricsSnapshotTool,
    FinancialMetricsTool,
    AnalystEstimatesTool,
    FilingsTool,
    TenKFilingItemsTool,
    TenQFilingItemsTool,
    EightKFilingItemsTool,
    NewsTool,
    InsiderTradesTool,
    SegmentedRevenuesTool,
    CompanyFactsTool,
)


def build_finance_registry(client: FinancialDataClient) -> ToolRegistry:
    """Return a registry holding one instance of every finance tool."""
    return ToolRegistry(tool_cls(client) for tool_cls in FINANCE_TOOLS)


def client_from_config(config: ApiConfig) -> FinancialDataClient:
    return FinancialDataClient(
        config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
    )


__all__ = [
    "FINANCE_TOOLS",
    "ApiResponse",
    "FinanceTool",
    "FinancialDataClient",
    "build_finance_registry",
    "client_from_config",
]
