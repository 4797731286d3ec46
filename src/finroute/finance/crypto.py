"""Cryptocurrency tools. Tickers are pairs such as ``BTCUSD``."""

from __future__ import annotations

from pydantic import BaseModel, Field

from finroute.finance.base import FinanceTool, TickerInput, first_item
from finroute.finance.params import price_path
from finroute.finance.prices import QUOTE_PATH, PricesInput
from finroute.tools.base import Envelope

CRYPTO_LIST_PATH = "/cryptocurrency-list"


class CryptoTickerInput(TickerInput):
    ticker: str = Field(
        min_length=1,
        description="The crypto pair symbol (e.g., 'BTCUSD' for Bitcoin in USD).",
    )


class CryptoPricesInput(PricesInput):
    ticker: str = Field(
        min_length=1,
        description="The crypto pair symbol (e.g., 'BTCUSD' for Bitcoin in USD).",
    )


class NoInput(BaseModel):
    pass


class CryptoPriceSnapshotTool(FinanceTool):
    name = "get_crypto_price_snapshot"
    description = "Fetches the current price snapshot for a cryptocurrency pair."
    input_model = CryptoTickerInput

    async def fetch(self, params: CryptoTickerInput) -> Envelope:
        resp = await self._client.get(QUOTE_PATH, {"symbol": params.ticker})
        return Envelope(
            data={"snapshot": first_item(resp.data)}, source_urls=[resp.url]
        )


class CryptoPricesTool(FinanceTool):
    name = "get_crypto_prices"
    description = "Retrieves historical price bars for a cryptocurrency pair."
    input_model = CryptoPricesInput

    async def fetch(self, params: CryptoPricesInput) -> Envelope:
        resp = await self._client.get(
            price_path(params.interval),
            {
                "symbol": params.ticker,
                "from": params.start_date.isoformat(),
                "to": params.end_date.isoformat(),
            },
        )
        return Envelope(data={"prices": resp.data}, source_urls=[resp.url])


class CryptoTickersTool(FinanceTool):
    name = "get_crypto_tickers"
    description = "Lists the cryptocurrency pairs available for price lookups."
    input_model = NoInput

    async def fetch(self, params: NoInput) -> Envelope:
        resp = await self._client.get(CRYPTO_LIST_PATH)
        return Envelope(data={"tickers": resp.data}, source_urls=[resp.url])
