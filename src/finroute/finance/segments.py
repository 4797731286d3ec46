"""Segmented revenue tool: revenue by product line and by geography."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from finroute.finance.base import FinanceTool, TickerInput
from finroute.finance.params import map_period
from finroute.tools.base import Envelope

PRODUCT_SEGMENTS_PATH = "/revenue-product-segmentation"
GEOGRAPHIC_SEGMENTS_PATH = "/revenue-geographic-segmentation"


class SegmentsInput(TickerInput):
    period: Literal["annual", "quarterly"] = Field(
        default="annual",
        description="The reporting period: 'annual' or 'quarterly'.",
    )


class SegmentedRevenuesTool(FinanceTool):
    name = "get_segmented_revenues"
    description = (
        "Retrieves a company's revenue broken down by product segment and "
        "by geographic region."
    )
    input_model = SegmentsInput

    async def fetch(self, params: SegmentsInput) -> Envelope:
        query = {
            "symbol": params.ticker,
            "period": map_period(params.period),
            "structure": "flat",
        }
        return await self.fetch_labeled(
            {
                "product_segments": (PRODUCT_SEGMENTS_PATH, query),
                "geographic_segments": (GEOGRAPHIC_SEGMENTS_PATH, query),
            }
        )
