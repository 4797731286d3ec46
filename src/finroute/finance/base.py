"""Base class and shared input models for financial data tools.

Every adapter has the same shape: validate a typed input, call one or
more upstream endpoints, and wrap the result in an :class:`Envelope`
keyed by a semantic label.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from finroute.core.errors import SchemaViolationError
from finroute.finance.params import Period  # noqa: TC001
from finroute.tools.base import Envelope

if TYPE_CHECKING:
    from finroute.finance.api import FinancialDataClient


class TickerInput(BaseModel):
    """Input carrying a single ticker symbol."""

    ticker: str = Field(
        min_length=1,
        description="The stock ticker symbol (e.g., 'AAPL' for Apple).",
    )

    # before, so a blank ticker still trips min_length
    @field_validator("ticker", mode="before")
    @classmethod
    def _normalize_ticker(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class StatementsInput(TickerInput):
    """Input for the financial statement tools."""

    period: Period = Field(
        description="The reporting period: 'annual', 'quarterly', or 'ttm'.",
    )
    limit: int = Field(
        default=10,
        ge=1,
        description="Maximum number of periods to return (default: 10).",
    )


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "input"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


def first_item(data: Any) -> Any:
    """Unwrap a single-record list; snapshot endpoints return ``[record]``."""
    if isinstance(data, list) and len(data) == 1:
        return data[0]
    return data


class FinanceTool(ABC):
    """Base for tools backed by the financial data API.

    Subclasses set ``name``, ``description`` and ``input_model`` and
    implement :meth:`fetch`. Implements the :class:`Tool` protocol.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    input_model: ClassVar[type[BaseModel]]

    def __init__(self, client: FinancialDataClient) -> None:
        self._client = client

    @property
    def parameters_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()

    def validate(self, arguments: dict[str, Any]) -> Any:
        """Validate raw arguments against ``input_model``.

        Raises:
            SchemaViolationError: If required fields are missing,
                enumerated values are out of range, or types mismatch.
        """
        try:
            return self.input_model.model_validate(arguments)
        except ValidationError as e:
            raise SchemaViolationError(self.name, _format_validation_error(e)) from e

    async def execute(self, **kwargs: Any) -> str:
        params = self.validate(kwargs)
        envelope = await self.fetch(params)
        return envelope.to_json()

    @abstractmethod
    async def fetch(self, params: Any) -> Envelope:
        """Call the upstream endpoint(s) for validated *params*."""

    async def fetch_labeled(
        self, requests: dict[str, tuple[str, dict[str, Any]]]
    ) -> Envelope:
        """Issue ``{label: (path, params)}`` requests concurrently.

        Payloads land under their label; source URLs keep label order.
        """
        labels = list(requests)
        # wait for every request so none outlives the shared client
        responses = await asyncio.gather(
            *(self._client.get(path, query) for path, query in requests.values()),
            return_exceptions=True,
        )
        for r in responses:
            if isinstance(r, BaseException):
                raise r
        return Envelope(
            data={label: r.data for label, r in zip(labels, responses, strict=True)},
            source_urls=[r.url for r in responses],
        )
