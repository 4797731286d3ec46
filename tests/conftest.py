"""Shared test fixtures for finroute."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.fixtures.api import FakeApi

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from finroute.finance.api import FinancialDataClient


_ENV_VARS = ("FINROUTE_CONFIG", "ANTHROPIC_API_KEY", "OPENAI_API_KEY", "FMP_API_KEY")


@pytest.fixture
def fake_api() -> FakeApi:
    """Empty fake upstream; tests add routes before calling tools."""
    return FakeApi()


@pytest.fixture
async def api_client(fake_api: FakeApi) -> AsyncIterator[FinancialDataClient]:
    """FinancialDataClient wired to ``fake_api``."""
    client = fake_api.client()
    yield client
    await client.aclose()


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: object) -> None:
    """Keep user/project config files and real API keys out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)  # type: ignore[arg-type]
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
