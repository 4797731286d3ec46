"""Main CLI application.

Click commands for finroute: search, call, tools, models.
"""

from __future__ import annotations

import asyncio
import json as json_mod
import sys
from typing import TYPE_CHECKING, Any

import click

from finroute import __version__
from finroute.config.loader import load_config
from finroute.core.errors import ConfigError, FinrouteError
from finroute.core.logging import configure_logging

if TYPE_CHECKING:
    from finroute.config.schema import FinrouteConfig
    from finroute.providers.base import ModelInfo
    from finroute.providers.manager import ProviderManager
    from finroute.routing.executor import AggregatedResponse


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> FinrouteConfig:
    """Load config with user-friendly error handling."""
    try:
        config = load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy
    configure_logging(config.logging)
    return config


async def _setup_providers(config: FinrouteConfig) -> ProviderManager:
    """Instantiate and register providers that have API keys."""
    from finroute.providers.manager import ProviderManager

    pm = ProviderManager()

    for name, prov_config in config.providers.items():
        if not prov_config.enabled or prov_config.api_key is None:
            continue

        if name == "anthropic":
            from finroute.providers.anthropic import AnthropicProvider

            await pm.register(AnthropicProvider(api_key=prov_config.api_key))
        elif name == "openai":
            from finroute.providers.openai import OpenAIProvider

            await pm.register(
                OpenAIProvider(
                    api_key=prov_config.api_key,
                    base_url=prov_config.base_url,
                )
            )

    return pm


def _render(response: AggregatedResponse, as_json: bool) -> None:
    if as_json:
        click.echo(response.to_json(indent=2))
    else:
        from finroute.cli.display import SearchDisplay

        SearchDisplay().show_response(response)
    if response.error is not None:
        sys.exit(1)


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="finroute")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """finroute - Ask financial data questions in plain language.

    Routes each question to the right data tools and merges the answers.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── search ───────────────────────────────────────────────────────


@cli.command()
@click.argument("query")
@click.option(
    "--model",
    default=None,
    help="Routing model (e.g. anthropic:claude-sonnet-4-6). Overrides config.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def search(ctx: click.Context, query: str, model: str | None, as_json: bool) -> None:
    """Answer QUERY using the financial data tools."""
    config = _load_config(ctx.obj["config_path"])
    if model is not None:
        config.router.model_ref = model

    try:
        response = asyncio.run(_search_async(query, config))
    except FinrouteError as e:
        _error(str(e))
        return  # unreachable

    _render(response, as_json)


async def _search_async(query: str, config: FinrouteConfig) -> AggregatedResponse:
    from finroute.finance import build_finance_registry, client_from_config
    from finroute.routing.router import LLMDecisionService, Router
    from finroute.routing.search import FinancialSearch

    pm = await _setup_providers(config)
    if len(pm) == 0:
        msg = "No providers available. Set ANTHROPIC_API_KEY or OPENAI_API_KEY."
        raise ConfigError(msg)
    provider, model_id = pm.get_provider(config.router.model_ref)

    async with client_from_config(config.api) as client:
        registry = build_finance_registry(client)
        decision = LLMDecisionService(
            provider,
            model_id,
            max_tokens=config.router.max_tokens,
            temperature=config.router.temperature,
        )
        finder = FinancialSearch(
            Router(decision, registry),
            registry,
            collision_policy=config.search.collision_policy,
        )
        return await finder.search(query)


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("tool")
@click.option(
    "--args",
    "args_json",
    default="{}",
    help='Tool arguments as a JSON object, e.g. \'{"ticker": "AAPL"}\'.',
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def call(ctx: click.Context, tool: str, args_json: str, as_json: bool) -> None:
    """Invoke TOOL directly, bypassing the routing model."""
    try:
        arguments = json_mod.loads(args_json)
    except json_mod.JSONDecodeError as e:
        _error(f"--args is not valid JSON: {e}")
        return  # unreachable
    if not isinstance(arguments, dict):
        _error("--args must be a JSON object")
        return  # unreachable

    config = _load_config(ctx.obj["config_path"])
    response = asyncio.run(_call_async(tool, arguments, config))
    _render(response, as_json)


async def _call_async(
    tool: str, arguments: dict[str, Any], config: FinrouteConfig
) -> AggregatedResponse:
    from finroute.finance import build_finance_registry, client_from_config
    from finroute.routing.executor import execute_calls, merge_results
    from finroute.tools.base import ToolCall

    async with client_from_config(config.api) as client:
        registry = build_finance_registry(client)
        tool_call = ToolCall(name=tool, arguments=arguments)
        results = await execute_calls(registry, [tool_call])
    return merge_results(results, collision_policy=config.search.collision_policy)


# ── tools ────────────────────────────────────────────────────────


@cli.command()
def tools() -> None:
    """List the financial data tools available for routing."""
    from finroute.cli.display import SearchDisplay
    from finroute.finance import FINANCE_TOOLS

    SearchDisplay().show_tools([(t.name, t.description) for t in FINANCE_TOOLS])


# ── models ───────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def models(ctx: click.Context) -> None:
    """List routing models from configured providers."""
    config = _load_config(ctx.obj["config_path"])
    model_list = asyncio.run(_models_async(config))

    from finroute.cli.display import SearchDisplay

    SearchDisplay().show_models(model_list)


async def _models_async(config: FinrouteConfig) -> list[ModelInfo]:
    pm = await _setup_providers(config)
    return pm.list_all_models()
