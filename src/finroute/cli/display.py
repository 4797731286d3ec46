"""Rich rendering of search responses, tool listings and models."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from finroute.routing.executor import ERRORS_KEY

if TYPE_CHECKING:
    from collections.abc import Sequence

    from finroute.providers.base import ModelInfo
    from finroute.routing.executor import AggregatedResponse

_MAX_JSON_CHARS = 4000


def _truncate_json(payload: Any, limit: int = _MAX_JSON_CHARS) -> str:
    text = json.dumps(payload, indent=2, default=str)
    if len(text) <= limit:
        return text
    # keep the output valid JSON for the highlighter
    return json.dumps(text[:limit].rstrip() + " ...")


class SearchDisplay:
    """Renders finroute output.

    Accepts an optional :class:`~rich.console.Console` for dependency
    injection in tests.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def show_response(self, response: AggregatedResponse) -> None:
        if response.error is not None:
            self._console.print(
                Panel(
                    response.error,
                    title="[bold red]Error[/bold red]",
                    border_style="red",
                )
            )
            return

        for key, payload in response.data.items():
            if key == ERRORS_KEY:
                continue
            self._console.print(
                Panel(
                    JSON(_truncate_json(payload)),
                    title=f"[bold]{key}[/bold]",
                    border_style="cyan",
                )
            )

        errors = response.data.get(ERRORS_KEY, [])
        if errors:
            table = Table(title="Failed tool calls", title_style="bold red")
            table.add_column("Tool", style="bold")
            table.add_column("Arguments")
            table.add_column("Error", style="red")
            for err in errors:
                table.add_row(
                    err["tool"], json.dumps(err["args"], default=str), err["error"]
                )
            self._console.print(table)

        if response.source_urls:
            self._console.print("[dim]Sources:[/dim]")
            for url in response.source_urls:
                self._console.print(f"  [link={url}]{url}[/link]")

    def show_tools(self, tools: Sequence[tuple[str, str]]) -> None:
        table = Table(title="Available tools")
        table.add_column("Name", style="bold cyan", no_wrap=True)
        table.add_column("Description")
        for name, description in tools:
            table.add_row(name, description)
        self._console.print(table)

    def show_models(self, models: Sequence[ModelInfo]) -> None:
        if not models:
            self._console.print("No models available. Check provider API keys.")
            return
        table = Table(title="Routing models")
        table.add_column("Model ref", style="bold")
        table.add_column("Name")
        table.add_column("Context", justify="right")
        for m in models:
            table.add_row(m.model_ref, m.display_name, f"{m.context_window:,}")
        self._console.print(table)
