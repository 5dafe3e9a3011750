"""Tool catalog commands.

Provides CLI commands for inspecting and invoking registered tools:
    - Listing and searching the catalog
    - Showing a tool's function-calling schema
    - Counting tools per category
    - Executing one tool or a JSON batch of calls
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from toolhub.capabilities.models import ToolCall, ToolResult
from toolhub.core.console import console
from toolhub.core.result import ToolNotFoundError

app = typer.Typer(help="Inspect and invoke catalog tools.")


def _parse_params(raw_json: str | None, pairs: list[str] | None) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if raw_json:
        try:
            loaded = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            console.print(f"[red]Invalid --json payload: {escape(str(exc))}[/red]")
            raise typer.Exit(code=2)
        if not isinstance(loaded, dict):
            console.print("[red]--json must be a JSON object.[/red]")
            raise typer.Exit(code=2)
        params.update(loaded)
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            console.print(f"[red]Expected key=value, got {escape(repr(pair))}[/red]")
            raise typer.Exit(code=2)
        try:
            params[key] = json.loads(value)
        except json.JSONDecodeError:
            params[key] = value
    return params


def _render_result(result: ToolResult) -> None:
    style = "green" if result.success else "red"
    title = f"{result.metadata.get('tool', 'tool')} ({result.metadata.get('duration_ms', 0)} ms)"
    if result.success:
        body = json.dumps(result.data, indent=2, default=str, ensure_ascii=False)
    else:
        body = result.error or "failed"
    console.print(Panel(Text(body), title=title, border_style=style))


@app.command("list")
def list_tools(
    ctx: typer.Context,
    category: str | None = typer.Option(None, "--category", "-c", help="Only show one category."),
    query: str | None = typer.Option(None, "--query", "-q", help="Substring over names and descriptions."),
) -> None:
    """List registered tools."""
    hub = ctx.obj.hub
    registry = hub.registry
    if query:
        handles = registry.search(query)
    elif category:
        handles = registry.get_by_category(category)
    else:
        handles = registry.get_all()
    if category and query:
        handles = [h for h in handles if registry.category_of(h.definition.name) == category]

    if not handles:
        console.print(Panel("No matching tools.", style="yellow"))
        return

    table = Table(
        title=f"{len(handles)} tools (tier: {hub.catalog.tier})", box=box.SIMPLE_HEAVY, expand=True
    )
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Category", style="magenta", no_wrap=True)
    table.add_column("Description", style="white")
    for handle in handles:
        definition = handle.definition
        table.add_row(
            definition.name,
            registry.category_of(definition.name) or definition.category,
            definition.description,
        )
    console.print(table)


@app.command("show")
def show_tool(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exact tool name."),
) -> None:
    """Show a tool's function-calling schema."""
    try:
        handle = ctx.obj.hub.registry.require(name)
    except ToolNotFoundError as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1)
    console.print_json(data=handle.definition.function_schema())


@app.command("categories")
def categories(ctx: typer.Context) -> None:
    """Count tools per category."""
    counts = ctx.obj.hub.registry.category_counts()
    table = Table(title="Categories", box=box.SIMPLE)
    table.add_column("Category", style="magenta")
    table.add_column("Tools", justify="right")
    for name, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        table.add_row(name, str(count))
    console.print(table)


@app.command("exec")
def exec_tool(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Tool to invoke."),
    param: list[str] = typer.Option(None, "--param", "-p", help="Parameter as key=value (repeatable)."),
    raw_json: str | None = typer.Option(None, "--json", help="Parameters as a JSON object."),
) -> None:
    """Execute one tool and print its result."""
    params = _parse_params(raw_json, param)
    result = asyncio.run(ctx.obj.hub.orchestrator.execute_one(name, params))
    _render_result(result)
    if not result.success:
        raise typer.Exit(code=1)


@app.command("batch")
def batch(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON file with a list of {tool, params}."),
) -> None:
    """Execute a batch of calls concurrently; results keep the file's order."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        calls = [ToolCall.model_validate(item) for item in payload]
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError, ValidationError) as exc:
        console.print(f"[red]Invalid batch file {escape(str(path))}: {escape(str(exc))}[/red]")
        raise typer.Exit(code=2)

    results = asyncio.run(ctx.obj.hub.orchestrator.execute_many(calls))

    table = Table(title=f"Batch of {len(results)}", box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("#", justify="right")
    table.add_column("Tool", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Result", style="white")
    for index, (call, result) in enumerate(zip(calls, results, strict=True)):
        status = "[green]ok[/green]" if result.success else "[red]failed[/red]"
        detail = json.dumps(result.data, default=str) if result.success else result.error
        table.add_row(str(index), call.tool, status, Text(detail or ""))
    console.print(table)

    if not all(result.success for result in results):
        raise typer.Exit(code=1)
