"""Skill document commands."""

from __future__ import annotations

import typer
from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from toolhub.core.console import console
from toolhub.skills.injection import inject_skills

app = typer.Typer(help="Browse, select and inject skill documents.")


@app.command("index")
def index(ctx: typer.Context) -> None:
    """List skills grouped by category."""
    store = ctx.obj.hub.skill_store
    if not store.exists():
        console.print(f"[red]Skills directory not found: {escape(str(store.root))}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Skills in {store.root}", box=box.SIMPLE_HEAVY, expand=True)
    table.add_column("Category", style="magenta", no_wrap=True)
    table.add_column("Skills", style="cyan")
    for category, names in store.index().items():
        table.add_row(category, ", ".join(names) or "-")
    console.print(table)


@app.command("select")
def select(
    ctx: typer.Context,
    product: str = typer.Argument(..., help="Product identifier, e.g. wowtruck."),
    query: str = typer.Option("", "--query", "-q", help="User query used for keyword detection."),
    skill: list[str] = typer.Option(None, "--skill", "-s", help="Explicit skill name (repeatable)."),
) -> None:
    """Show which skills would be chosen, without loading them."""
    selector = ctx.obj.hub.skill_selector
    chosen = selector.select_skills(product, query or None, skill or None)
    detected = selector.detect(query) if query else []

    table = Table(title=f"Selection for {product}", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Skill", style="cyan")
    table.add_column("Source", style="dim")
    for position, name in enumerate(chosen, start=1):
        source = "explicit" if skill else ("query" if name in detected else "default")
        table.add_row(str(position), name, source)
    console.print(table)


@app.command("load")
def load(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name."),
    category: str | None = typer.Option(None, "--category", "-c", help="Category to look in."),
) -> None:
    """Print a whole skill document."""
    loader = ctx.obj.hub.skill_loader
    content = loader.load_from_category(category, name) if category else loader.load(name)
    if content is None:
        console.print(f"[red]Skill not found: {escape(name)}[/red]")
        raise typer.Exit(code=1)
    console.print(
        Panel(
            Text(content.content),
            title=f"{content.category}/{content.name} (~{content.approx_tokens} tokens)",
        )
    )


@app.command("inject")
def inject(
    ctx: typer.Context,
    product: str | None = typer.Argument(None, help="Product identifier; defaults to config."),
    query: str = typer.Option("", "--query", "-q", help="User query used for keyword detection."),
    skill: list[str] = typer.Option(None, "--skill", "-s", help="Explicit skill name (repeatable)."),
    max_tokens: int | None = typer.Option(None, "--max-tokens", "-m", min=0, help="Token ceiling."),
) -> None:
    """Build the budgeted skills system prompt."""
    hub = ctx.obj.hub
    skills_config = hub.config.skills
    injection = inject_skills(
        hub.skill_selector,
        hub.skill_loader,
        product or skills_config.default_product,
        query=query or None,
        explicit_names=skill or None,
        max_tokens=skills_config.max_tokens if max_tokens is None else max_tokens,
    )
    if not injection.system_prompt:
        console.print(Panel("No skills fit the budget.", style="yellow"))
        return
    console.print(Text(injection.system_prompt))
    console.print(
        f"[dim]{len(injection.skills)} skills, ~{injection.tokens_added} tokens: "
        f"{', '.join(injection.skills)}[/dim]"
    )
