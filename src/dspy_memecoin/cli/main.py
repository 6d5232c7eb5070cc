"""Command-line interface for meme generation and coin eligibility."""

import json
from pathlib import Path
from typing import Iterable, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..agents.lm import ensure_dspy_configured
from ..api.dependencies import Services, build_services
from ..config.config import settings
from ..exceptions.base import MemeCoinError
from ..models.meme import Meme
from ..services.catalog import default_catalog
from ..utils.logging import setup_logging

app = typer.Typer(
    name="memecoin",
    help="Generate memes with DSPy and track which ones can become coins",
)
console = Console()


def get_services(database_url: Optional[str] = None) -> Services:
    """Configure logging and DSPy, then wire the services."""
    setup_logging(settings.log_level, json_format=settings.log_json, log_file=settings.log_file)
    ensure_dspy_configured()
    return build_services(database_url)


def display_memes(memes: Iterable[Meme], title: str) -> None:
    """Display memes as a table."""
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Template", style="magenta")
    table.add_column("Top", style="green")
    table.add_column("Bottom", style="green")
    table.add_column("Score", justify="right")
    table.add_column("State", style="yellow")

    for meme in memes:
        table.add_row(
            meme.id,
            meme.template_name,
            meme.top_text or "",
            meme.bottom_text or "",
            str(meme.score),
            meme.state.value,
        )

    console.print(table)


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="What the meme is about"),
    count: int = typer.Option(1, "--count", "-n", min=1, max=10, help="Number of memes"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Template category"),
    language: str = typer.Option("en", "--language", "-l", help="Caption language"),
    ai_selection: bool = typer.Option(
        False, "--ai-selection", help="Ask the classifier for every meme instead of rotating by index"
    ),
    database_url: Optional[str] = typer.Option(None, "--db", help="State database URL"),
) -> None:
    """Generate one or more memes for a prompt."""
    try:
        services = get_services(database_url)
        memes = services.generator.generate_batch(
            prompt,
            count,
            category=category,
            language=language,
            session_id="cli",
            deterministic=not ai_selection,
        )
        display_memes(memes, title=f"Generated memes for: {prompt}")
    except MemeCoinError as e:
        console.print(f"[red]Error generating meme: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def templates(
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category tag"),
) -> None:
    """List the template catalog."""
    items = default_catalog.by_category(category) if category else default_catalog.all()
    table = Table(title="Meme templates")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Categories")
    table.add_column("Slots", style="yellow")

    for template in items:
        table.add_row(
            template.id,
            template.name,
            ", ".join(template.categories),
            ", ".join(name for name, slot in template.text_slots.items() if slot is not None),
        )

    console.print(table)


@app.command()
def top(
    limit: int = typer.Option(10, "--limit", "-l", min=1, help="Number of memes to show"),
    database_url: Optional[str] = typer.Option(None, "--db", help="State database URL"),
) -> None:
    """Show the memes with the highest engagement score."""
    services = get_services(database_url)
    display_memes(services.store.top_memes(limit), title="Top memes")


@app.command()
def eligible(
    database_url: Optional[str] = typer.Option(None, "--db", help="State database URL"),
) -> None:
    """Show memes that can become coins."""
    services = get_services(database_url)
    memes = services.store.eligible_memes()
    if not memes:
        console.print("[yellow]No memes are eligible for coin creation yet[/yellow]")
        return
    display_memes(memes, title="Eligible for coin creation")


@app.command()
def viral(
    meme_id: str = typer.Argument(..., help="Meme ID"),
    database_url: Optional[str] = typer.Option(None, "--db", help="State database URL"),
) -> None:
    """Simulate a burst of viral engagement on a meme."""
    services = get_services(database_url)
    meme = services.tracker.simulate_viral_growth(meme_id)
    if meme is None:
        console.print(f"[red]Meme not found: {meme_id}[/red]")
        raise typer.Exit(1)
    display_memes([meme], title="After viral growth")


@app.command()
def export(
    output: Path = typer.Option(Path("memecoin-export.json"), "--output", "-o", help="Output file"),
    database_url: Optional[str] = typer.Option(None, "--db", help="State database URL"),
) -> None:
    """Export memes, coins and preferences to JSON."""
    services = get_services(database_url)
    output.write_text(json.dumps(services.store.export_data(), indent=2), encoding="utf-8")
    console.print(f"[green]Exported state to {output}[/green]")


@app.command(name="import")
def import_state(
    source: Path = typer.Argument(..., exists=True, readable=True, help="Export file"),
    database_url: Optional[str] = typer.Option(None, "--db", help="State database URL"),
) -> None:
    """Import memes, coins and preferences from an export file."""
    services = get_services(database_url)
    if not services.store.import_data(source.read_text(encoding="utf-8")):
        console.print("[red]Import failed[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Imported {len(services.store)} memes[/green]")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("dspy_memecoin.api.main:app", host=host, port=port)


def main() -> None:
    """Entry point for the CLI application."""
    load_dotenv()
    app()
