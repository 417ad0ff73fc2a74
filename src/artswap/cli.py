"""CLI for the art swap matcher."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from artswap import __version__
from artswap.core.config import MatcherConfig, load_config
from artswap.core.errors import ConfigurationError, MatchingError
from artswap.services.events import EventService
from artswap.services.matching import MatchRunResult, MatchService
from artswap.services.storage import SwapStore, load_fixture

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

app = typer.Typer(
    name="artswap",
    help="Art Swap Matcher - pair mutually liked artworks within swap events",
    add_completion=False,
)
console = Console()

ConfigOption = Annotated[
    Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
]
DatabaseOption = Annotated[
    str | None, typer.Option("--database", "-d", help="Database URL override")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"artswap v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Art Swap Matcher CLI."""


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(config_path: Path | None, database: str | None) -> MatcherConfig:
    try:
        config = load_config(config_path) if config_path else MatcherConfig()
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1) from e
    if database is not None:
        config.database.url = database
    return config


def _run_with_store(config: MatcherConfig, fn, verbose: bool):
    """Open a store, await ``fn(store)``, and map errors to exit code 1."""

    async def _run():
        store = SwapStore(config)
        try:
            return await fn(store)
        finally:
            await store.close()

    try:
        return asyncio.run(_run())
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except MatchingError as e:
        console.print(f"[red]Matching error:[/red] {e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1) from e


def _print_result(result: MatchRunResult) -> None:
    table = Table(title=f"Matches for event {result.event_id}")
    table.add_column("Artwork 1")
    table.add_column("Artwork 2")
    table.add_column("Pref 1", justify="right")
    table.add_column("Pref 2", justify="right")
    table.add_column("Score", justify="right")
    for row in result.to_dicts():
        table.add_row(
            row["artwork1_id"],
            row["artwork2_id"],
            str(row["artist1_preference_order"]),
            str(row["artist2_preference_order"]),
            str(row["combined_score"]),
        )
    console.print(table)
    console.print(
        f"  Created: {len(result.created)}  Existing: {len(result.existing)}"
        f"  Failed: {len(result.failures)}  Skipped votes: {result.skipped_votes}"
    )
    for failure in result.failures:
        console.print(
            f"[yellow]Warning:[/yellow] {failure.pair.artwork1_id} <-> "
            f"{failure.pair.artwork2_id}: {failure.error}"
        )


@app.command()
def match(
    event_id: Annotated[str, typer.Argument(help="Event identifier")],
    config_path: ConfigOption = None,
    database: DatabaseOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print pairs as JSON")] = False,
    verbose: VerboseOption = False,
) -> None:
    """Calculate and persist the matches of an event.

    Args:
        event_id: Event to match.
        config_path: Optional YAML configuration file.
        database: Database URL override.
        as_json: Print resolved pairs as JSON instead of a table.
        verbose: Enable verbose logging.
    """
    _configure_logging(verbose)
    config = _load_config(config_path, database)

    async def _match(store: SwapStore) -> MatchRunResult:
        return await MatchService(config, store).calculate_matches(event_id)

    result = _run_with_store(config, _match, verbose)
    if as_json:
        console.print_json(json.dumps(result.to_dicts()))
    else:
        _print_result(result)


@app.command()
def close(
    event_id: Annotated[str, typer.Argument(help="Event identifier")],
    config_path: ConfigOption = None,
    database: DatabaseOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Close voting on an event and calculate its matches."""
    _configure_logging(verbose)
    config = _load_config(config_path, database)

    async def _close(store: SwapStore):
        return await EventService(config, store).close_event(event_id)

    summary = _run_with_store(config, _close, verbose)
    console.print(f"[bold green]Event {event_id} closed.[/bold green]")
    console.print(f"  Matches created: {summary.matches_created}")
    console.print(f"  Matches already present: {summary.matches_existing}")
    for warning in summary.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def show(
    event_id: Annotated[str, typer.Argument(help="Event identifier")],
    config_path: ConfigOption = None,
    database: DatabaseOption = None,
) -> None:
    """List the persisted matches of an event."""
    config = _load_config(config_path, database)

    async def _show(store: SwapStore):
        return await store.matches.list_matches(event_id)

    matches = _run_with_store(config, _show, verbose=False)
    table = Table(title=f"Persisted matches for event {event_id}")
    table.add_column("Match")
    table.add_column("Artwork 1")
    table.add_column("Artwork 2")
    table.add_column("Status")
    for m in matches:
        table.add_row(m.id, m.artwork1_id, m.artwork2_id, m.status)
    console.print(table)


@app.command()
def seed(
    fixture_path: Annotated[Path, typer.Argument(help="Path to fixture YAML file")],
    config_path: ConfigOption = None,
    database: DatabaseOption = None,
) -> None:
    """Load artists, events, artworks and votes from a YAML fixture."""
    config = _load_config(config_path, database)

    async def _seed(store: SwapStore) -> int:
        records = load_fixture(fixture_path).to_records()
        await store.add_all(records)
        return len(records)

    count = _run_with_store(config, _seed, verbose=False)
    console.print(f"[green]Seeded {count} records.[/green]")


@app.command()
def validate(
    config_path: Annotated[Path, typer.Argument(help="Path to config YAML file")],
) -> None:
    """Validate a configuration file without running."""
    try:
        config = load_config(config_path)
        console.print("[green]Configuration is valid![/green]")
        console.print(f"  Database: {config.get_database_url()}")
        console.print(f"  Match status: {config.matching.match_status}")
        console.print(f"  Required phases: {', '.join(config.matching.required_phases) or '-'}")
        console.print(f"  Notify artists: {config.matching.notify_artists}")

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigurationError as e:
        console.print(f"[red]{e}")
        raise typer.Exit(1) from e
    except Exception as e:
        console.print(f"[red]Validation error:[/red] {e}")
        raise typer.Exit(1) from e


@app.command()
def info() -> None:
    """Show tool information and example commands."""
    console.print("[bold]Art Swap Matcher[/bold]")
    console.print(f"Version: {__version__}\n")

    console.print("[bold]Example Commands:[/bold]")
    console.print("  # Load demo data")
    console.print("  uv run artswap seed fixture.yaml\n")

    console.print("  # Close voting and match")
    console.print("  uv run artswap close <event-id>\n")

    console.print("  # Re-run matching (idempotent)")
    console.print("  uv run artswap match <event-id> --json\n")

    console.print("  # Inspect persisted matches")
    console.print("  uv run artswap show <event-id>\n")

    console.print("  # Validate config")
    console.print("  uv run artswap validate config.yaml")


if __name__ == "__main__":
    app()
