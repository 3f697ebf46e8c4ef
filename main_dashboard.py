"""Mini README: Entry point CLI for the fintrack dashboard.

This script exposes a Typer CLI that starts the local FastAPI dashboard with
configurable host, port and production flags, and prints group settlements
straight to the terminal. Settings fall back to ``FINTRACK_`` environment
variables when options are omitted.
"""

from __future__ import annotations

import typer
import uvicorn

from fintrack.configuration import get_settings
from fintrack.formatting import format_currency
from fintrack.groups import settle_group
from fintrack.logging_utils import configure_root_logger
from fintrack.repositories import InMemoryGroupRepository

cli = typer.Typer(help="Launch the fintrack dashboard and inspect group settlements.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger()

    # Browsers cannot open the 0.0.0.0 wildcard, so point them at loopback.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting fintrack on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "fintrack.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def settlement(group_id: str = typer.Argument(..., help="Identifier of the demo group.")) -> None:
    """Print who owes whom for one of the demo groups."""

    settings = get_settings()
    repository = InMemoryGroupRepository()
    try:
        group = repository.get_group(group_id)
    except KeyError as error:
        typer.echo(str(error).strip("'\""), err=True)
        raise typer.Exit(code=1) from error

    result = settle_group(group)
    typer.echo(f"{group.name} - {group.description}")
    for member in result.members:
        typer.echo(f"  {member.member.name}: {member.describe(settings.currency_symbol)}")
    stats = result.statistics
    typer.echo(f"Total amount: {format_currency(stats.total_amount, settings.currency_symbol)}")
    typer.echo(f"Per person: {format_currency(stats.per_person_share, settings.currency_symbol)}")
    largest = stats.most_expensive_expense
    if largest is None:
        typer.echo("Most expensive item: No expenses")
    else:
        typer.echo(
            "Most expensive item: "
            f"{largest.description} ({format_currency(largest.amount, settings.currency_symbol)})"
        )


if __name__ == "__main__":
    cli()
