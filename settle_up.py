"""Mini README: Command line entry point for Tripsplit.

This script exposes a Typer CLI with three commands:
    * serve - start the FastAPI settlement service with uvicorn.
    * summarise - print balances and recommended payments for a JSON trip file.
    * currencies - list the configured currencies.

Trip files hold ``participants`` (or ``travelers``) and ``transactions``
lists using the same record shapes the web API accepts.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
import uvicorn

from tripsplit.configuration import get_currency_table, get_settings
from tripsplit.ingestion import InvalidTransactionError, normalise_snapshot
from tripsplit.logging_utils import configure_root_logger
from tripsplit.settlement import summarise_trip

cli = typer.Typer(help="Work out who owes whom after a shared trip.")


@cli.command()
def serve(
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
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 wildcard, so point people at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Tripsplit on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "tripsplit.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summarise(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Trip JSON file."),
    as_json: bool = typer.Option(False, "--json", help="Print the summary as JSON."),
) -> None:
    """Print balances and recommended payments for a trip file."""

    configure_root_logger(get_settings().log_level)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise InvalidTransactionError("expected an object with participants and transactions")
        snapshot = normalise_snapshot(
            data.get("participants", data.get("travelers", [])),
            data.get("transactions", []),
        )
    except (json.JSONDecodeError, InvalidTransactionError) as error:
        typer.echo(f"Cannot read {path}: {error}", err=True)
        raise typer.Exit(code=1) from error

    table = get_currency_table()
    summary = summarise_trip(snapshot.participants, snapshot.transactions, table)
    names = snapshot.names
    if as_json:
        typer.echo(json.dumps(summary.as_dict(names), indent=2, ensure_ascii=False))
        return

    if not summary.active_currencies:
        typer.echo("No expenses recorded yet.")
        return

    for code in summary.active_currencies:
        currency = table.get(code)
        total = summary.sheet.total_expense_by_currency[code]
        typer.echo(f"== {currency.name} ({code}) - total spent {currency.format(total)}")
        for participant_id, per_currency in summary.sheet.per_participant.items():
            figures = per_currency[code]
            typer.echo(
                f"  {names[participant_id]:<16} paid {currency.format(figures.paid):>14}"
                f"  share {currency.format(figures.share):>14}"
                f"  balance {currency.format(figures.balance):>14}"
            )
        transfers = summary.plan[code]
        if not transfers:
            typer.echo("  Accounts already settled.")
        for transfer in transfers:
            typer.echo(
                f"  {names[transfer.from_id]} pays {names[transfer.to_id]}"
                f" {currency.format(transfer.amount)}"
            )


@cli.command()
def currencies() -> None:
    """List the configured currencies."""

    for currency in get_currency_table():
        typer.echo(f"{currency.code}  {currency.symbol}  {currency.name}")


if __name__ == "__main__":
    cli()
