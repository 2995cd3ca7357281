"""msprates CLI using Typer."""

from __future__ import annotations

import asyncio
import json

import pandas as pd
import typer

from msprates import __version__
from msprates.cache.policies import format_ttl
from msprates.config import get_config
from msprates.export import history_to_dataframe, rates_to_dataframe
from msprates.msp import api
from msprates.utils.logging import configure_logging

app = typer.Typer(
    name="msprates",
    help="Minimum Support Prices of Indian crops",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"msprates version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    _version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log pipeline events to stderr"),
) -> None:
    """msprates - Indian crop MSPs."""
    configure_logging(level="DEBUG" if verbose else get_config().log_level, json_format=False)


def _echo_frame(df: pd.DataFrame, output_format: str) -> None:
    if output_format == "json":
        typer.echo(df.to_json(orient="records", indent=2, force_ascii=False))
    elif output_format == "csv":
        typer.echo(df.to_csv(index=False))
    else:
        typer.echo(df.to_string(index=False))


@app.command("rates")
def rates(
    category: str | None = typer.Option(
        None, "--category", "-c", help="Category: kharif, rabi, other"
    ),
    output_format: str = typer.Option("table", "--format", "-o", help="Format: table, csv, json"),
) -> None:
    """Show current MSP rates."""
    if category:
        result = asyncio.run(api.get_rates_by_category(category))
    else:
        result = asyncio.run(api.get_rates())

    if not result:
        typer.echo("No data found")
        return

    _echo_frame(rates_to_dataframe(result), output_format)


@app.command("history")
def history(
    crop_id: str = typer.Argument(..., help="Crop id (e.g. k1, r1)"),
    output_format: str = typer.Option("table", "--format", "-o", help="Format: table, csv, json"),
) -> None:
    """Show the five-season MSP history of a crop."""
    points = asyncio.run(api.get_history(crop_id))

    if not points:
        typer.echo(f"Unknown crop id: {crop_id}", err=True)
        raise typer.Exit(1)

    _echo_frame(history_to_dataframe(points), output_format)


cache_app = typer.Typer(
    help="In-memory cache management. The cache lives only as long as the current process."
)
app.add_typer(cache_app, name="cache")


@cache_app.command("status")
def cache_status(
    output: str = typer.Option("text", "--output", "-o", help="Format: text, json"),
    fetch: bool = typer.Option(
        False, "--fetch", help="Fetch the current rates first, filling the cache of this process"
    ),
) -> None:
    """
    Show cache status.

    Each CLI invocation starts with an empty cache; use --fetch to report the
    cache right after a fetch.
    """
    if fetch:
        asyncio.run(api.get_rates())

    status = api.get_default_service().cache.status()

    if output == "json":
        typer.echo(json.dumps(status, indent=2))
        return

    typer.echo(f"Cached:  {'yes' if status['cached'] else 'no'}")
    typer.echo(f"Records: {status['records']}")
    typer.echo(f"TTL:     {format_ttl(status['ttl_seconds'])}")


@cache_app.command("clear")
def cache_clear() -> None:
    """Clear the in-memory cache of this process."""
    api.clear_cache()
    typer.echo("Cache cleared")


if __name__ == "__main__":
    app()
