"""Typer CLI: drive the aggregator against the simulated sources."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console

from adapters.json_exporter import dumps_outcomes, export_outcomes_json
from adapters.simulated_sources import build_default_aggregator
from cli.ui_components import build_bench_panel, build_outcomes_table, build_run_header
from core.config import AppSettings
from core.log import configure_logging

app = typer.Typer(no_args_is_help=True, help="Aggregate user records from the simulated stores.")

_console = Console()


def parse_cli_id(raw: str) -> Any:
    """Turn a CLI token into the value handed to `fetch`.

    Integers and floats are converted; anything else stays a string so the
    aggregator rejects it with a validation error.
    """

    for convert in (int, float):
        try:
            return convert(raw)
        except ValueError:
            continue
    return raw


@app.command()
def fetch(
    ids: List[str] = typer.Argument(..., help="Identifiers to aggregate (run concurrently)."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the JSON to this file."),
    no_header: bool = typer.Option(False, "--no-header", help="Skip the stores/range header."),
) -> None:
    """Fetch one composite record per id and show records and errors."""

    settings = AppSettings()
    configure_logging(settings.log_level)
    aggregator = build_default_aggregator(settings)

    outcomes = asyncio.run(aggregator.fetch_many(parse_cli_id(raw) for raw in ids))

    if as_json:
        typer.echo(dumps_outcomes(outcomes))
    else:
        if not no_header:
            _console.print(
                build_run_header(
                    stores=aggregator.stores.names,
                    id_min=settings.id_min,
                    id_max=settings.id_max,
                )
            )
        _console.print(build_outcomes_table(outcomes))

    if output is not None:
        path = export_outcomes_json(outcomes=outcomes, output_path=output)
        if not as_json:
            _console.print(f"[green]Saved JSON to:[/green] {path}")

    if not all(outcome.ok for outcome in outcomes):
        raise typer.Exit(code=1)


async def _bench(aggregator: Any, user_id: Any, iterations: int) -> tuple[float, int]:
    failures = 0
    start = time.perf_counter()
    for _ in range(iterations):
        try:
            await aggregator.fetch(user_id)
        except Exception:
            failures += 1
    elapsed_ms = (time.perf_counter() - start) * 1000
    return elapsed_ms, failures


@app.command()
def bench(
    user_id: str = typer.Option("5", "--id", help="Identifier fetched on every iteration."),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-n", min=1, help="Sequential calls to run."),
) -> None:
    """Time sequential `fetch` calls for a single id."""

    settings = AppSettings()
    configure_logging(settings.log_level)
    aggregator = build_default_aggregator(settings)
    count = iterations or settings.bench_iterations
    value = parse_cli_id(user_id)

    elapsed_ms, failures = asyncio.run(_bench(aggregator, value, count))
    _console.print(
        build_bench_panel(user_id=value, iterations=count, elapsed_ms=elapsed_ms, failures=failures)
    )


def run() -> None:
    app()


if __name__ == "__main__":
    run()
