"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same tables and panels.
"""

from __future__ import annotations

from typing import Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import FetchOutcome


def build_run_header(*, stores: Sequence[str], id_min: int, id_max: int) -> Panel:
    """Header describing what this run resolves against.

    Skipped in JSON mode so stdout stays machine readable.
    """

    body = Text()
    body.append("Stores: ", style="bold")
    body.append(", ".join(stores) or "-", style="cyan")
    body.append("   Valid IDs: ", style="bold")
    body.append(f"{id_min}-{id_max}", style="cyan")
    return Panel(body, title=Text("user-agg", style="bold cyan"), border_style="cyan")


def build_outcomes_table(outcomes: Sequence[FetchOutcome]) -> Table:
    """One row per requested id: the merged record or the classified error."""

    table = Table(title="User Records")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Username", style="green")
    table.add_column("Company", style="white")
    table.add_column("Secure fields", style="magenta")
    table.add_column("Error", style="red")

    for outcome in outcomes:
        if outcome.record is not None:
            record = outcome.record
            secure = ", ".join(f"{key}={value}" for key, value in record.secure_fields().items())
            table.add_row(
                repr(outcome.user_id),
                "OK",
                str(record.username),
                str(record.company),
                secure,
                "",
            )
        else:
            kind = outcome.error_kind.value if outcome.error_kind else "unclassified"
            table.add_row(repr(outcome.user_id), kind.upper(), "", "", "", outcome.error or "")
    return table


def build_bench_panel(*, user_id: object, iterations: int, elapsed_ms: float, failures: int) -> Panel:
    body = Text()
    body.append(f"ID: {user_id}\n")
    body.append(f"Iterations: {iterations}\n")
    body.append(f"Execution time: {elapsed_ms:.1f}ms\n")
    if iterations:
        body.append(f"Per call: {elapsed_ms / iterations:.2f}ms\n", style="dim")
    if failures:
        body.append(f"Failures: {failures}", style="red")
    return Panel(body, title=Text("Benchmark", style="bold yellow"), border_style="yellow")
