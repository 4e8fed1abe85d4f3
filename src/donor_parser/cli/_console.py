"""Rich consoles plus the record, trace and generic output helpers."""

import json as json_mod
from typing import Any, Dict, Iterable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from donor_parser.schemas.trace import TraceAction, TraceStep
from donor_parser.utils.date_parsing import format_date_for_display

# Status/progress to stderr so it doesn't pollute piped JSON output
console = Console(stderr=True)

# Data output to stdout (pipeable to jq)
stdout_console = Console()

# Wire names, in the column order of the record table
RECORD_COLUMNS = ["name", "bloodGroup", "phone", "date", "batch", "hospital", "hallName", "referrer", "confidence"]

_ACTION_STYLES = {
    TraceAction.MATCHED.value: "green",
    TraceAction.SKIPPED.value: "dim",
    TraceAction.REJECTED.value: "yellow",
    TraceAction.DEFAULTED.value: "cyan",
    TraceAction.DROPPED.value: "red",
}


def print_ok(msg: str) -> None:
    console.print(f"[green]✓[/green] {msg}")


def print_err(msg: str) -> None:
    console.print(f"[red]✗[/red] {msg}")


def print_warn(msg: str) -> None:
    console.print(f"[yellow]![/yellow] {msg}")


def confidence_style(confidence: float) -> str:
    """Green above the correctness threshold, yellow from 0.5, red below."""
    if confidence > 0.7:
        return "green"
    if confidence >= 0.5:
        return "yellow"
    return "red"


def output_result(data: dict, *, ctx: typer.Context, title: str = "") -> None:
    """Print result as JSON (stdout) or a Rich panel (stderr)."""
    if ctx.obj.get("json"):
        stdout_console.print_json(data=data)
        return
    formatted = json_mod.dumps(data, indent=2, ensure_ascii=False, default=str)
    if title:
        console.print(Panel(formatted, title=title, border_style="blue"))
    else:
        console.print(formatted)


def output_table(
    rows: List[Dict[str, Any]],
    *,
    ctx: typer.Context,
    title: str = "",
    columns: Optional[List[str]] = None,
) -> None:
    """Print rows as JSON array or Rich table."""
    if ctx.obj.get("json"):
        stdout_console.print_json(data=rows)
        return

    if not rows:
        console.print("[dim]No data[/dim]")
        return

    cols = columns or list(rows[0].keys())
    table = Table(title=title, show_lines=False)
    for col in cols:
        table.add_column(col)
    for row in rows:
        table.add_row(*[str(row.get(c, "")) for c in cols])
    console.print(table)


def output_records(rows: List[Dict[str, Any]], *, title: str) -> None:
    """Render wire-shaped records with readable dates and colored confidence."""
    if not rows:
        console.print("[dim]No records[/dim]")
        return

    table = Table(title=title, show_lines=False)
    for col in RECORD_COLUMNS:
        table.add_column(col, justify="right" if col == "confidence" else "left")
    for row in rows:
        cells = []
        for col in RECORD_COLUMNS:
            value = row.get(col, "")
            if col == "date" and value:
                cells.append(format_date_for_display(value))
            elif col == "confidence" and value != "":
                style = confidence_style(float(value))
                cells.append(f"[{style}]{float(value):.2f}[/{style}]")
            else:
                cells.append(escape(str(value)))
        table.add_row(*cells)
    console.print(table)


def output_trace(steps: Iterable[TraceStep]) -> None:
    """Render trace steps, one row per rule attempt."""
    table = Table(title="Trace", show_lines=False)
    for col in ("stage", "action", "rule", "value", "reasoning"):
        table.add_column(col)
    for step in steps:
        action = step.action.value if isinstance(step.action, TraceAction) else str(step.action)
        style = _ACTION_STYLES.get(action, "")
        table.add_row(
            step.stage,
            f"[{style}]{action}[/{style}]" if style else action,
            step.rule or "",
            escape(step.value or ""),
            escape(step.reasoning),
        )
    console.print(table)
