"""Rules command: list the extraction cascades in evaluation order."""

from typing import Optional

import typer

from donor_parser.cli._app import app
from donor_parser.cli._common import ensure_initialized, setup_logging
from donor_parser.cli._console import output_table, print_err


@app.command("rules", help="List extraction rules per field, in the order they are tried.")
def rules_cmd(
    ctx: typer.Context,
    field: Optional[str] = typer.Option(None, "--field", "-f", help="Only this field (e.g. blood_group)"),
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.extraction.extractors import CASCADES

    if field is not None and field not in CASCADES:
        print_err(f"Unknown field '{field}'. Available: {', '.join(CASCADES)}")
        raise SystemExit(1)

    rows = []
    for field_name, cascade in CASCADES.items():
        if field is not None and field_name != field:
            continue
        for position, rule in enumerate(cascade.rules, start=1):
            rows.append(
                {
                    "field": field_name,
                    "order": position,
                    "rule": rule.name,
                    "description": rule.description,
                }
            )
    output_table(rows, ctx=ctx, title="Extraction rules")
