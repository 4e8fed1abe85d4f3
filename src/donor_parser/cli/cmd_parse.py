"""Parse command: extract donor records from pasted text."""

from typing import Optional

import typer

from donor_parser.cli._app import app
from donor_parser.cli._common import ensure_initialized, read_text, setup_logging
from donor_parser.cli._console import console, output_records, output_result, output_trace, print_warn


@app.command("parse", help="Parse donor records from a file or stdin.")
def parse_cmd(
    ctx: typer.Context,
    source: Optional[str] = typer.Argument(None, help="Input file (default: stdin)"),
    many: bool = typer.Option(False, "--many", "-m", help="Input may hold several records separated by blank lines"),
    labeled: bool = typer.Option(False, "--labeled", help="Input is bot-formatted ('Donor Name: ...')"),
    trace: bool = typer.Option(False, "--trace", help="Show the rule-by-rule reasoning trail"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", min=1, help="Parse segments in parallel"),
):
    """Parse one or many donor records."""
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.extraction import ParseTrace, parse_labeled, parse_labeled_many, parse_many, parse_one

    text = read_text(source)
    tracer = ParseTrace() if trace else None

    if labeled:
        records = parse_labeled_many(text, tracer) if many else [parse_labeled(text, tracer)]
        rows = [r.to_wire() for r in records if r.is_usable]
    elif many:
        rows = [r.to_wire() for r in parse_many(text, tracer, workers=workers)]
    else:
        rows = [parse_one(text, tracer).to_wire()]

    if not rows:
        print_warn("Nothing extractable found")

    if ctx.obj["json"]:
        payload = {"records": rows}
        if tracer is not None:
            payload["trace"] = [s.model_dump(mode="json") for s in tracer.build()]
        output_result(payload, ctx=ctx)
        return

    output_records(rows, title=f"Parsed records ({len(rows)})")
    if tracer is not None:
        console.print()
        output_trace(tracer.build())
