"""Report command: summarize records parsed from a paste."""

from typing import Optional

import typer

from donor_parser.cli._app import app
from donor_parser.cli._common import ensure_initialized, read_text, setup_logging
from donor_parser.cli._console import console, output_result, output_table
from donor_parser.utils.date_parsing import format_date_for_display


@app.command("report", help="Parse a multi-record paste and summarize it.")
def report_cmd(
    ctx: typer.Context,
    source: Optional[str] = typer.Argument(None, help="Input file (default: stdin)"),
    labeled: bool = typer.Option(False, "--labeled", help="Input is bot-formatted ('Donor Name: ...')"),
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.extraction import parse_labeled_many, parse_many
    from donor_parser.reporting import summarize_records

    text = read_text(source)
    if labeled:
        records = parse_labeled_many(text)
    else:
        records = [r.record for r in parse_many(text)]
    summary = summarize_records(records)

    if ctx.obj["json"]:
        output_result(summary.model_dump(mode="json", by_alias=True), ctx=ctx)
        return

    console.print(f"Total donations: {summary.total_records}")
    output_table(
        [{"group": g, "count": c} for g, c in summary.blood_group_breakdown.items()],
        ctx=ctx,
        title="Blood groups",
    )
    output_table([e.model_dump() for e in summary.top_referrers], ctx=ctx, title="Top referrers")
    output_table([e.model_dump() for e in summary.top_hospitals], ctx=ctx, title="Top hospitals")
    output_table(
        [{"day": format_date_for_display(e.label), "count": e.count} for e in summary.daily_trends],
        ctx=ctx,
        title="Daily",
    )
