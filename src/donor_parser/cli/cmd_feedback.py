"""Feedback commands: record user verdicts and review them."""

from typing import Optional

import typer

from donor_parser.cli._app import app
from donor_parser.cli._common import (
    ensure_initialized,
    open_example_store,
    read_text,
    resolve_id,
    setup_logging,
)
from donor_parser.cli._console import output_result, output_table, print_err, print_ok
from donor_parser.storage import ExampleNotFoundError

feedback_app = typer.Typer(
    no_args_is_help=True,
    help="Record and review feedback on live parses (add, list, review, promote).",
)
app.add_typer(feedback_app, name="feedback")

DATA_DIR_OPTION = typer.Option(None, "--data-dir", help="Store root (default: DONOR_PARSER_DATA_DIR)")


@feedback_app.command("add", help="Parse text and record whether the result was correct.")
def feedback_add(
    ctx: typer.Context,
    source: Optional[str] = typer.Argument(None, help="Raw text file (default: stdin)"),
    correct: bool = typer.Option(..., "--correct/--incorrect", help="Verdict on the parse"),
    comment: Optional[str] = typer.Option(None, "--comment", "-c", help="Free-text note"),
    user_id: Optional[str] = typer.Option(None, "--user", help="Who gave the feedback"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.extraction import parse_one
    from donor_parser.schemas import Feedback

    raw_text = read_text(source).strip()
    if not raw_text:
        print_err("Raw text is empty")
        raise SystemExit(1)

    feedback = Feedback(
        raw_text=raw_text,
        parsed_output=parse_one(raw_text).record,
        is_correct=correct,
        comment=comment,
        user_id=user_id,
    )
    open_example_store(data_dir).add_feedback(feedback)

    if ctx.obj["json"]:
        output_result(feedback.model_dump(mode="json", by_alias=True), ctx=ctx)
        return
    print_ok(f"Recorded feedback {feedback.id[:12]}")


@feedback_app.command("list", help="List feedback, newest first.")
def feedback_list(
    ctx: typer.Context,
    pending: bool = typer.Option(False, "--pending", help="Only feedback not yet reviewed"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    items = open_example_store(data_dir).list_feedback(reviewed=False if pending else None)

    if ctx.obj["json"]:
        output_table([f.model_dump(mode="json", by_alias=True) for f in items], ctx=ctx)
        return

    rows = [
        {
            "id": f.id[:12],
            "text": f.raw_text.replace("\n", " | ")[:50],
            "correct": "yes" if f.is_correct else "no",
            "reviewed": "yes" if f.reviewed else "no",
            "comment": f.comment or "",
        }
        for f in items
    ]
    output_table(rows, ctx=ctx, title=f"Feedback ({len(rows)})")


@feedback_app.command("review", help="Mark feedback as reviewed.")
def feedback_review(
    ctx: typer.Context,
    feedback_id: str = typer.Argument(..., help="Feedback id or unique prefix"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    store = open_example_store(data_dir)
    resolved = resolve_id((f.id for f in store.list_feedback()), feedback_id) or feedback_id
    try:
        store.mark_reviewed(resolved)
    except ExampleNotFoundError as e:
        print_err(str(e))
        raise SystemExit(1)
    print_ok(f"Feedback {resolved[:12]} marked reviewed")


@feedback_app.command("promote", help="Turn feedback into a training example with the corrected record.")
def feedback_promote(
    ctx: typer.Context,
    feedback_id: str = typer.Argument(..., help="Feedback id or unique prefix"),
    expected: str = typer.Option(..., "--expected", "-e", help="JSON file with the verified record"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.cli.cmd_examples import load_expected
    from donor_parser.learning import build_example

    store = open_example_store(data_dir)
    resolved = resolve_id((f.id for f in store.list_feedback()), feedback_id) or feedback_id
    feedback = store.get_feedback(resolved)
    if feedback is None:
        print_err(f"Feedback not found: {feedback_id}")
        raise SystemExit(1)

    example = store.add_example(build_example(feedback.raw_text, load_expected(expected)))
    store.mark_reviewed(feedback.id)

    if ctx.obj["json"]:
        output_result(example.model_dump(mode="json", by_alias=True), ctx=ctx)
        return
    print_ok(f"Promoted feedback {feedback.id[:12]} to example {example.id[:12]} (confidence {example.confidence:.2f})")
