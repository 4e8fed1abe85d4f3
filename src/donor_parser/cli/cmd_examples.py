"""Training-example commands: add, list, edit, seed, rescore, delete."""

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from donor_parser.cli._app import app
from donor_parser.cli._common import (
    ensure_initialized,
    open_example_store,
    read_text,
    resolve_id,
    setup_logging,
)
from donor_parser.cli._console import console, output_result, output_table, print_err, print_ok
from donor_parser.schemas.donor import ParsedRecord
from donor_parser.storage import ExampleNotFoundError

examples_app = typer.Typer(
    no_args_is_help=True,
    help="Manage verified training examples (add, list, edit, seed, rescore, delete).",
)
app.add_typer(examples_app, name="examples")

DATA_DIR_OPTION = typer.Option(None, "--data-dir", help="Store root (default: DONOR_PARSER_DATA_DIR)")


def load_expected(path: str) -> ParsedRecord:
    """Read an expected record from a JSON file (wire or Python field names).

    Raises:
        SystemExit: If the file is missing or not a valid record.
    """
    expected_path = Path(path)
    if not expected_path.exists():
        print_err(f"Expected-output file not found: {expected_path}")
        raise SystemExit(1)
    try:
        with open(expected_path, "r", encoding="utf-8") as f:
            return ParsedRecord.model_validate(json.load(f))
    except (json.JSONDecodeError, ValidationError) as e:
        print_err(f"Invalid expected output in {expected_path}: {e}")
        raise SystemExit(1)


@examples_app.command("add", help="Add a verified example (raw text + expected record JSON).")
def examples_add(
    ctx: typer.Context,
    source: Optional[str] = typer.Argument(None, help="Raw text file (default: stdin)"),
    expected: str = typer.Option(..., "--expected", "-e", help="JSON file with the verified record"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.learning import build_example

    raw_text = read_text(source).strip()
    if not raw_text:
        print_err("Raw text is empty")
        raise SystemExit(1)

    example = build_example(raw_text, load_expected(expected))
    open_example_store(data_dir).add_example(example)

    if ctx.obj["json"]:
        output_result(example.model_dump(mode="json", by_alias=True), ctx=ctx)
        return
    verdict = "correct" if example.is_correct else "needs work"
    print_ok(f"Added example {example.id[:12]} (confidence {example.confidence:.2f}, {verdict})")


@examples_app.command("list", help="List training examples, newest first.")
def examples_list(
    ctx: typer.Context,
    correct_only: bool = typer.Option(False, "--correct-only", help="Only examples used for mining"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    store = open_example_store(data_dir)
    examples = store.correct_examples() if correct_only else store.list_examples()

    if ctx.obj["json"]:
        output_table([e.model_dump(mode="json", by_alias=True) for e in examples], ctx=ctx)
        return

    rows = [
        {
            "id": e.id[:12],
            "text": e.raw_text.replace("\n", " | ")[:50],
            "confidence": f"{e.confidence:.2f}",
            "correct": "yes" if e.is_correct else "no",
        }
        for e in examples
    ]
    output_table(rows, ctx=ctx, title=f"Training examples ({len(rows)})")


@examples_app.command("seed", help="Load the packaged seed corpus into the example store.")
def examples_seed(
    ctx: typer.Context,
    seed_file: Optional[str] = typer.Option(None, "--file", help="Alternative seed YAML"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.learning import build_example
    from donor_parser.storage import load_seed_examples

    try:
        pairs = load_seed_examples(Path(seed_file) if seed_file else None)
    except (FileNotFoundError, ValueError) as e:
        print_err(str(e))
        raise SystemExit(1)

    store = open_example_store(data_dir)
    existing = {e.raw_text for e in store.list_examples()}
    added = skipped = correct = 0
    for raw_text, expected in pairs:
        if raw_text in existing:
            skipped += 1
            continue
        example = store.add_example(build_example(raw_text, expected))
        added += 1
        correct += int(example.is_correct)

    summary = {"added": added, "skipped": skipped, "correct": correct}
    if ctx.obj["json"]:
        output_result(summary, ctx=ctx)
        return
    print_ok(f"Seeded {added} examples ({correct} correct, {skipped} already present)")


@examples_app.command("rescore", help="Re-parse every example with the current engine.")
def examples_rescore(
    ctx: typer.Context,
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.learning import rescore_example

    store = open_example_store(data_dir)
    changed = 0
    examples = store.list_examples()
    for example in examples:
        rescored = rescore_example(example)
        if rescored.confidence != example.confidence:
            changed += 1
            if not ctx.obj["json"] and not ctx.obj["quiet"]:
                console.print(
                    f"  {example.id[:12]}: {example.confidence:.2f} -> {rescored.confidence:.2f}"
                )
        store.update_example(rescored)

    if ctx.obj["json"]:
        output_result({"rescored": len(examples), "changed": changed}, ctx=ctx)
        return
    print_ok(f"Rescored {len(examples)} examples ({changed} changed)")


@examples_app.command("delete", help="Delete a training example.")
def examples_delete(
    ctx: typer.Context,
    example_id: str = typer.Argument(..., help="Example id or unique prefix"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    store = open_example_store(data_dir)
    resolved = resolve_id((e.id for e in store.list_examples()), example_id)
    try:
        store.delete_example(resolved or example_id)
    except ExampleNotFoundError as e:
        print_err(str(e))
        raise SystemExit(1)
    print_ok(f"Deleted example {(resolved or example_id)[:12]}")


@examples_app.command("edit", help="Edit an example's raw text and/or expected record, then rescore it.")
def examples_edit(
    ctx: typer.Context,
    example_id: str = typer.Argument(..., help="Example id or unique prefix"),
    source: Optional[str] = typer.Argument(None, help="New raw text file ('-' for stdin)"),
    expected: Optional[str] = typer.Option(None, "--expected", "-e", help="JSON file with the corrected record"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.learning import update_example

    if source is None and expected is None:
        print_err("Nothing to edit: pass a raw text file and/or --expected")
        raise SystemExit(1)

    store = open_example_store(data_dir)
    resolved = resolve_id((e.id for e in store.list_examples()), example_id)
    example = store.get_example(resolved or example_id)
    if example is None:
        print_err(f"Example not found: {example_id}")
        raise SystemExit(1)

    raw_text = None
    if source is not None:
        raw_text = read_text(source).strip()
        if not raw_text:
            print_err("Raw text is empty")
            raise SystemExit(1)
    expected_output = load_expected(expected) if expected else None

    edited = store.update_example(update_example(example, raw_text=raw_text, expected_output=expected_output))

    if ctx.obj["json"]:
        output_result(edited.model_dump(mode="json", by_alias=True), ctx=ctx)
        return
    verdict = "correct" if edited.is_correct else "needs work"
    print_ok(
        f"Updated example {edited.id[:12]}: confidence {example.confidence:.2f} -> "
        f"{edited.confidence:.2f} ({verdict})"
    )
