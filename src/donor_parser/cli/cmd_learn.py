"""Learn command: mine patterns from the training corpus."""

from typing import Optional

import typer

from donor_parser.cli._app import app
from donor_parser.cli._common import (
    ensure_initialized,
    open_example_store,
    open_pattern_store,
    setup_logging,
)
from donor_parser.cli._console import console, output_result, print_ok, print_warn


@app.command("learn", help="Mine extraction patterns from correct training examples.")
def learn_cmd(
    ctx: typer.Context,
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="Store root (default: DONOR_PARSER_DATA_DIR)"),
):
    """Run a mining pass and upsert the scored patterns."""
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from donor_parser.learning import PatternLearner

    examples = open_example_store(data_dir)
    patterns = open_pattern_store(data_dir)
    result = PatternLearner(examples.correct_examples, patterns).learn()

    if ctx.obj["json"]:
        output_result(result.model_dump(mode="json", by_alias=True), ctx=ctx)
        return

    stats = result.statistics
    if stats.total_examples == 0:
        print_warn("No correct training examples to learn from")
        return

    print_ok(f"Learned {result.patterns_learned} patterns from {stats.total_examples} examples")
    if not ctx.obj["quiet"]:
        console.print(f"  Regex:       {stats.regex_patterns}")
        console.print(f"  Positional:  {stats.positional_patterns}")
        console.print(f"  Keyword:     {stats.keyword_patterns}")
        console.print(f"  Avg confidence: {stats.average_confidence:.2f}")
