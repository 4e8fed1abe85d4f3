"""Pattern commands: inspect and toggle mined patterns."""

from typing import Optional

import typer

from donor_parser.cli._app import app
from donor_parser.cli._common import ensure_initialized, open_pattern_store, resolve_id, setup_logging
from donor_parser.cli._console import output_table, print_err, print_ok
from donor_parser.storage import PatternNotFoundError

patterns_app = typer.Typer(
    no_args_is_help=True,
    help="Inspect and manage learned patterns (list, enable, disable, delete).",
)
app.add_typer(patterns_app, name="patterns")

DATA_DIR_OPTION = typer.Option(None, "--data-dir", help="Store root (default: DONOR_PARSER_DATA_DIR)")


@patterns_app.command("list", help="List learned patterns, best first.")
def patterns_list(
    ctx: typer.Context,
    field: Optional[str] = typer.Option(None, "--field", "-f", help="Only this field (wire name, e.g. bloodGroup)"),
    pattern_type: Optional[str] = typer.Option(None, "--type", "-t", help="regex, positional or keyword"),
    enabled_only: bool = typer.Option(False, "--enabled-only", help="Hide disabled patterns"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    store = open_pattern_store(data_dir)
    patterns = store.list(field=field, pattern_type=pattern_type, enabled_only=enabled_only)

    if ctx.obj["json"]:
        output_table([p.model_dump(mode="json", by_alias=True) for p in patterns], ctx=ctx)
        return

    rows = [
        {
            "id": p.id[:12],
            "type": p.key[0],
            "field": p.field,
            "success": f"{p.success_rate:.2f}",
            "usage": p.usage_count,
            "enabled": "yes" if p.is_enabled else "no",
            "pattern": p.pattern if len(p.pattern) <= 60 else p.pattern[:57] + "...",
        }
        for p in patterns
    ]
    output_table(rows, ctx=ctx, title=f"Learned patterns ({len(rows)})")


def _resolve_id(store, prefix: str) -> str:
    return resolve_id((p.id for p in store.list()), prefix) or prefix


def _set_enabled(ctx: typer.Context, pattern_id: str, enabled: bool, data_dir: Optional[str]) -> None:
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    store = open_pattern_store(data_dir)
    try:
        pattern = store.set_enabled(_resolve_id(store, pattern_id), enabled)
    except PatternNotFoundError as e:
        print_err(str(e))
        raise SystemExit(1)
    print_ok(f"Pattern {pattern.id[:12]} {'enabled' if enabled else 'disabled'}")


@patterns_app.command("enable", help="Enable a pattern (human override).")
def patterns_enable(
    ctx: typer.Context,
    pattern_id: str = typer.Argument(..., help="Pattern id or unique prefix"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    _set_enabled(ctx, pattern_id, True, data_dir)


@patterns_app.command("disable", help="Disable a pattern (human override).")
def patterns_disable(
    ctx: typer.Context,
    pattern_id: str = typer.Argument(..., help="Pattern id or unique prefix"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    _set_enabled(ctx, pattern_id, False, data_dir)


@patterns_app.command("delete", help="Delete a pattern.")
def patterns_delete(
    ctx: typer.Context,
    pattern_id: str = typer.Argument(..., help="Pattern id or unique prefix"),
    data_dir: Optional[str] = DATA_DIR_OPTION,
):
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    store = open_pattern_store(data_dir)
    try:
        resolved = _resolve_id(store, pattern_id)
        store.delete(resolved)
    except PatternNotFoundError as e:
        print_err(str(e))
        raise SystemExit(1)
    print_ok(f"Deleted pattern {resolved[:12]}")
