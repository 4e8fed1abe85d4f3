"""CLI package: Typer-based command-line interface.

Usage:
    donor-parser --help
    donor-parser parse --many paste.txt
"""

from donor_parser.cli._app import app

# Register command modules (side-effect imports)
import donor_parser.cli.cmd_parse  # noqa: F401
import donor_parser.cli.cmd_learn  # noqa: F401
import donor_parser.cli.cmd_patterns  # noqa: F401
import donor_parser.cli.cmd_examples  # noqa: F401
import donor_parser.cli.cmd_feedback  # noqa: F401
import donor_parser.cli.cmd_report  # noqa: F401
import donor_parser.cli.cmd_rules  # noqa: F401

__all__ = ["app"]
