"""Allow ``python -m donor_parser.cli``."""

from donor_parser.cli import app

app()
