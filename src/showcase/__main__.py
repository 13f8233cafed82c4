"""Allow ``python -m showcase``."""

from showcase.cli.app import app

app()
