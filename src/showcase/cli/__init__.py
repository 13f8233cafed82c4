"""
CLI layer for the showcase site.

Provides a Typer application whose sub-commands delegate to the access
layer (``showcase.core``) and the derived operations (``showcase.ops``).
This package handles only terminal transport: argument parsing, coloured
output, and table formatting.

Entry point::

    showcase --help
"""

from showcase.cli.app import app

__all__ = ["app"]
