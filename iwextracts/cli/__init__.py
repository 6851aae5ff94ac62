# iwextracts/cli/__init__.py
from __future__ import annotations
from iwextracts.cli.generic import app
from iwextracts.cli.prefixes import prefixes_app

app.add_typer(prefixes_app, name="prefixes", help="Interwiki prefix directory")

# Expose the main app only
__all__ = ["app"]
