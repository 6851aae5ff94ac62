# iwextracts/cli/prefixes.py
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from iwextracts import config
from iwextracts.cli.generic import PrefixesOption, SiteinfoOption, TimeoutOption
from iwextracts.datatypes import InterwikiPrefix
from iwextracts.directory import InterwikiDirectory, StaticInterwikiDirectory, lookup_api
from iwextracts.errors import ExtractError
from iwextracts.messages import render_message
from iwextracts.utils import open_directory

prefixes_app = typer.Typer(add_completion=False, no_args_is_help=True)


def _read_prefixes(directory: InterwikiDirectory) -> list[InterwikiPrefix]:
    """
    Read every row of the directory, exiting with the error message
    if a remote interwiki map cannot be fetched.
    """
    try:
        return list(directory.get_all_prefixes())
    except ExtractError as error:
        print(Panel.fit(f"[bold red]{escape(render_message(error.message_name))}[/bold red]"))
        raise typer.Exit(code=1)


@prefixes_app.command("list")
def prefixes_list(
    prefixes: Optional[Path] = PrefixesOption,
    siteinfo: Optional[str] = SiteinfoOption,
    timeout: Optional[float] = TimeoutOption,
    with_api: bool = typer.Option(
        False, "--with-api", help="Only show prefixes that have an API endpoint"
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of table"),
) -> None:
    """
    List the interwiki prefixes known to the directory, in lookup order.
    """
    directory = open_directory(prefixes, siteinfo, timeout)
    rows = [row for row in _read_prefixes(directory) if row.api or not with_api]

    if json_out:
        typer.echo(json.dumps([asdict(row) for row in rows], indent=2, ensure_ascii=False))
        return

    table = Table(title="Interwiki prefixes")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Prefix")
    table.add_column("API endpoint")
    table.add_column("URL")
    for index, row in enumerate(rows, start=1):
        table.add_row(str(index), row.prefix, row.api or "", row.url or "")
    if not rows:
        table.caption = "[bold yellow]No prefixes found.[/bold yellow]"
    print(table)


@prefixes_app.command("resolve")
def prefixes_resolve(
    name: str = typer.Argument(config.DEFAULT_WIKI, help="Interwiki prefix to look up"),
    prefixes: Optional[Path] = PrefixesOption,
    siteinfo: Optional[str] = SiteinfoOption,
    timeout: Optional[float] = TimeoutOption,
) -> None:
    """
    Show which API endpoint an interwiki prefix resolves to.
    """
    directory = open_directory(prefixes, siteinfo, timeout)
    api = lookup_api(StaticInterwikiDirectory(_read_prefixes(directory)), name)
    if not api:
        print(Panel.fit(f"[bold red]No API endpoint for prefix:[/bold red] {name!r}"))
        raise typer.Exit(code=1)
    typer.echo(api)
