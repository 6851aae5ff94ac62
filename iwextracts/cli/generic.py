# iwextracts/cli/generic.py
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.markup import escape
from rich.panel import Panel

from iwextracts import config
from iwextracts.datatypes import Extract, ExtractFormat
from iwextracts.directory import resolve_endpoint
from iwextracts.errors import ExtractError
from iwextracts.extract import InterwikiExtractor, select_format
from iwextracts.messages import render_message
from iwextracts.params import parse_params
from iwextracts.utils import configure_logging, open_directory
from iwextracts.wiki_client import (
    InterwikiClient,
    build_html_query,
    build_text_query,
    build_wiki_query,
)

app = typer.Typer(add_completion=False, no_args_is_help=True)

PrefixesOption = typer.Option(
    None,
    "--prefixes",
    envvar="IWEXTRACTS_PREFIXES",
    help="JSON file with interwiki rows [{prefix, api}]",
)
SiteinfoOption = typer.Option(
    None, "--siteinfo", help="Read interwiki prefixes from this wiki's API endpoint"
)
TimeoutOption = typer.Option(
    config.DEFAULT_TIMEOUT,
    "--timeout",
    envvar="IWEXTRACTS_TIMEOUT",
    help="HTTP timeout in seconds (default: none)",
)


@app.command()
def extract(
    title: str = typer.Argument(..., help='Remote page title ("" = use --default-title)'),
    params: Optional[List[str]] = typer.Argument(
        None, help='Parameters such as wiki=wikipedia format=text paragraphs=2'
    ),
    default_title: str = typer.Option("", help="Title used when TITLE is empty"),
    default_format: ExtractFormat = typer.Option(
        ExtractFormat(config.DEFAULT_FORMAT),
        "--format-default",
        help="Format used when none is given",
    ),
    prefixes: Optional[Path] = PrefixesOption,
    siteinfo: Optional[str] = SiteinfoOption,
    timeout: Optional[float] = TimeoutOption,
    json_out: bool = typer.Option(False, "--json", help="Emit JSON output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """
    Fetch an extract of a page on another wiki, as the parser function would.
    """
    configure_logging(verbose)
    extractor = InterwikiExtractor(
        open_directory(prefixes, siteinfo, timeout),
        client=InterwikiClient(timeout=timeout),
        default_format=default_format,
    )
    title = title.strip() or default_title

    try:
        result = extractor.extract(title, parse_params(params or []))
    except ExtractError as error:
        message = render_message(error.message_name)
        if json_out:
            typer.echo(json.dumps({"error": error.key, "message": message}, ensure_ascii=False))
        else:
            print(Panel.fit(f"[bold red]{escape(message)}[/bold red] ({error.key})"))
        raise typer.Exit(code=1)

    if isinstance(result, Extract):
        content, hint = result.content, result.render_hint.value
    else:
        content, hint = result, None

    if json_out:
        typer.echo(
            json.dumps(
                {"title": title, "render_hint": hint, "content": content},
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        # Raw content goes to stdout untouched so it can be piped
        typer.echo(content)


@app.command()
def query(
    title: str = typer.Argument(..., help="Remote page title"),
    params: Optional[List[str]] = typer.Argument(None, help="Parameters as for extract"),
    default_format: ExtractFormat = typer.Option(
        ExtractFormat(config.DEFAULT_FORMAT),
        "--format-default",
        help="Format used when none is given",
    ),
    prefixes: Optional[Path] = PrefixesOption,
    siteinfo: Optional[str] = SiteinfoOption,
    timeout: Optional[float] = TimeoutOption,
) -> None:
    """
    Show the remote API request an extract would make, without sending it.
    """
    directory = open_directory(prefixes, siteinfo, timeout)
    try:
        api, rest = resolve_endpoint(parse_params(params or []), directory)
    except ExtractError as error:
        print(Panel.fit(f"[bold red]{escape(render_message(error.message_name))}[/bold red]"))
        raise typer.Exit(code=1)

    extract_format, rest = select_format(rest, ExtractFormat(default_format))
    builders = {
        ExtractFormat.HTML: build_html_query,
        ExtractFormat.WIKI: build_wiki_query,
        ExtractFormat.TEXT: build_text_query,
    }
    remote_query = builders[extract_format](title, rest)
    typer.echo(InterwikiClient().request_url(api, remote_query))
