# utils.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from iwextracts.directory import (
    InterwikiDirectory,
    SiteInfoInterwikiDirectory,
    StaticInterwikiDirectory,
    load_directory,
)


def configure_logging(verbose: bool) -> None:
    """
    Route library logging through rich when --verbose is given.
    Without it only warnings are shown.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def open_directory(
    prefixes: Optional[Path], siteinfo: Optional[str], timeout: Optional[float]
) -> InterwikiDirectory:
    """
    Build the interwiki directory the CLI should use.
    A prefix file takes precedence over a wiki's siteinfo; with neither,
    the directory is empty and only explicit api= works.
    """
    if prefixes is not None:
        try:
            return load_directory(prefixes)
        except (OSError, ValueError) as exc:
            raise typer.BadParameter(str(exc), param_hint="--prefixes") from exc
    if siteinfo:
        return SiteInfoInterwikiDirectory(siteinfo, timeout=timeout)
    return StaticInterwikiDirectory()
