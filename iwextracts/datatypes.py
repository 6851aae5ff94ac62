# iwextracts/datatypes.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

# A parsed invocation parameter: trimmed string, or True for a bare flag
ParamValue = Union[str, bool]
Params = dict[str, ParamValue]


class ExtractFormat(str, Enum):
    """
    Output formats an extract can be requested in.
    """

    TEXT = "text"
    HTML = "html"
    WIKI = "wiki"


class RenderHint(str, Enum):
    """
    Tells the host how to treat returned content.
    """

    HTML = "html"  # raw HTML, no further escaping
    WIKITEXT = "wikitext"  # wikitext to be parsed again by the host


@dataclass(frozen=True, slots=True)
class Extract:
    """
    Content returned by the HTML and wikitext fetchers,
    tagged with how the host should render it.
    """

    content: str
    render_hint: RenderHint


@dataclass(frozen=True, slots=True)
class InterwikiPrefix:
    """
    A single row of the interwiki prefix directory.
    api is None (or empty) when the remote site has no known API endpoint.
    """

    prefix: str
    api: str | None
    url: str | None = None  # article path, e.g. "https://en.wikipedia.org/wiki/$1"
