# iwextracts/extract.py
from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping, Union

from iwextracts import config
from iwextracts.datatypes import Extract, ExtractFormat, Params, ParamValue
from iwextracts.directory import InterwikiDirectory, resolve_endpoint
from iwextracts.errors import ExtractError
from iwextracts.messages import render_message
from iwextracts.params import parse_params, split_params
from iwextracts.wiki_client import InterwikiClient

logger = logging.getLogger(__name__)

ExtractResult = Union[str, Extract]


def select_format(
    params: Mapping[str, ParamValue], default: ExtractFormat
) -> tuple[ExtractFormat, Params]:
    """
    Read the `format` parameter (case-insensitive).
    Unknown or missing formats leave the default in effect.
    """
    taken, rest = split_params(params, ("format",))
    value = taken.get("format")
    if isinstance(value, str):
        try:
            return ExtractFormat(value.lower()), rest
        except ValueError:
            logger.debug("Ignoring unknown format %r", value)
    return default, rest


class InterwikiExtractor:
    """
    Entry point for the host: turns one parser-function call
    (title + raw "name=value" tokens) into an extract or an error marker.
    """

    def __init__(
        self,
        directory: InterwikiDirectory,
        *,
        client: InterwikiClient | None = None,
        render_error: Callable[[str], str] = render_message,
        default_format: ExtractFormat | str = config.DEFAULT_FORMAT,
    ) -> None:
        self.directory = directory
        self.client = client or InterwikiClient()
        self.render_error = render_error
        self.default_format = ExtractFormat(default_format)

    def extract(self, title: str, params: Mapping[str, ParamValue]) -> ExtractResult:
        """
        Resolve the endpoint and format, then fetch the extract.
        Raises ExtractError on any failure.
        """
        api, params = resolve_endpoint(params, self.directory)
        extract_format, params = select_format(params, self.default_format)
        logger.debug("Extracting %r as %s from %s", title, extract_format.value, api)

        if extract_format is ExtractFormat.HTML:
            return self.client.get_html(api, title, params)
        if extract_format is ExtractFormat.WIKI:
            return self.client.get_wiki(api, title, params)
        return self.client.get_text(api, title, params)

    def invoke(
        self, title: str | None, tokens: Iterable[str], *, default_title: str = ""
    ) -> ExtractResult:
        """
        Same as calling the extractor, with the tokens as one iterable.
        """
        title = (title or "").strip() or default_title
        try:
            return self.extract(title, parse_params(tokens))
        except ExtractError as error:
            logger.info("Extract of %r failed: %s", title, error.key)
            return error.to_html(self.render_error)

    def __call__(
        self, title: str | None = None, *tokens: str, default_title: str = ""
    ) -> ExtractResult:
        return self.invoke(title, tokens, default_title=default_title)
