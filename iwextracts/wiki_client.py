# iwextracts/wiki_client.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Union

import requests

from iwextracts import config
from iwextracts.datatypes import Extract, ParamValue, RenderHint
from iwextracts.errors import (
    GENERIC,
    MISSING_TITLE,
    REMOTE_ERROR_KEYS,
    ExtractError,
)
from iwextracts.params import get_str
from iwextracts.postprocess import absolutize_links, clean_text_extract

logger = logging.getLogger(__name__)

QueryValue = Union[str, int, bool, None]

# TextExtracts parameters passed through from the invocation: ours -> remote
TEXT_PASSTHROUGH = {
    "chars": "exchars",
    "sentences": "exsentences",
    "intro": "exintro",
    "plaintext": "explaintext",
    "sectionformat": "exsectionformat",
}


def serialize_query(query: Mapping[str, QueryValue]) -> dict[str, str | int]:
    """
    Drop unset values (None, "", False) and send True as 1,
    the way PHP's http_build_query does.
    """
    out: dict[str, str | int] = {}
    for key, value in query.items():
        if value is None or value == "" or value is False:
            continue
        out[key] = 1 if value is True else value
    return out


def _parse_query(title: str, params: Mapping[str, ParamValue], prop: str) -> dict[str, QueryValue]:
    """
    Base action=parse query shared by the HTML and wikitext formats.
    """
    query: dict[str, QueryValue] = {
        "action": "parse",
        "format": "json",
        "formatversion": 2,
        "prop": prop,
        "redirects": 1,
    }
    section = get_str(params, "section")
    if section is not None:
        query["section"] = section

    # oldid and page are incompatible
    oldid = get_str(params, "oldid")
    if oldid is not None:
        query["oldid"] = oldid
    else:
        query["page"] = title
    return query


def build_html_query(title: str, params: Mapping[str, ParamValue]) -> dict[str, QueryValue]:
    """
    See https://en.wikipedia.org/w/api.php?action=parse&formatversion=2&prop=text&page=Science
    """
    query = _parse_query(title, params, "text")
    query["disableeditsection"] = 1
    return query


def build_wiki_query(title: str, params: Mapping[str, ParamValue]) -> dict[str, QueryValue]:
    """
    See https://en.wikipedia.org/w/api.php?action=parse&formatversion=2&prop=wikitext&page=Science
    """
    return _parse_query(title, params, "wikitext")


def build_text_query(title: str, params: Mapping[str, ParamValue]) -> dict[str, QueryValue]:
    """
    See https://en.wikipedia.org/w/api.php?action=query&prop=extracts&exlimit=1&formatversion=2&titles=Science
    """
    query: dict[str, QueryValue] = {
        "action": "query",
        "titles": title,
        "prop": "extracts",
    }
    for ours, theirs in TEXT_PASSTHROUGH.items():
        query[theirs] = params.get(ours)
    query.update(
        {
            "exlimit": 1,
            "redirects": True,
            "format": "json",
            "formatversion": 2,
        }
    )
    return serialize_query(query)


def _as_dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, dict) else {}


def _first_page(content: Mapping[str, Any]) -> Mapping[str, Any]:
    pages = _as_dict(content.get("query")).get("pages")
    if isinstance(pages, list) and pages:
        return _as_dict(pages[0])
    return {}


def extract_content(content: Any) -> str:
    """
    Pick the relevant field out of a decoded API response,
    or raise the ExtractError matching what went wrong.
    Only string fields count as content; any other shape is a generic error.
    """
    if not content or not isinstance(content, dict):
        raise ExtractError(GENERIC)

    # First assume everything went ok
    parse = _as_dict(content.get("parse"))
    page = _first_page(content)
    for field in (parse.get("text"), parse.get("wikitext"), page.get("extract")):
        if isinstance(field, str):
            return field

    # If we get to this point, something went wrong
    error = _as_dict(content.get("error"))
    code = error.get("code")
    if isinstance(code, str):
        logger.warning("Remote API error %r: %s", code, error.get("info", ""))
        if code in REMOTE_ERROR_KEYS:
            raise ExtractError(REMOTE_ERROR_KEYS[code])
    if page.get("missing") is not None:
        raise ExtractError(MISSING_TITLE)
    raise ExtractError(GENERIC)


def _paragraph_count(value: ParamValue | None) -> float | None:
    """
    How many paragraphs to keep: paragraph i survives while i < count.
    A bare flag means one paragraph; "0", empty or non-numeric values mean no limit.
    """
    if value is True:
        return 1
    if isinstance(value, str) and value not in ("", "0"):
        try:
            return float(value)
        except ValueError:
            logger.debug("Ignoring non-numeric paragraphs=%r", value)
    return None


class InterwikiClient:
    """
    Fetches extracts from a remote MediaWiki API.
    Identifies itself with a fixed user agent, as Wikimedia etiquette asks.
    """

    def __init__(
        self,
        user_agent: str = config.DEFAULT_UA,
        *,
        session: requests.Session | None = None,
        timeout: float | None = config.DEFAULT_TIMEOUT,
    ) -> None:
        self.user_agent = user_agent
        # None: a one-off requests.get per call, so no cookies carry over
        self.session = session
        self.timeout = timeout

    def request_url(self, api: str, query: Mapping[str, QueryValue]) -> str:
        """
        The full GET URL for a query, without sending it.
        """
        prepared = requests.Request(
            "GET", api, params=serialize_query(query)
        ).prepare()
        return prepared.url or api

    def query_interwiki(self, api: str, query: Mapping[str, QueryValue]) -> str:
        """
        Query the given API endpoint and return the relevant content
        (HTML, wikitext or text extract).
        """
        params = serialize_query(query)
        logger.debug("GET %s %s", api, params)
        try:
            http = self.session or requests
            resp = http.get(
                api,
                params=params,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", api, exc)
            raise ExtractError(GENERIC) from exc

        try:
            content = resp.json()
        except ValueError as exc:
            logger.warning("Response from %s is not valid JSON", api)
            raise ExtractError(GENERIC) from exc

        return extract_content(content)

    def get_html(self, api: str, title: str, params: Mapping[str, ParamValue]) -> Extract:
        """
        Get the rendered HTML of a page, with relative links made absolute.
        """
        html = self.query_interwiki(api, build_html_query(title, params))
        return Extract(content=absolutize_links(html, api), render_hint=RenderHint.HTML)

    def get_wiki(self, api: str, title: str, params: Mapping[str, ParamValue]) -> Extract:
        """
        Get the wikitext of a page, to be parsed again by the host.
        """
        wikitext = self.query_interwiki(api, build_wiki_query(title, params))
        return Extract(content=wikitext, render_hint=RenderHint.WIKITEXT)

    def get_text(self, api: str, title: str, params: Mapping[str, ParamValue]) -> str:
        """
        Get a TextExtracts extract, optionally cut down to one section
        and/or the first N paragraphs.
        """
        text = self.query_interwiki(api, build_text_query(title, params))
        return clean_text_extract(
            text,
            section=get_str(params, "section"),
            paragraphs=_paragraph_count(params.get("paragraphs")),
        )
