# iwextracts/directory.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, Sequence

import requests

from iwextracts import config
from iwextracts.datatypes import InterwikiPrefix, Params, ParamValue
from iwextracts.errors import NO_API, ExtractError, GENERIC
from iwextracts.params import get_str, split_params

logger = logging.getLogger(__name__)


class InterwikiDirectory(Protocol):
    """
    Anything that can list the configured interwiki prefixes.
    Iteration order is authoritative: the first matching prefix wins.
    """

    def get_all_prefixes(self) -> Sequence[InterwikiPrefix]: ...


def _row_to_prefix(row: InterwikiPrefix | Mapping[str, Any]) -> InterwikiPrefix:
    """
    Accept either InterwikiPrefix objects or dict rows, using our field names
    or MediaWiki's interwiki table columns (iw_prefix, iw_api, iw_url).
    """
    if isinstance(row, InterwikiPrefix):
        return row
    if not isinstance(row, Mapping):
        raise ValueError(f"Interwiki row must be an object: {row!r}")
    prefix = row.get("prefix", row.get("iw_prefix"))
    if not isinstance(prefix, str):
        raise ValueError(f"Interwiki row without a prefix: {row!r}")
    api = _str_or_none(row.get("api", row.get("iw_api")))
    url = _str_or_none(row.get("url", row.get("iw_url")))
    return InterwikiPrefix(prefix=prefix, api=api, url=url)


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


class StaticInterwikiDirectory:
    """
    In-memory prefix directory, e.g. loaded from a JSON file.
    """

    def __init__(self, rows: Iterable[InterwikiPrefix | Mapping[str, Any]] = ()) -> None:
        self._rows = tuple(_row_to_prefix(row) for row in rows)

    def get_all_prefixes(self) -> Sequence[InterwikiPrefix]:
        return self._rows


class SiteInfoInterwikiDirectory:
    """
    Prefix directory read from a wiki's own interwiki map
    (action=query&meta=siteinfo&siprop=interwikimap).
    The map is fetched on first use and kept for the lifetime of the instance.
    """

    def __init__(
        self,
        api: str,
        *,
        session: requests.Session | None = None,
        user_agent: str = config.DEFAULT_UA,
        timeout: float | None = config.DEFAULT_TIMEOUT,
    ) -> None:
        self.api = api
        self.session = session
        self.user_agent = user_agent
        self.timeout = timeout
        self._rows: tuple[InterwikiPrefix, ...] | None = None

    def get_all_prefixes(self) -> Sequence[InterwikiPrefix]:
        if self._rows is None:
            self._rows = tuple(self._fetch())
        return self._rows

    def _fetch(self) -> list[InterwikiPrefix]:
        params = {
            "action": "query",
            "meta": "siteinfo",
            "siprop": "interwikimap",
            "format": "json",
            "formatversion": 2,
        }
        logger.debug("Fetching interwiki map from %s", self.api)
        try:
            http = self.session or requests
            resp = http.get(
                self.api,
                params=params,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Could not read interwiki map from %s: %s", self.api, exc)
            raise ExtractError(GENERIC) from exc

        query = data.get("query") if isinstance(data, dict) else None
        rows = query.get("interwikimap") if isinstance(query, dict) else None
        if not isinstance(rows, list):
            rows = []
        return [
            InterwikiPrefix(
                prefix=row["prefix"],
                api=_str_or_none(row.get("api")),
                url=_str_or_none(row.get("url")),
            )
            for row in rows
            if isinstance(row, dict) and isinstance(row.get("prefix"), str)
        ]


def load_directory(path: str | Path) -> StaticInterwikiDirectory:
    """
    Load a prefix directory from a JSON file holding a list of rows, e.g.
    [{"prefix": "wikipedia", "api": "https://en.wikipedia.org/w/api.php"}]
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of interwiki rows")
    return StaticInterwikiDirectory(data)


def lookup_api(directory: InterwikiDirectory, wiki: str) -> str | None:
    """
    Return the API endpoint of the first prefix equal to `wiki`, if any.
    """
    for row in directory.get_all_prefixes():
        if row.prefix == wiki:
            return row.api or None
    return None


def resolve_endpoint(
    params: Mapping[str, ParamValue], directory: InterwikiDirectory
) -> tuple[str, Params]:
    """
    Decide which API endpoint to query.
    An explicit `api` parameter wins and the directory is not consulted;
    otherwise `wiki` (default "wikipedia") is looked up in the directory.
    Returns the endpoint and the params without `api` and `wiki`.
    """
    taken, rest = split_params(params, ("api", "wiki"))

    api = get_str(taken, "api")
    if api:
        logger.debug("Using explicit API endpoint %s", api)
        return api, rest

    wiki = taken.get("wiki", config.DEFAULT_WIKI)
    api = lookup_api(directory, wiki) if isinstance(wiki, str) else None
    if not api:
        logger.debug("No API endpoint for interwiki prefix %r", wiki)
        raise ExtractError(NO_API)

    logger.debug("Resolved interwiki prefix %r to %s", wiki, api)
    return api, rest
