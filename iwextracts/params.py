# iwextracts/params.py
from __future__ import annotations
from typing import Iterable, Mapping

from iwextracts.datatypes import Params, ParamValue


def parse_params(tokens: Iterable[str]) -> Params:
    """
    Convert raw parser-function arguments of the form "name=value"
    into a mapping {name: value}.
    A token without "=" is a bare flag and maps to True.
    Whitespace around names and values is trimmed; the last duplicate wins.
    """
    params: Params = {}
    for token in tokens:
        pair = [part.strip() for part in str(token).split("=", 1)]
        if len(pair) == 2:
            params[pair[0]] = pair[1]
        else:
            params[pair[0]] = True
    return params


def split_params(
    params: Mapping[str, ParamValue], keys: Iterable[str]
) -> tuple[Params, Params]:
    """
    Split params into (taken, rest) without touching the input mapping.
    """
    wanted = set(keys)
    taken = {k: v for k, v in params.items() if k in wanted}
    rest = {k: v for k, v in params.items() if k not in wanted}
    return taken, rest


def get_str(params: Mapping[str, ParamValue], key: str) -> str | None:
    """
    Return the string value of a parameter, or None if it is absent,
    empty, or a bare flag.
    """
    value = params.get(key)
    if isinstance(value, str) and value:
        return value
    return None
