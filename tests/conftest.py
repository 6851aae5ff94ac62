from unittest.mock import MagicMock

import pytest
import requests

from iwextracts.directory import StaticInterwikiDirectory

WIKIPEDIA_API = "https://en.wikipedia.org/w/api.php"


def make_response(payload=None, *, status_error=None, json_error=None):
    """Build a fake requests.Response returning `payload` from .json()."""
    resp = MagicMock()
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def session():
    """A fake requests.Session; set session.get.return_value per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def directory():
    return StaticInterwikiDirectory(
        [
            {"prefix": "wikipedia", "api": WIKIPEDIA_API},
            {"prefix": "nolink", "api": ""},
            {"prefix": "dup", "api": "https://first.example/w/api.php"},
            {"prefix": "dup", "api": "https://second.example/w/api.php"},
        ]
    )
