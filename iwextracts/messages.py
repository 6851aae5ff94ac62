# iwextracts/messages.py
from __future__ import annotations
from typing import Mapping

from iwextracts import config

# English fallback catalog, keyed by full message name
MESSAGES: dict[str, str] = {
    config.MESSAGE_PREFIX + "error": "Error: the extract could not be retrieved.",
    config.MESSAGE_PREFIX + "no-api": "Error: no API endpoint could be found for the requested wiki.",
    config.MESSAGE_PREFIX + "missing-title": "Error: the requested page does not exist on the remote wiki.",
    config.MESSAGE_PREFIX + "no-such-section": "Error: the requested section does not exist.",
    config.MESSAGE_PREFIX + "invalid-section": "Error: the requested section is invalid.",
}


def render_message(name: str, catalog: Mapping[str, str] = MESSAGES) -> str:
    """
    Look up a message by name.
    Unknown names render as ⧼name⧽, the way MediaWiki shows missing messages.
    """
    return catalog.get(name, f"⧼{name}⧽")
