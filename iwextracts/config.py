# iwextracts/config.py
from __future__ import annotations

# Remote API etiquette
DEFAULT_UA = (
    "iwextracts/4.2 (https://www.mediawiki.org/wiki/Extension:InterwikiExtracts)"
)
DEFAULT_TIMEOUT: float | None = None  # no timeout unless the caller asks for one

# Invocation defaults
DEFAULT_WIKI = "wikipedia"
DEFAULT_FORMAT = "html"

# Message names are looked up as MESSAGE_PREFIX + error key
MESSAGE_PREFIX = "interwikiextracts-"
