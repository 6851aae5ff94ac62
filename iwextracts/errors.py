# iwextracts/errors.py
from __future__ import annotations
from typing import Callable

from iwextracts import config

# Keys identifying the type of error, each backed by a message
GENERIC = "error"
NO_API = "no-api"
MISSING_TITLE = "missing-title"
NO_SUCH_SECTION = "no-such-section"
INVALID_SECTION = "invalid-section"

ERROR_KEYS = (GENERIC, NO_API, MISSING_TITLE, NO_SUCH_SECTION, INVALID_SECTION)

# Remote API error codes with a dedicated key.
# NO_SUCH_SECTION keeps its message but no remote code leads to it.
REMOTE_ERROR_KEYS = {
    "missingtitle": MISSING_TITLE,
    "invalidsection": INVALID_SECTION,
}


class ExtractError(Exception):
    """
    Raised anywhere in the pipeline when an extract cannot be produced.
    Carries only the key of the user-facing message.
    """

    def __init__(self, key: str = GENERIC) -> None:
        super().__init__(key)
        self.key = key

    @property
    def message_name(self) -> str:
        return config.MESSAGE_PREFIX + self.key

    def to_html(self, render_error: Callable[[str], str]) -> str:
        """
        Render the error as a minimal HTML marker for the host page.
        """
        return f'<span class="error">{render_error(self.message_name)}</span>'
