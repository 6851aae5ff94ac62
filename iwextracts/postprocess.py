# iwextracts/postprocess.py
from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

# <a ... href="/path" ...> with a single leading slash (not protocol-relative)
_ROOT_RELATIVE_HREF_RE = re.compile(r'<a([^>]*)href="/(?!/)([^"]+)"([^>]*)>')
# templatestyles and similar <link> tags injected into extracts
_LINK_TAG_RE = re.compile(r"<link[^>]+>")
_PARAGRAPH_RE = re.compile(r"(<p>.+?</p>)", re.IGNORECASE | re.DOTALL | re.MULTILINE)


def site_root(endpoint: str) -> str:
    """
    Derive "scheme://host" from an API endpoint,
    e.g. https://en.wikipedia.org/w/api.php -> https://en.wikipedia.org
    """
    parts = urlsplit(endpoint)
    # netloc keeps the port and IPv6 brackets; drop any user:password@
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{host}"


def absolutize_links(html: str, endpoint: str) -> str:
    """
    Turn root-relative anchors into absolute links on the remote site.
    Absolute and protocol-relative hrefs are left alone.
    """
    root = site_root(endpoint)
    return _ROOT_RELATIVE_HREF_RE.sub(
        lambda m: f'<a{m.group(1)}href="{root}/{m.group(2)}"{m.group(3)}>', html
    )


def strip_link_tags(text: str) -> str:
    return _LINK_TAG_RE.sub("", text)


def collapse_newlines(text: str) -> str:
    return text.replace("\n", "")


def keep_section(text: str, section: str) -> str:
    """
    Keep only the content between the heading named `section`
    and the next heading of any level.
    If there is no such heading (or it is the last one), the text is returned unchanged.
    """
    pattern = re.compile(
        r".*?<h\d><span[^>]+?>" + re.escape(section) + r"</span></h\d>(.+?)<h\d>.*"
    )
    sliced, found = pattern.subn(r"\1", text, count=1)
    if not found:
        logger.debug("Section %r not found in extract, keeping the whole text", section)
    return sliced


def keep_paragraphs(text: str, count: float) -> str:
    """
    Keep the <p>...</p> blocks whose index is below `count`, concatenated
    (2.5 keeps three, zero or less keeps none).
    Anything outside those blocks is dropped, so text without
    paragraphs comes back empty.
    """
    paragraphs = _PARAGRAPH_RE.findall(text)
    return "".join(p for i, p in enumerate(paragraphs) if i < count)


def clean_text_extract(
    text: str, *, section: str | None = None, paragraphs: float | None = None
) -> str:
    """
    Post-process a TextExtracts extract:
    1. drop <link> tags
    2. remove line breaks
    3. keep only the requested section
    4. keep only the first N paragraphs
    """
    text = strip_link_tags(text)
    text = collapse_newlines(text)
    if section:
        text = keep_section(text, section)
    if paragraphs is not None:
        text = keep_paragraphs(text, paragraphs)
    return text
