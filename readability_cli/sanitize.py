"""HTML sanitization for everything we emit, unless --insane is given."""

import re

from lxml.etree import ParserError
from lxml_html_clean import Cleaner

XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.I)

# Drop executable markup only; leave structure, styling and links alone
_cleaner = Cleaner(
    scripts=True,
    javascript=True,
    comments=True,
    style=False,
    inline_style=False,
    links=False,
    meta=False,
    page_structure=False,
    processing_instructions=True,
    embedded=True,
    frames=True,
    forms=False,
    annoying_tags=False,
    remove_unknown_tags=False,
    safe_attrs_only=False,
)


def sanitize(html: str) -> str:
    """Strip scripts, event handlers, javascript: URLs, frames and embeds."""
    html = XML_DECLARATION.sub("", html)
    if not html.strip():
        return ""
    try:
        return _cleaner.clean_html(html)
    except ParserError:
        # No elements at all (comments only), so nothing executable to strip
        return html
